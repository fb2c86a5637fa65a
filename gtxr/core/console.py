"""
ⒸAngelaMos | 2026
console.py
"""
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

console = Console(highlight = False, soft_wrap = True)


def ok(message: str) -> None:
    console.print(f"[green]✓ {escape(message)}[/green]")


def info(message: str) -> None:
    console.print(f"[cyan]ℹ {escape(message)}[/cyan]")


def warn(message: str) -> None:
    console.print(f"[yellow]⚠ {escape(message)}[/yellow]")


def error(message: str) -> None:
    console.print(f"[red]✗ {escape(message)}[/red]")


def header(text: str) -> None:
    """
    Boxed section title
    """
    console.print()
    console.print(Panel.fit(f" {escape(text)} ", style = "bold magenta"))
    console.print()


def ask(question: str) -> str:
    """
    Read one line of input, trimmed
    End of input counts as an empty answer
    """
    try:
        return console.input(escape(question)).strip()
    except EOFError:
        return ""
