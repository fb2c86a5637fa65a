"""
ⒸAngelaMos | 2026
cli.py
"""
from __future__ import annotations

import sys
from collections.abc import Sequence

import click
import yaml

from gtxr.core import ConfigStore, configure_logging, get_logger, load_settings
from gtxr.core.console import console, error, info
from gtxr.models import CliOptions

logger = get_logger("cli")

SUBCOMMANDS = ("setup", "upgrade", "uninstall")


@click.command(
    name="gtxr",
    add_help_option=False,
    context_settings={"token_normalize_func": str.lower},
)
@click.argument("commands", nargs=-1, type=click.Choice(SUBCOMMANDS, case_sensitive=False))
@click.option("--no-push", is_flag=True, help="Commit only, skip push")
@click.option("--no-ai", is_flag=True, help="Skip AI, enter message manually")
@click.option("--force-push", is_flag=True, help="Force push (destructive)")
@click.option("-b", "--branch", default=None, help="Switch or create branch before committing")
@click.option("-v", "--version", "show_version", is_flag=True, help="Print current version")
@click.option("-h", "--help", "show_help", is_flag=True, help="Show this message")
def command(**params) -> None:
    """
    GTXR - AI Git Automation
    """


def parse_args(argv: Sequence[str]) -> CliOptions:
    """
    Build the options record from command line tokens
    Raises click.UsageError for unknown tokens or a missing branch name
    """
    ctx = command.make_context("gtxr", list(argv))
    params = ctx.params
    commands = set(params["commands"])

    return CliOptions(
        no_push=params["no_push"],
        no_ai=params["no_ai"],
        force_push=params["force_push"],
        version=params["show_version"],
        help=params["show_help"],
        setup="setup" in commands,
        upgrade="upgrade" in commands,
        uninstall="uninstall" in commands,
        branch=params["branch"],
    )


def dispatch(options: CliOptions) -> int:
    """
    Run the command selected by the options
    """
    from gtxr import __version__
    from gtxr.commands import first_run_banner, print_help, setup, uninstall, upgrade
    from gtxr.core import get_settings
    from gtxr.workflow import Workflow, WorkflowError

    settings = get_settings()

    if options.help:
        print_help()
        return 0
    if options.version:
        console.print(f"GTXR v{__version__}")
        return 0
    if options.upgrade:
        upgrade(settings)
        return 0
    if options.uninstall:
        uninstall(settings)
        return 0

    first_run_banner(settings)

    if options.setup:
        setup(ConfigStore(settings.config_path))
        return 0

    try:
        return Workflow(settings).run(options)
    except WorkflowError as e:
        error(str(e))
        return 1


def main(argv: Sequence[str] | None = None) -> int:
    """
    CLI entry point
    """
    try:
        settings = load_settings()
    except (yaml.YAMLError, ValueError, OSError) as e:
        error(f"Invalid settings: {e}")
        return 1
    configure_logging(debug=settings.debug)

    try:
        options = parse_args(sys.argv[1:] if argv is None else argv)
    except click.UsageError as e:
        error(e.format_message())
        info("Run 'gtxr --help' to see valid commands.")
        return 1

    try:
        return dispatch(options)
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted[/yellow]")
        return 130
    except Exception as e:
        logger.exception("unexpected_error")
        error(f"Unexpected error: {e}")
        return 1


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
