"""
ⒸAngelaMos | 2026
commands.py
"""
from __future__ import annotations

import shutil
import subprocess
import sys
from typing import TYPE_CHECKING, Callable

import httpx

from gtxr.core import get_logger
from gtxr.core.console import ask, console, error, header, info, ok, warn
from gtxr.models import ConfigRecord, Provider

if TYPE_CHECKING:
    from gtxr.core.config import ConfigStore, GtxrSettings

logger = get_logger("commands")

Ask = Callable[[str], str]

WELCOME_TEXT = """
[cyan]  Available commands:[/cyan]
  [bold]gtxr[/bold]                Run full workflow  (add → commit → push)
  [bold]gtxr setup[/bold]          Configure AI provider and API key
  [bold]gtxr upgrade[/bold]        Upgrade to the latest version
  [bold]gtxr uninstall[/bold]      Remove GTXR from your system
  [bold]gtxr --no-push[/bold]      Commit only, skip push
  [bold]gtxr --no-ai[/bold]        Skip AI, type message manually
  [bold]gtxr --force-push[/bold]   Force push [dim](destructive)[/dim]
  [bold]gtxr --branch <n>[/bold]   Switch or create branch before committing
  [bold]gtxr --help[/bold]         Show all commands and options

[yellow]  Get started:  gtxr setup[/yellow]
"""

HELP_TEXT = """
[cyan]  Commands:[/cyan]
  gtxr                  Run full workflow  (add → commit → push)
  gtxr setup            Configure AI provider and API key
  gtxr upgrade          Upgrade to latest version
  gtxr uninstall        Remove GTXR from your system

[cyan]  Options:[/cyan]
  --no-push                Commit only, skip push
  --no-ai                  Skip AI, enter message manually
  --force-push             Force push  (destructive)
  --branch, -b <name>      Switch or create branch before committing
  -v, --version            Print current version
  -h, --help               Show this message

[cyan]  Examples:[/cyan]
  gtxr                          Full AI-powered workflow
  gtxr --no-push                Commit only
  gtxr --branch feature/login   Switch branch then commit and push
  gtxr --no-ai                  Manual commit message

[yellow]  First time? Run: gtxr setup[/yellow]
"""


def run_pip(*args: str) -> int:
    """
    Run pip for the current interpreter with inherited stdio
    """
    completed = subprocess.run([sys.executable, "-m", "pip", *args], check=False)
    return completed.returncode


def print_help() -> None:
    header("GTXR: AI Git Automation")
    console.print(HELP_TEXT)


def first_run_banner(settings: GtxrSettings) -> None:
    """
    Show the command overview once, then leave a marker file behind
    """
    if settings.welcome_marker.exists():
        return

    header("GTXR is ready to use!")
    console.print(WELCOME_TEXT)

    settings.home.mkdir(parents=True, exist_ok=True)
    settings.welcome_marker.touch()


def setup(store: ConfigStore, ask: Ask = ask) -> ConfigRecord | None:
    """
    Prompt for provider and API key and store them
    Returns the saved record, or None when the input was rejected
    """
    header("GTXR Setup")

    provider = ask(f"Provider ({'/'.join(Provider.names())}): ").lower()
    if provider not in Provider.names():
        warn("Unrecognised provider. Skipped.")
        return None

    api_key = ask(f"API key for {provider}: ")
    if not api_key:
        warn("No API key entered. Skipped.")
        return None

    record = ConfigRecord(provider=Provider(provider), api_key=api_key)
    store.save(record)
    ok(f"{provider} configured successfully.")
    return record


def fetch_latest_version(settings: GtxrSettings) -> str:
    """
    Ask the package index for the newest released version
    """
    response = httpx.get(
        settings.release_url,
        headers={"User-Agent": settings.package_name},
        follow_redirects=True,
    )
    response.raise_for_status()
    return response.json()["info"]["version"]


def upgrade(settings: GtxrSettings) -> bool:
    """
    Install the newest release when it differs from the running one
    """
    from gtxr import __version__

    manual = f"Try manually: {sys.executable} -m pip install --upgrade {settings.package_name}"

    info("Checking for latest version...")
    try:
        latest = fetch_latest_version(settings)
    except (httpx.HTTPError, ValueError, KeyError) as e:
        logger.warning("version_lookup_failed", url=settings.release_url, error=str(e))
        error(f"Upgrade failed: {e}")
        info(manual)
        return False

    if latest == __version__:
        ok(f"Already up to date (v{__version__}).")
        return True

    info(f"Upgrading v{__version__} → v{latest}...")
    if run_pip("install", "--upgrade", settings.package_name) == 0:
        ok(f"Upgraded to v{latest} successfully.")
        return True

    error("Upgrade failed.")
    info(manual)
    return False


def uninstall(settings: GtxrSettings, ask: Ask = ask) -> bool:
    """
    Remove the config directory and the installed package after confirmation
    """
    warn("This will remove GTXR and all its data.")
    if ask("Are you sure? (y/N): ").lower() != "y":
        info("Uninstall cancelled.")
        return False

    if settings.home.exists():
        try:
            shutil.rmtree(settings.home)
        except OSError as e:
            logger.error("config_removal_failed", path=str(settings.home), error=str(e))
            error(f"Could not remove {settings.home}: {e}")
            return False
        ok(f"Removed config: {settings.home}")

    info(f"Running: pip uninstall -y {settings.package_name}")
    if run_pip("uninstall", "-y", settings.package_name) == 0:
        ok("GTXR uninstalled successfully.")
        return True

    error(f"pip uninstall failed. Try: {sys.executable} -m pip uninstall {settings.package_name}")
    return False
