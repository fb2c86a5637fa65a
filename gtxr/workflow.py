"""
ⒸAngelaMos | 2026
workflow.py
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from rich.markup import escape

from gtxr.core import ConfigStore, get_logger
from gtxr.core.console import ask, console, header, info, ok, warn
from gtxr.git import GitRepository, push_branch, switch_branch
from gtxr.llm import (
    AIClient,
    AIGenerationError,
    SdkInstallError,
    build_commit_prompt,
    create_client,
    explain_ai_error,
)

if TYPE_CHECKING:
    from gtxr.core.config import GtxrSettings
    from gtxr.models import CliOptions, ConfigRecord

logger = get_logger("workflow")

Ask = Callable[[str], str]
ClientFactory = Callable[["ConfigRecord"], AIClient]

MANUAL_PROMPT = "Commit message: "


class WorkflowError(Exception):
    """
    A fatal condition that ends the workflow with a failure status
    """


class Workflow:
    """
    Interactive add, commit and push loop for the current repository
    """

    def __init__(
        self,
        settings: GtxrSettings,
        repo: GitRepository | None = None,
        store: ConfigStore | None = None,
        ask: Ask = ask,
        client_factory: ClientFactory | None = None,
    ) -> None:
        """
        Initialize with settings and optional collaborators
        """
        self.settings = settings
        self.repo = repo or GitRepository()
        self.store = store or ConfigStore(settings.config_path)
        self.ask = ask
        self.client_factory = client_factory or (
            lambda config: create_client(config, settings)
        )

    def run(self, options: CliOptions) -> int:
        """
        Run the whole workflow, returning the exit status
        Raises WorkflowError for fatal conditions
        """
        from gtxr import __version__

        header(f"GTXR v{__version__}")

        if not self.repo.is_repo():
            raise WorkflowError("Not a git repository. Run 'git init' first.")

        info(f"Remote : {self.repo.remote_url(self.settings.remote)}")

        branch = self.repo.current_branch()
        if options.branch and options.branch != branch:
            branch = switch_branch(self.repo, options.branch)
        info(f"Branch : {branch}")

        status = self.repo.status()
        if not status:
            warn("No changes detected, nothing to commit.")
            return 0

        console.print("\n[cyan]Changes:[/cyan]")
        console.print(status, markup=False)
        console.print()

        self.stage()

        config = self.store.load()
        diff = self.repo.diff()
        message = self.obtain_message(config, diff, no_ai=options.no_ai)
        if not message:
            raise WorkflowError("Commit message cannot be empty.")

        result = self.repo.commit(message)
        if not result.ok:
            raise WorkflowError(f"Commit failed: {result.stderr}")
        ok(f"Committed: {message}")
        logger.info("committed", branch=branch)

        if options.no_push:
            info("Skipping push (--no-push).")
        elif self.confirm("Push to remote? (y/n) [y]: "):
            push_branch(
                self.repo,
                branch,
                force=options.force_push,
                remote=self.settings.remote,
            )

        header("Done!")
        return 0

    def confirm(self, question: str) -> bool:
        return (self.ask(question) or "y").lower() == "y"

    def stage(self) -> None:
        """
        Ask which paths to stage and add them
        """
        files = self.ask("Files to add (. for all) [.]: ") or "."
        paths = ["."] if files == "." else files.split()

        result = self.repo.add(paths)
        if not result.ok:
            raise WorkflowError(f"Failed to stage files: {result.stderr}")
        ok(f"Staged: {files}")

    def manual_message(self) -> str | None:
        return self.ask(MANUAL_PROMPT) or None

    def obtain_message(self, config: ConfigRecord, diff: str, no_ai: bool = False) -> str | None:
        """
        Get a commit message typed by the user or suggested by the AI
        Returns None when the user leaves it empty
        """
        if no_ai or not config.is_configured:
            if not no_ai:
                warn("AI not configured, run: gtxr setup")
            return self.manual_message()

        answer = self.ask("Generate commit message with AI? (y/n) [y]: ")
        if answer and answer.lower() != "y":
            return self.manual_message()

        if not diff:
            warn("Nothing staged, enter message manually.")
            return self.manual_message()

        client = self.client_factory(config)
        return self.suggest_message(client, build_commit_prompt(diff, self.settings.diff_limit))

    def suggest_message(self, client: AIClient, prompt: str) -> str | None:
        """
        Generate until the user accepts, types their own, or the call fails
        """
        while True:
            info(f"Generating via {client.provider.name.value}...")
            try:
                message = client.generate(prompt)
            except AIGenerationError as e:
                explain_ai_error(client.provider, e)
                info("Falling back to manual input.")
                return self.manual_message()
            except SdkInstallError as e:
                logger.error("sdk_unavailable", package=e.package)
                warn(str(e))
                info("Falling back to manual input.")
                return self.manual_message()

            console.print()
            console.print(f"  [green]{escape(message)}[/green]")
            console.print()

            choice = (self.ask("Use this? (y / r=regenerate / m=manual) [y]: ") or "y").lower()
            if choice == "y":
                return message
            if choice == "r":
                continue
            return self.manual_message()
