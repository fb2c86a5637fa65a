"""
ⒸAngelaMos | 2026
git/ops.py
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from git import Git
from git.exc import GitCommandNotFound

from gtxr.core import get_logger
from gtxr.core.console import error, info, ok

logger = get_logger("git")

DEFAULT_BRANCH = "main"
NO_REMOTE = "No remote configured"


@dataclass(frozen=True)
class GitResult:
    """
    Exit status and trimmed output streams of one git invocation
    """

    ok: bool
    stdout: str = ""
    stderr: str = ""


class GitRepository:
    """
    Runs the git executable in a working directory
    Every call returns a GitResult, failures included
    """

    def __init__(self, working_dir: Path | str | None = None) -> None:
        """
        Initialize with the directory git runs in
        """
        self.working_dir = Path(working_dir) if working_dir else Path.cwd()
        self._git = Git(str(self.working_dir))

    def run(self, *args: str) -> GitResult:
        """
        Run git with the given arguments and wait for it to exit
        """
        command = [self._git.GIT_PYTHON_GIT_EXECUTABLE, *args]
        try:
            status, stdout, stderr = self._git.execute(
                command,
                with_extended_output=True,
                with_exceptions=False,
            )
        except GitCommandNotFound as e:
            logger.error("git_not_found", error=str(e))
            return GitResult(ok=False, stderr=str(e))

        result = GitResult(
            ok=status == 0,
            stdout=(stdout or "").strip(),
            stderr=(stderr or "").strip(),
        )
        logger.debug("git_command", args=list(args), ok=result.ok, status=status)
        return result

    def is_repo(self) -> bool:
        return self.run("rev-parse", "--git-dir").ok

    def status(self) -> str:
        """
        Short working tree status, empty when clean or on failure
        """
        result = self.run("status", "--short")
        return result.stdout if result.ok else ""

    def current_branch(self) -> str:
        result = self.run("branch", "--show-current")
        return result.stdout if result.ok and result.stdout else DEFAULT_BRANCH

    def remote_url(self, remote: str = "origin") -> str:
        result = self.run("remote", "get-url", remote)
        return result.stdout if result.ok else NO_REMOTE

    def diff(self) -> str:
        """
        Staged diff, or the unstaged one when nothing is staged
        """
        staged = self.run("diff", "--cached")
        if staged.ok and staged.stdout:
            return staged.stdout
        unstaged = self.run("diff")
        return unstaged.stdout if unstaged.ok else ""

    def add(self, paths: Sequence[str]) -> GitResult:
        return self.run("add", *paths)

    def commit(self, message: str) -> GitResult:
        return self.run("commit", "-m", message)

    def push(
        self,
        remote: str,
        branch: str,
        force: bool = False,
        set_upstream: bool = False,
    ) -> GitResult:
        args = ["push"]
        if force:
            args.append("--force")
        if set_upstream:
            args.append("--set-upstream")
        return self.run(*args, remote, branch)

    def pull_rebase(self, remote: str, branch: str) -> GitResult:
        return self.run("pull", "--rebase", remote, branch)

    def checkout(self, name: str, create: bool = False) -> GitResult:
        if create:
            return self.run("checkout", "-b", name)
        return self.run("checkout", name)


def switch_branch(repo: GitRepository, name: str) -> str:
    """
    Check out a branch, creating it when it does not exist
    Returns the branch that is current afterwards
    """
    result = repo.checkout(name)
    if result.ok:
        ok(f"Switched to branch: {name}")
        return name

    info(f"Branch '{name}' not found, creating it...")
    result = repo.checkout(name, create=True)
    if result.ok:
        ok(f"Created and switched to: {name}")
        return name

    logger.warning("branch_switch_failed", branch=name, error=result.stderr)
    error(f"Could not switch/create branch '{name}': {result.stderr}")
    return repo.current_branch()
