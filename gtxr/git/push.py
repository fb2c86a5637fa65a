"""
ⒸAngelaMos | 2026
git/push.py
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from gtxr.core import get_logger
from gtxr.core.console import error, info, ok, warn
from gtxr.git.ops import GitRepository, GitResult

logger = get_logger("push")

NO_UPSTREAM_MARKERS = ("no upstream", "has no upstream")
REJECTED_MARKERS = ("fetch first", "non-fast-forward", "rejected")


class PushFailure(str, Enum):
    """
    Why a plain push was refused
    """
    NO_UPSTREAM = "no_upstream"
    REJECTED = "rejected"
    OTHER = "other"


class PushOutcome(str, Enum):
    PUSHED = "pushed"
    FORCE_PUSHED = "force_pushed"
    UPSTREAM_SET = "upstream_set"
    REBASED_AND_PUSHED = "rebased_and_pushed"
    REBASE_CONFLICT = "rebase_conflict"
    FAILED = "failed"


SUCCESSFUL_OUTCOMES = frozenset({
    PushOutcome.PUSHED,
    PushOutcome.FORCE_PUSHED,
    PushOutcome.UPSTREAM_SET,
    PushOutcome.REBASED_AND_PUSHED,
})


@dataclass(frozen=True)
class PushReport:
    """
    Final outcome of a push and the git call that decided it
    """

    outcome: PushOutcome
    result: GitResult

    @property
    def ok(self) -> bool:
        return self.outcome in SUCCESSFUL_OUTCOMES


def classify_push_failure(stderr: str) -> PushFailure:
    """
    Classify push stderr, first match wins
    The upstream check is case sensitive, the rejection check is not
    """
    if any(marker in stderr for marker in NO_UPSTREAM_MARKERS):
        return PushFailure.NO_UPSTREAM

    lowered = stderr.lower()
    if any(marker in lowered for marker in REJECTED_MARKERS):
        return PushFailure.REJECTED

    return PushFailure.OTHER


def _print_rebase_help(remote: str, branch: str) -> None:
    error("Auto-rebase failed, conflicts need manual resolution.")
    info("Your repo is in rebase state. To resolve:")
    info("  1. Open conflicted files and fix the markers")
    info("  2. git add .")
    info("  3. git rebase --continue")
    info(f"  4. git push {remote} {branch}")
    info("  Or to cancel: git rebase --abort")


def push_branch(
    repo: GitRepository,
    branch: str,
    force: bool = False,
    remote: str = "origin",
) -> PushReport:
    """
    Push a branch, applying one scripted fix for the common refusals

    A missing upstream is retried once with --set-upstream. A
    non-fast-forward refusal is rebased onto the remote and pushed once
    more. Force pushes and any other failure are never retried.
    """
    target = f"{remote}/{branch}"

    if force:
        warn("Force pushing, this overwrites remote history.")
        result = repo.push(remote, branch, force=True)
        if result.ok:
            ok(f"Force-pushed to {target}")
            return PushReport(PushOutcome.FORCE_PUSHED, result)
        error(f"Force push failed: {result.stderr}")
        return PushReport(PushOutcome.FAILED, result)

    info(f"Pushing to {target}...")
    result = repo.push(remote, branch)
    if result.ok:
        ok(f"Pushed to {target}")
        return PushReport(PushOutcome.PUSHED, result)

    failure = classify_push_failure(result.stderr)
    logger.info("push_failed", branch=branch, failure=failure.value)

    if failure is PushFailure.NO_UPSTREAM:
        info("New branch, setting upstream automatically...")
        result = repo.push(remote, branch, set_upstream=True)
        if result.ok:
            ok(f"Pushed and upstream set for {target}")
            return PushReport(PushOutcome.UPSTREAM_SET, result)
        error(f"Failed to set upstream: {result.stderr}")
        return PushReport(PushOutcome.FAILED, result)

    if failure is PushFailure.REJECTED:
        info("Remote has new commits, rebasing automatically...")
        rebase = repo.pull_rebase(remote, branch)
        if not rebase.ok:
            logger.warning("rebase_failed", branch=branch, error=rebase.stderr)
            _print_rebase_help(remote, branch)
            return PushReport(PushOutcome.REBASE_CONFLICT, rebase)

        result = repo.push(remote, branch)
        if result.ok:
            ok(f"Pushed to {target} after rebase.")
            return PushReport(PushOutcome.REBASED_AND_PUSHED, result)
        error(f"Push failed after rebase: {result.stderr}")
        return PushReport(PushOutcome.FAILED, result)

    error(f"Push failed: {result.stderr}")
    return PushReport(PushOutcome.FAILED, result)
