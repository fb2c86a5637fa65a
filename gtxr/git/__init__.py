"""
ⒸAngelaMos | 2026
git/__init__.py
"""
from gtxr.git.ops import GitRepository, GitResult, switch_branch
from gtxr.git.push import (
    PushFailure,
    PushOutcome,
    PushReport,
    classify_push_failure,
    push_branch,
)

__all__ = [
    "GitRepository",
    "GitResult",
    "PushFailure",
    "PushOutcome",
    "PushReport",
    "classify_push_failure",
    "push_branch",
    "switch_branch",
]
