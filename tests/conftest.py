from __future__ import annotations

import sys
from pathlib import Path
from types import SimpleNamespace
from typing import Callable, Dict, Iterable, List, Tuple

import git
import pytest

from gtxr.core import GtxrSettings, configure_logging
from gtxr.git import GitRepository, GitResult


configure_logging(json_mode=True, stream=sys.__stderr__)


class FakeRepository(GitRepository):
    """In-memory stand-in that records every git invocation.

    Responses are keyed by the exact argument tuple. A list of results is
    consumed in order; the last entry repeats once the list runs out.
    Unknown commands succeed with empty output.
    """

    def __init__(self, responses: Dict[Tuple[str, ...], Iterable[GitResult]] | None = None):
        self.working_dir = Path(".")
        self.calls: List[Tuple[str, ...]] = []
        self.responses = {key: list(value) for key, value in (responses or {}).items()}

    def run(self, *args: str) -> GitResult:
        self.calls.append(args)
        queue = self.responses.get(args)
        if not queue:
            return GitResult(ok=True)
        if len(queue) > 1:
            return queue.pop(0)
        return queue[0]

    def calls_to(self, subcommand: str) -> List[Tuple[str, ...]]:
        return [call for call in self.calls if call and call[0] == subcommand]


def scripted(*answers: str) -> Callable[[str], str]:
    """Return an ask() replacement that replays answers and records prompts."""
    queue = list(answers)
    prompts: List[str] = []

    def ask(question: str) -> str:
        prompts.append(question)
        return queue.pop(0) if queue else ""

    ask.prompts = prompts  # type: ignore[attr-defined]
    return ask


def init_repo(path: Path) -> git.Repo:
    repo = git.Repo.init(path)
    with repo.config_writer() as writer:
        writer.set_value("user", "name", "Test User")
        writer.set_value("user", "email", "test@example.com")
        writer.set_value("commit", "gpgsign", "false")
    return repo


@pytest.fixture(autouse=True)
def isolated_git(monkeypatch, tmp_path):
    """Keep git from walking above the test directory or reading user config."""
    monkeypatch.setenv("GIT_CEILING_DIRECTORIES", str(tmp_path.parent))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.setenv("GTXR_HOME", str(tmp_path / "gtxr-home"))


@pytest.fixture
def settings(tmp_path) -> GtxrSettings:
    return GtxrSettings(home=tmp_path / "gtxr-home")


@pytest.fixture
def git_repo(tmp_path) -> Path:
    """A repository with one committed file."""
    repo_dir = tmp_path / "work"
    repo_dir.mkdir()
    repo = init_repo(repo_dir)

    (repo_dir / "README.md").write_text("hello\n")
    repo.index.add(["README.md"])
    repo.index.commit("initial")
    return repo_dir


@pytest.fixture
def fake_openai_sdk():
    """An object shaped like the openai module, recording requests."""
    requests: List[dict] = []
    replies: List[str] = []

    class Completions:
        def create(self, **kwargs):
            requests.append(kwargs)
            content = replies.pop(0) if replies else "Add feature"
            message = SimpleNamespace(content=content)
            return SimpleNamespace(choices=[SimpleNamespace(message=message)])

    class OpenAI:
        def __init__(self, api_key):
            self.api_key = api_key
            self.chat = SimpleNamespace(completions=Completions())

    return SimpleNamespace(OpenAI=OpenAI, requests=requests, replies=replies)


@pytest.fixture(autouse=True)
def pinned_logging(monkeypatch):
    """main() reconfigures logging; keep it on the real stderr under capture."""
    monkeypatch.setattr("gtxr.cli.configure_logging", lambda **kwargs: None)
