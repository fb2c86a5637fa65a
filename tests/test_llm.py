import subprocess
import sys
from contextlib import contextmanager
from types import SimpleNamespace

import pytest

from gtxr.llm import (
    AIClient,
    AIErrorKind,
    AIGenerationError,
    AnthropicProvider,
    GeminiProvider,
    OpenAIProvider,
    SdkInstallError,
    SdkLoader,
    build_commit_prompt,
    classify_ai_error,
    create_client,
    explain_ai_error,
    get_provider,
)
from gtxr.models import ConfigRecord, Provider


class FakeLoader:
    def __init__(self, sdk, install_error=None):
        self.sdk = sdk
        self.install_error = install_error
        self.ensured = []
        self.loaded = []

    def ensure(self, module, package):
        self.ensured.append((module, package))
        if self.install_error:
            raise self.install_error

    @contextmanager
    def load(self, module):
        self.loaded.append(module)
        yield self.sdk


@pytest.mark.parametrize("message, kind", [
    ("insufficient_quota", AIErrorKind.CREDITS_EXHAUSTED),
    ("Your credit balance is too low", AIErrorKind.CREDITS_EXHAUSTED),
    ("401 Unauthorized", AIErrorKind.INVALID_KEY),
    ("Invalid API key provided", AIErrorKind.INVALID_KEY),
    ("429 too many requests", AIErrorKind.RATE_LIMITED),
    ("Rate limit reached for gpt-4o-mini", AIErrorKind.RATE_LIMITED),
    ("ECONNRESET", AIErrorKind.UNKNOWN),
    ("", AIErrorKind.UNKNOWN),
])
def test_classify_ai_error(message, kind):
    assert classify_ai_error(message) is kind


def test_classification_order_is_first_match():
    assert classify_ai_error("429: quota exceeded") is AIErrorKind.CREDITS_EXHAUSTED
    assert classify_ai_error("401 rate") is AIErrorKind.INVALID_KEY


def test_get_provider():
    assert isinstance(get_provider("openai"), OpenAIProvider)
    assert isinstance(get_provider(Provider.ANTHROPIC), AnthropicProvider)
    assert isinstance(get_provider("gemini"), GeminiProvider)
    with pytest.raises(ValueError):
        get_provider("mistral")


def test_build_commit_prompt_truncates_diff():
    prompt = build_commit_prompt("x" * 5000, limit=3000)

    assert prompt.startswith("Generate a very short")
    assert prompt.endswith("\n\n" + "x" * 3000)


def test_openai_client_sends_one_request(settings, fake_openai_sdk):
    fake_openai_sdk.replies.append("  Add login form\n")
    loader = FakeLoader(fake_openai_sdk)
    client = AIClient(OpenAIProvider(), "sk-test", settings, loader)

    assert client.generate("prompt text") == "Add login form"
    assert loader.ensured == [("openai", "openai")]
    assert fake_openai_sdk.requests == [{
        "model": "gpt-4o-mini",
        "messages": [{"role": "user", "content": "prompt text"}],
        "max_tokens": 60,
    }]


def test_anthropic_client(settings):
    requests = []

    class Messages:
        def create(self, **kwargs):
            requests.append(kwargs)
            return SimpleNamespace(content=[SimpleNamespace(text="Fix typo")])

    class Anthropic:
        def __init__(self, api_key):
            assert api_key == "ak"
            self.messages = Messages()

    client = AIClient(AnthropicProvider(), "ak", settings, FakeLoader(SimpleNamespace(Anthropic=Anthropic)))

    assert client.generate("p") == "Fix typo"
    assert requests[0]["model"] == "claude-3-5-sonnet-20241022"
    assert requests[0]["max_tokens"] == 100


def test_gemini_client(settings):
    requests = []

    class Models:
        def generate_content(self, **kwargs):
            requests.append(kwargs)
            return SimpleNamespace(text="Update docs\n")

    class Client:
        def __init__(self, api_key):
            self.models = Models()

    loader = FakeLoader(SimpleNamespace(Client=Client))
    client = AIClient(GeminiProvider(), "gk", settings, loader)

    assert client.generate("p") == "Update docs"
    assert loader.ensured == [("google.genai", "google-genai")]
    assert requests == [{"model": "gemini-2.5-flash", "contents": "p"}]


def test_sdk_exception_becomes_classified_error(settings):
    class OpenAI:
        def __init__(self, api_key):
            raise RuntimeError("Error code: 401 - Incorrect API key provided")

    client = AIClient(OpenAIProvider(), "bad", settings, FakeLoader(SimpleNamespace(OpenAI=OpenAI)))

    with pytest.raises(AIGenerationError) as exc_info:
        client.generate("p")
    assert exc_info.value.kind is AIErrorKind.INVALID_KEY


def test_empty_reply_is_an_error(settings, fake_openai_sdk):
    fake_openai_sdk.replies.append("   ")
    client = AIClient(OpenAIProvider(), "sk", settings, FakeLoader(fake_openai_sdk))

    with pytest.raises(AIGenerationError) as exc_info:
        client.generate("p")
    assert exc_info.value.kind is AIErrorKind.UNKNOWN


def test_install_failure_propagates(settings, fake_openai_sdk):
    loader = FakeLoader(fake_openai_sdk, install_error=SdkInstallError("openai", "no network"))
    client = AIClient(OpenAIProvider(), "sk", settings, loader)

    with pytest.raises(SdkInstallError):
        client.generate("p")
    assert fake_openai_sdk.requests == []


def test_create_client_requires_configuration(settings):
    with pytest.raises(ValueError):
        create_client(ConfigRecord(), settings)

    client = create_client(ConfigRecord(provider="gemini", api_key="k"), settings)
    assert isinstance(client.provider, GeminiProvider)
    assert isinstance(client.loader, SdkLoader)
    assert client.loader.target_dir == settings.sdk_dir


def test_explain_credits_shows_billing_link(capsys):
    explain_ai_error(OpenAIProvider(), AIGenerationError("insufficient_quota"))

    out = capsys.readouterr().out
    assert "credits exhausted" in out
    assert "platform.openai.com" in out
    assert "gtxr --no-ai" in out


def test_explain_unknown_prints_message(capsys):
    explain_ai_error(GeminiProvider(), AIGenerationError("ECONNRESET"))

    assert "AI generation failed: ECONNRESET" in capsys.readouterr().out


def test_explain_invalid_key(capsys):
    explain_ai_error(AnthropicProvider(), AIGenerationError("authentication_error"))

    assert "gtxr setup" in capsys.readouterr().out


class RecordingInstaller:
    def __init__(self, returncode=0, stderr="", create=None):
        self.returncode = returncode
        self.stderr = stderr
        self.create = create
        self.calls = []

    def __call__(self, package, target):
        self.calls.append((package, target))
        if self.create:
            pkg_dir = target / self.create
            pkg_dir.mkdir(parents=True)
            (pkg_dir / "__init__.py").write_text("VALUE = 42\n")
        return subprocess.CompletedProcess([package], self.returncode, "", self.stderr)


def test_loader_skips_install_for_importable_module(tmp_path):
    installer = RecordingInstaller()
    loader = SdkLoader(tmp_path / "sdk", installer=installer)

    loader.ensure("json", "json")

    assert installer.calls == []


def test_loader_installs_missing_module(tmp_path):
    installer = RecordingInstaller(create="gtxr_fake_sdk_install")
    loader = SdkLoader(tmp_path / "sdk", installer=installer)

    loader.ensure("gtxr_fake_sdk_install", "fake-sdk")
    loader.ensure("gtxr_fake_sdk_install", "fake-sdk")

    assert installer.calls == [("fake-sdk", tmp_path / "sdk")]


def test_loader_raises_typed_error_on_install_failure(tmp_path):
    installer = RecordingInstaller(returncode=1, stderr="ERROR: No matching distribution")
    loader = SdkLoader(tmp_path / "sdk", installer=installer)

    with pytest.raises(SdkInstallError) as exc_info:
        loader.ensure("gtxr_missing_sdk", "missing-sdk")

    assert exc_info.value.package == "missing-sdk"
    assert "No matching distribution" in str(exc_info.value)


def test_loader_only_exposes_private_dir_inside_load(tmp_path):
    target = tmp_path / "sdk"
    module_dir = target / "gtxr_fake_sdk_load"
    module_dir.mkdir(parents=True)
    (module_dir / "__init__.py").write_text("VALUE = 7\n")
    loader = SdkLoader(target)

    try:
        with loader.load("gtxr_fake_sdk_load") as sdk:
            assert sdk.VALUE == 7
            assert str(target) in sys.path
        assert str(target) not in sys.path
    finally:
        sys.modules.pop("gtxr_fake_sdk_load", None)


def test_loader_unusable_target_dir_is_install_error(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory\n")
    installer = RecordingInstaller()
    loader = SdkLoader(blocker / "site-packages", installer=installer)

    with pytest.raises(SdkInstallError) as exc_info:
        loader.ensure("gtxr_missing_sdk", "missing-sdk")

    assert exc_info.value.package == "missing-sdk"
    assert installer.calls == []
