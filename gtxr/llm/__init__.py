"""
ⒸAngelaMos | 2026
llm/__init__.py
"""
from gtxr.llm.client import (
    AIClient,
    AIErrorKind,
    AIGenerationError,
    classify_ai_error,
    create_client,
    explain_ai_error,
)
from gtxr.llm.prompts import build_commit_prompt
from gtxr.llm.providers import (
    PROVIDERS,
    AnthropicProvider,
    CommitMessageProvider,
    GeminiProvider,
    OpenAIProvider,
    get_provider,
)
from gtxr.llm.sdk import SdkInstallError, SdkLoader


__all__ = [
    "AIClient",
    "AIErrorKind",
    "AIGenerationError",
    "AnthropicProvider",
    "CommitMessageProvider",
    "GeminiProvider",
    "OpenAIProvider",
    "PROVIDERS",
    "SdkInstallError",
    "SdkLoader",
    "build_commit_prompt",
    "classify_ai_error",
    "create_client",
    "explain_ai_error",
    "get_provider",
]
