"""
ⒸAngelaMos | 2026
llm/providers.py
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from types import ModuleType
from typing import TYPE_CHECKING, ClassVar

from gtxr.models import Provider

if TYPE_CHECKING:
    from gtxr.core.config import ModelSettings

ANTHROPIC_DEFAULT_MAX_TOKENS = 100


class CommitMessageProvider(ABC):
    """
    One hosted model API, called through its official SDK
    """
    name: ClassVar[Provider]
    label: ClassVar[str]
    package: ClassVar[str]
    module: ClassVar[str]
    billing_url: ClassVar[str | None] = None

    @abstractmethod
    def generate(
        self,
        sdk: ModuleType,
        api_key: str,
        prompt: str,
        settings: ModelSettings,
    ) -> str:
        """
        Send a single prompt and return the raw reply text
        """


class OpenAIProvider(CommitMessageProvider):
    name = Provider.OPENAI
    label = "OpenAI"
    package = "openai"
    module = "openai"
    billing_url = "https://platform.openai.com/account/billing"

    def generate(
        self,
        sdk: ModuleType,
        api_key: str,
        prompt: str,
        settings: ModelSettings,
    ) -> str:
        client = sdk.OpenAI(api_key=api_key)
        request = {
            "model": settings.model,
            "messages": [{"role": "user", "content": prompt}],
        }
        if settings.max_tokens:
            request["max_tokens"] = settings.max_tokens

        response = client.chat.completions.create(**request)
        if not response.choices:
            return ""
        return response.choices[0].message.content or ""


class AnthropicProvider(CommitMessageProvider):
    name = Provider.ANTHROPIC
    label = "Anthropic"
    package = "anthropic"
    module = "anthropic"
    billing_url = "https://console.anthropic.com/settings/billing"

    def generate(
        self,
        sdk: ModuleType,
        api_key: str,
        prompt: str,
        settings: ModelSettings,
    ) -> str:
        client = sdk.Anthropic(api_key=api_key)
        message = client.messages.create(
            model=settings.model,
            max_tokens=settings.max_tokens or ANTHROPIC_DEFAULT_MAX_TOKENS,
            messages=[{"role": "user", "content": prompt}],
        )
        if not message.content:
            return ""
        return getattr(message.content[0], "text", "") or ""


class GeminiProvider(CommitMessageProvider):
    name = Provider.GEMINI
    label = "Gemini"
    package = "google-genai"
    module = "google.genai"

    def generate(
        self,
        sdk: ModuleType,
        api_key: str,
        prompt: str,
        settings: ModelSettings,
    ) -> str:
        client = sdk.Client(api_key=api_key)
        request = {"model": settings.model, "contents": prompt}
        if settings.max_tokens:
            request["config"] = {"max_output_tokens": settings.max_tokens}

        response = client.models.generate_content(**request)
        return response.text or ""


PROVIDERS: dict[Provider, type[CommitMessageProvider]] = {
    Provider.OPENAI: OpenAIProvider,
    Provider.ANTHROPIC: AnthropicProvider,
    Provider.GEMINI: GeminiProvider,
}


def get_provider(name: Provider | str) -> CommitMessageProvider:
    """
    Look up the provider implementation for a configured name
    Raises ValueError for names outside the supported set
    """
    return PROVIDERS[Provider(name)]()
