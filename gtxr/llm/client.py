"""
ⒸAngelaMos | 2026
llm/client.py
"""
from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

from gtxr.core import get_logger
from gtxr.core.console import error, info
from gtxr.llm.providers import CommitMessageProvider, get_provider
from gtxr.llm.sdk import SdkLoader

if TYPE_CHECKING:
    from gtxr.core.config import GtxrSettings
    from gtxr.models import ConfigRecord

logger = get_logger("llm")


class AIErrorKind(str, Enum):
    """
    Coarse reason an AI call failed
    """
    CREDITS_EXHAUSTED = "credits_exhausted"
    INVALID_KEY = "invalid_key"
    RATE_LIMITED = "rate_limited"
    UNKNOWN = "unknown"


ERROR_MARKERS: tuple[tuple[AIErrorKind, tuple[str, ...]], ...] = (
    (AIErrorKind.CREDITS_EXHAUSTED, ("credit", "quota", "insufficient")),
    (AIErrorKind.INVALID_KEY, ("invalid", "auth", "401")),
    (AIErrorKind.RATE_LIMITED, ("rate", "429")),
)


def classify_ai_error(message: str) -> AIErrorKind:
    """
    Case-insensitive substring match, first kind that matches wins
    """
    lowered = message.lower()
    for kind, markers in ERROR_MARKERS:
        if any(marker in lowered for marker in markers):
            return kind
    return AIErrorKind.UNKNOWN


class AIGenerationError(Exception):
    """
    The provider call failed or returned nothing
    """

    def __init__(self, message: str, kind: AIErrorKind | None = None) -> None:
        super().__init__(message)
        self.kind = kind or classify_ai_error(message)


class AIClient:
    """
    Single-shot commit message generation against one provider
    Retrying is left to the caller
    """

    def __init__(
        self,
        provider: CommitMessageProvider,
        api_key: str,
        settings: GtxrSettings,
        loader: SdkLoader,
    ) -> None:
        """
        Initialize with a provider, its key and the loader that supplies its SDK
        """
        self.provider = provider
        self.api_key = api_key
        self.model_settings = settings.model_for(provider.name)
        self.loader = loader

    def generate(self, prompt: str) -> str:
        """
        Generate text from a prompt

        Raises SdkInstallError when the SDK cannot be installed and
        AIGenerationError for anything that goes wrong in the call itself
        """
        self.loader.ensure(self.provider.module, self.provider.package)

        try:
            with self.loader.load(self.provider.module) as sdk:
                text = self.provider.generate(sdk, self.api_key, prompt, self.model_settings)
        except Exception as e:
            logger.warning(
                "ai_generation_failed",
                provider=self.provider.name.value,
                error=str(e),
            )
            raise AIGenerationError(str(e)) from e

        text = (text or "").strip()
        if not text:
            raise AIGenerationError("Empty response from AI")

        logger.debug(
            "ai_generation_complete",
            provider=self.provider.name.value,
            model=self.model_settings.model,
            chars=len(text),
        )
        return text


def explain_ai_error(provider: CommitMessageProvider, exc: AIGenerationError) -> None:
    """
    Print what went wrong and what the user can do about it
    """
    if exc.kind is AIErrorKind.CREDITS_EXHAUSTED:
        error("AI API credits exhausted.")
        if provider.billing_url:
            info(f"Billing: {provider.billing_url}")
        info("Or skip AI with: gtxr --no-ai")
    elif exc.kind is AIErrorKind.INVALID_KEY:
        error("Invalid API key. Reconfigure with: gtxr setup")
    elif exc.kind is AIErrorKind.RATE_LIMITED:
        error("Rate limit hit. Wait a moment and retry, or use: gtxr --no-ai")
    else:
        error(f"AI generation failed: {exc}")


def create_client(
    config: ConfigRecord,
    settings: GtxrSettings,
    loader: SdkLoader | None = None,
) -> AIClient:
    """
    Build a client for the configured provider
    """
    if not config.is_configured:
        raise ValueError("AI provider is not configured")

    return AIClient(
        provider=get_provider(config.provider),
        api_key=config.api_key,
        settings=settings,
        loader=loader or SdkLoader(settings.sdk_dir),
    )
