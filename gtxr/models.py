"""
ⒸAngelaMos | 2026
models.py
"""
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Provider(str, Enum):
    """
    Hosted AI providers that can write commit messages
    """
    OPENAI = "openai"
    ANTHROPIC = "anthropic"
    GEMINI = "gemini"

    @classmethod
    def names(cls) -> list[str]:
        return [p.value for p in cls]


class ConfigRecord(BaseModel):
    """
    Persisted provider selection and API key
    Stored as {"provider": ..., "apiKey": ...}
    """
    model_config = ConfigDict(populate_by_name = True, extra = "ignore")

    provider: Provider | None = None
    api_key: str | None = Field(default = None, alias = "apiKey")

    @property
    def is_configured(self) -> bool:
        """
        Both a provider and a non-empty key are present
        """
        return self.provider is not None and bool(self.api_key)


class CliOptions(BaseModel):
    """
    Options parsed from the command line, built once per invocation
    """
    model_config = ConfigDict(frozen = True)

    no_push: bool = False
    no_ai: bool = False
    force_push: bool = False
    version: bool = False
    help: bool = False
    setup: bool = False
    upgrade: bool = False
    uninstall: bool = False
    branch: str | None = None
