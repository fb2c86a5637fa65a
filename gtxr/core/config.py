"""
ⒸAngelaMos | 2026
config.py
"""
from __future__ import annotations

import contextlib
import os
from pathlib import Path
from typing import Any

import orjson
import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from gtxr.core.logging import get_logger
from gtxr.models import ConfigRecord, Provider

logger = get_logger("config")

DEFAULT_HOME = Path.home() / ".gtxr"
CONFIG_FILE_MODE = 0o600


def expand(v: Any) -> Any:
    """
    Expand ~ and environment variables in a path string
    """
    if isinstance(v, str):
        return Path(os.path.expanduser(os.path.expandvars(v)))
    return v


class ModelSettings(BaseModel):
    """
    Model name and output cap for one provider
    """
    model: str
    max_tokens: int | None = None


class OpenAIModelSettings(ModelSettings):
    model: str = "gpt-4o-mini"
    max_tokens: int | None = 60


class AnthropicModelSettings(ModelSettings):
    model: str = "claude-3-5-sonnet-20241022"
    max_tokens: int | None = 100


class GeminiModelSettings(ModelSettings):
    model: str = "gemini-2.5-flash"


class GtxrSettings(BaseSettings):
    """
    Runtime settings
    Loads from settings.yaml in the home directory with env var overrides
    """
    model_config = SettingsConfigDict(
        env_prefix="GTXR_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    home: Path = DEFAULT_HOME
    debug: bool = False
    remote: str = "origin"
    diff_limit: int = Field(default=3000, ge=1)
    package_name: str = "gtxr"
    index_url: str = "https://pypi.org/pypi/{package}/json"
    openai: OpenAIModelSettings = Field(default_factory=OpenAIModelSettings)
    anthropic: AnthropicModelSettings = Field(default_factory=AnthropicModelSettings)
    gemini: GeminiModelSettings = Field(default_factory=GeminiModelSettings)

    @field_validator("home", mode="before")
    @classmethod
    def expand_path(cls, v: Any) -> Path:
        """
        Expand ~ and environment variables in path
        """
        return expand(v)

    @property
    def config_path(self) -> Path:
        return self.home / "config.json"

    @property
    def welcome_marker(self) -> Path:
        return self.home / ".welcomed"

    @property
    def sdk_dir(self) -> Path:
        """
        Private directory that lazily installed provider SDKs land in
        """
        return self.home / "site-packages"

    @property
    def release_url(self) -> str:
        return self.index_url.format(package=self.package_name)

    def model_for(self, provider: Provider) -> ModelSettings:
        return getattr(self, provider.value)


class ConfigStore:
    """
    Reads and writes the provider/API key record
    A missing or unreadable file is an empty record
    """
    def __init__(self, path: Path) -> None:
        self.path = path

    def load(self) -> ConfigRecord:
        """
        Load the record, falling back to an empty one on any problem
        """
        try:
            data = orjson.loads(self.path.read_bytes())
        except FileNotFoundError:
            return ConfigRecord()
        except (OSError, orjson.JSONDecodeError) as e:
            logger.warning("config_unreadable", path=str(self.path), error=str(e))
            return ConfigRecord()

        if not isinstance(data, dict):
            logger.warning("config_not_an_object", path=str(self.path))
            return ConfigRecord()

        try:
            return ConfigRecord.model_validate(data)
        except ValidationError as e:
            logger.warning("config_invalid", path=str(self.path), errors=e.error_count())
            return ConfigRecord()

    def save(self, record: ConfigRecord) -> None:
        """
        Overwrite the whole record, owner read/write only
        """
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = record.model_dump(mode="json", by_alias=True, exclude_none=True)
        self.path.write_bytes(orjson.dumps(payload, option=orjson.OPT_INDENT_2))

        with contextlib.suppress(NotImplementedError, OSError):
            os.chmod(self.path, CONFIG_FILE_MODE)

        logger.debug("config_saved", path=str(self.path), provider=payload.get("provider"))


def load_yaml_file(path: Path) -> dict:
    """
    Load a YAML file and return its contents
    Returns empty dict if file does not exist
    Raises ValueError if the top level is not a mapping
    """
    if not path.exists():
        return {}
    with open(path) as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a mapping at the top level")
    return data


def merge_configs(base: dict, override: dict) -> dict:
    """
    Deep merge two config dictionaries
    Override takes precedence
    """
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = merge_configs(result[key], value)
        else:
            result[key] = value
    return result


def resolve_home(overrides: dict) -> Path:
    """
    Home directory from overrides, then GTXR_HOME, then the default
    """
    if overrides.get("home") is not None:
        return expand(str(overrides["home"]))
    if os.environ.get("GTXR_HOME"):
        return expand(os.environ["GTXR_HOME"])
    return DEFAULT_HOME


_settings: GtxrSettings | None = None


def get_settings() -> GtxrSettings:
    """
    Get the current settings instance
    Raises RuntimeError if settings not initialized
    """
    if _settings is None:
        raise RuntimeError("Settings not initialized. Call load_settings() first.")
    return _settings


def load_settings(**overrides) -> GtxrSettings:
    """
    Load settings from settings.yaml and optional overrides

    Priority (highest to lowest):
    1. Explicit overrides passed to this function
    2. settings.yaml in the home directory
    3. Environment variables (GTXR_ prefix)
    4. Default values
    """
    global _settings

    home = resolve_home(overrides)
    yaml_config = load_yaml_file(home / "settings.yaml")

    merged = merge_configs(yaml_config, overrides)
    merged["home"] = home

    _settings = GtxrSettings(**merged)
    return _settings
