"""
ⒸAngelaMos | 2026
core/__init__.py
"""
from gtxr.core.logging import configure_logging, get_logger
from gtxr.core.config import (
    ConfigStore,
    GtxrSettings,
    ModelSettings,
    get_settings,
    load_settings,
)


__all__ = [
    "ConfigStore",
    "GtxrSettings",
    "ModelSettings",
    "configure_logging",
    "get_logger",
    "get_settings",
    "load_settings",
]
