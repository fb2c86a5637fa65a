"""
ⒸAngelaMos | 2026
__init__.py
"""
from gtxr.core import (
    ConfigStore,
    GtxrSettings,
    configure_logging,
    get_logger,
    get_settings,
    load_settings,
)
from gtxr.models import (
    CliOptions,
    ConfigRecord,
    Provider,
)

__version__ = "1.0.0"
__all__ = [
    "CliOptions",
    "ConfigRecord",
    "ConfigStore",
    "GtxrSettings",
    "Provider",
    "__version__",
    "configure_logging",
    "get_logger",
    "get_settings",
    "load_settings",
]
