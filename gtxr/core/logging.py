"""
ⒸAngelaMos | 2026
logging.py
"""
import logging
import sys
from typing import TextIO

import orjson
import structlog


def configure_logging(
    json_mode: bool | None = None,
    debug: bool = False,
    stream: TextIO | None = None,
) -> None:
    """
    Configure structlog for the CLI
    Logs go to stderr so they stay out of the interactive prompts
    Auto-detects JSON mode based on TTY if not specified
    """
    stream = stream or sys.stderr
    if json_mode is None:
        json_mode = not stream.isatty()

    log_level = logging.DEBUG if debug else logging.WARNING

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt = "iso",
                                         utc = True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if json_mode:
        processors = [
            *shared_processors,
            structlog.processors.JSONRenderer(serializer = _json_serializer),
        ]
    else:
        processors = [
            *shared_processors,
            structlog.dev.ConsoleRenderer(colors = stream.isatty()),
        ]

    structlog.configure(
        processors = processors,
        wrapper_class = structlog.make_filtering_bound_logger(log_level),
        context_class = dict,
        logger_factory = structlog.PrintLoggerFactory(file = stream),
        cache_logger_on_first_use = True,
    )


def _json_serializer(obj: dict, **kwargs) -> str:
    """
    Serialize log entries to JSON using orjson for speed
    """
    return orjson.dumps(obj, default = str).decode("utf-8")


def get_logger(name: str | None = None) -> structlog.BoundLogger:
    """
    Get a lazily bound logger instance
    Module level loggers pick up configure_logging() even when created before it
    """
    if name:
        return structlog.get_logger(component = name)
    return structlog.get_logger()
