"""Structured logging configuration with structlog.

Settings:
- log_format: "json" for log aggregation, "console" for human-readable output.
- log_level: "DEBUG", "INFO" (default), "WARNING", "ERROR", or "CRITICAL".
"""
import logging
import sys
from enum import Enum
from typing import Any, MutableMapping, Optional

import structlog

VALID_LOG_FORMATS = {"json", "console"}
VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def _serialize_enums(
    _logger: object,
    _method_name: str,
    event_dict: MutableMapping[str, Any],
) -> MutableMapping[str, Any]:
    """Replace Enum instances with their .value for readable log output."""
    for key, value in event_dict.items():
        if isinstance(value, Enum):
            event_dict[key] = value.value
    return event_dict


def _build_formatter(json_mode: bool, colors: bool = False) -> logging.Formatter:
    renderer = (
        structlog.processors.JSONRenderer()
        if json_mode
        else structlog.dev.ConsoleRenderer(colors=colors)
    )
    return structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.format_exc_info,
            renderer,
        ],
    )


def setup_logging(log_format: str = "console", level: Optional[str] = None) -> None:
    """
    Configure structlog with a stdout handler.

    Args:
        log_format: "json" or "console".
        level: Log level name; defaults to INFO.

    Raises:
        ValueError: If log_format or level is not recognized.
    """
    log_format = log_format.lower()
    if log_format not in VALID_LOG_FORMATS:
        raise ValueError(f"Invalid log format {log_format!r}. Must be 'json' or 'console'.")

    level_name = (level or "INFO").upper()
    if level_name not in VALID_LOG_LEVELS:
        raise ValueError(
            f"Invalid log level {level_name!r}. Must be one of {', '.join(sorted(VALID_LOG_LEVELS))}."
        )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            _serialize_enums,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.UnicodeDecoder(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level_name))
    root_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(_build_formatter(log_format == "json", colors=sys.stdout.isatty()))
    root_logger.addHandler(handler)
