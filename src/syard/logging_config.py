"""Logging configuration utilities for syard.

The library is silent by default; nothing is printed until a handler is
enabled explicitly:

    from syard.logging_config import enable_console_logging
    enable_console_logging(level="DEBUG")

Environment variables (read by `configure_from_env`):
    SYARD_LOGGING: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    SYARD_LOG_JSON: Set to "1" for JSON output
"""

from __future__ import annotations

import json
import logging
import os
from datetime import datetime, timezone
from typing import Literal

__all__ = [
    "configure_from_env",
    "enable_console_logging",
    "enable_json_logging",
]

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Parent logger of every syard module logger
LOGGER_NAME = "syard"

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class JsonFormatter(logging.Formatter):
    """Formats log records as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_data)


def _get_level(level: str | int) -> int:
    if isinstance(level, int):
        return level
    return getattr(logging, level.upper(), logging.INFO)


def _get_logger() -> logging.Logger:
    logger = logging.getLogger(LOGGER_NAME)
    if not any(isinstance(h, logging.NullHandler) for h in logger.handlers):
        logger.addHandler(logging.NullHandler())
    return logger


def enable_console_logging(
    level: LogLevel | int = "INFO",
    format: str = DEFAULT_FORMAT,
    date_format: str = DEFAULT_DATE_FORMAT,
) -> logging.StreamHandler:
    """Enable console (stderr) logging for syard.

    Args:
        level: Log level name or int.
        format: Log message format string.
        date_format: Date format string for %(asctime)s.

    Returns:
        The created StreamHandler.
    """
    logger = _get_logger()
    logger.setLevel(_get_level(level))

    handler = logging.StreamHandler()
    handler.setLevel(_get_level(level))
    handler.setFormatter(logging.Formatter(format, date_format))

    logger.addHandler(handler)
    return handler


def enable_json_logging(level: LogLevel | int = "INFO") -> logging.StreamHandler:
    """Enable JSON console logging, one object per record."""
    logger = _get_logger()
    logger.setLevel(_get_level(level))

    handler = logging.StreamHandler()
    handler.setLevel(_get_level(level))
    handler.setFormatter(JsonFormatter())

    logger.addHandler(handler)
    return handler


def configure_from_env() -> None:
    """Configure logging from SYARD_LOGGING / SYARD_LOG_JSON; no-op when unset."""
    level = os.environ.get("SYARD_LOGGING", "").upper()
    if not level:
        return
    if os.environ.get("SYARD_LOG_JSON", "") == "1":
        enable_json_logging(level=level)
    else:
        enable_console_logging(level=level)
