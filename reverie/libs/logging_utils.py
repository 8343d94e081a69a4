"""Logging configuration helpers for Reverie."""

from __future__ import annotations

import json
import logging
import os
from datetime import datetime, timezone
from logging.config import dictConfig
from typing import Any, Dict

_DEV_ENVIRONMENTS = {"local", "dev", "development", "test"}

_RESET = "\033[0m"
# checked highest level first
_LEVEL_COLORS = (
    (logging.ERROR, "\033[31m"),
    (logging.WARNING, "\033[33m"),
)

_RESERVED_ATTRS = set(logging.makeLogRecord({}).__dict__) | {"message", "asctime"}

# model runtimes and the HTTP client are chatty at DEBUG
_QUIET_LOGGERS = ("httpx", "httpcore", "transformers", "urllib3")


def _environment() -> str:
    return os.getenv("REVERIE_ENVIRONMENT", "dev").lower()


def _color_enabled() -> bool:
    flag = os.getenv("REVERIE_LOG_COLOR", "")
    if flag:
        return flag == "1"
    return _environment() in _DEV_ENVIRONMENTS


class JsonFormatter(logging.Formatter):
    """Single-line JSON records; ``extra=`` fields are merged into the payload."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(
            (key, value)
            for key, value in record.__dict__.items()
            if key not in _RESERVED_ATTRS and key not in payload
        )
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


class ColorTextFormatter(logging.Formatter):
    """Console text with warnings in yellow and errors in red."""

    def __init__(self, fmt: str | None = None, datefmt: str | None = None, use_color: bool | None = None) -> None:
        super().__init__(fmt, datefmt)
        self.use_color = _color_enabled() if use_color is None else use_color

    def format(self, record: logging.LogRecord) -> str:
        formatted = super().format(record)
        if not self.use_color:
            return formatted
        for level, code in _LEVEL_COLORS:
            if record.levelno >= level:
                return f"{code}{formatted}{_RESET}"
        return formatted


def configure_logging(level: str | None = None, fmt: str | None = None) -> None:
    """Configure root logging.

    ``level`` and ``fmt`` ("json" or "text") default to ``REVERIE_LOG_LEVEL``
    and ``REVERIE_LOG_FORMAT``. Without a level, development environments log
    at DEBUG and everything else at INFO.
    """

    default_level = "DEBUG" if _environment() in _DEV_ENVIRONMENTS else "INFO"
    log_level = (level or os.getenv("REVERIE_LOG_LEVEL", default_level)).upper()
    log_format = (fmt or os.getenv("REVERIE_LOG_FORMAT", "json")).lower()

    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "json": {"()": JsonFormatter},
                "text": {
                    "()": ColorTextFormatter,
                    "fmt": "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
                },
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "json" if log_format == "json" else "text",
                    "level": log_level,
                }
            },
            "root": {"handlers": ["console"], "level": log_level},
            "loggers": {name: {"level": "WARNING"} for name in _QUIET_LOGGERS},
        }
    )


__all__ = ["ColorTextFormatter", "JsonFormatter", "configure_logging"]
