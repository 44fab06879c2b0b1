"""Structured logging for the TedOS content core.

Records render as one `key=value` line. Merge and resolve calls attach the
content section they work on, and merges also attach the 1-based chunk
number, so a log line can be traced back to one generation call.
"""

import logging
import sys
from typing import Any

# Context fields promoted to record attributes, rendered right after the message
CONTEXT_FIELDS = ("section", "chunk")


def _render(value: Any) -> str:
    text = str(value)
    if not text or any(c.isspace() for c in text):
        return f'"{text}"'
    return text


class StructuredFormatter(logging.Formatter):
    """key=value formatter with section/chunk context."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for name in CONTEXT_FIELDS:
            value = getattr(record, name, None)
            if value is not None:
                log_data[name] = value

        log_data.update(getattr(record, "extra_data", None) or {})

        line = " ".join(f"{k}={_render(v)}" for k, v in log_data.items())
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


def _resolve_level() -> int:
    """TEDOS_LOG_LEVEL wins; otherwise DEBUG in dev and INFO elsewhere."""
    try:
        from tedos.core.config import get_settings

        settings = get_settings()
    except Exception:
        return logging.INFO

    if settings.TEDOS_LOG_LEVEL:
        level = logging.getLevelName(settings.TEDOS_LOG_LEVEL.upper())
        return level if isinstance(level, int) else logging.INFO
    return logging.DEBUG if settings.TEDOS_ENV == "dev" else logging.INFO


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger writing structured lines to stdout.

    The handler is attached once per logger name.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(StructuredFormatter())
        logger.addHandler(handler)
        logger.setLevel(_resolve_level())

    return logger


def log_with_context(logger: logging.Logger, level: int, msg: str, **kwargs: Any) -> None:
    """
    Log with context fields.

    `section` and `chunk` become record attributes; every other keyword is
    carried in `extra_data`.

    Args:
        logger: Logger instance
        level: Log level (logging.INFO, etc.)
        msg: Log message
        **kwargs: Context fields (e.g. section="emails", chunk=2, merged=19)
    """
    extra: dict[str, Any] = {name: kwargs.pop(name) for name in CONTEXT_FIELDS if name in kwargs}
    extra["extra_data"] = kwargs
    logger.log(level, msg, extra=extra)
