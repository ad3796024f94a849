"""
Logging for the BornToMe API.

Every module logs through a ``ContextLogger`` under the ``borntome`` namespace.
Keyword arguments become fields of the log record, so one call like
``auth_logger.info("User logged in", user_id=...)`` renders as a JSON object
in production or as a short text line when ``LOG_FORMAT=text``.
"""
import json
import logging
import sys
from datetime import datetime, timezone
from typing import Optional

from .config import get_settings

ROOT_LOGGER = "borntome"

# Attributes every LogRecord has; anything else came in through ``extra``
_RESERVED = set(logging.makeLogRecord({}).__dict__) | {"message", "asctime"}


def _fields(record: logging.LogRecord) -> dict:
    return {k: v for k, v in record.__dict__.items() if k not in _RESERVED}


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update(_fields(record))
        if record.exc_info:
            entry["traceback"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


class TextFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        line = f"{record.levelname:<7} {record.name}: {record.getMessage()}"
        fields = _fields(record)
        if fields:
            line += " (" + " ".join(f"{k}={v}" for k, v in fields.items()) + ")"
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


def configure_logging() -> None:
    """Attach one stdout handler to the ``borntome`` logger. Safe to call twice."""
    settings = get_settings()
    root = logging.getLogger(ROOT_LOGGER)
    root.setLevel(getattr(logging, settings.log_level.upper(), logging.INFO))
    if root.handlers:
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(TextFormatter() if settings.log_format == "text" else JsonFormatter())
    root.addHandler(handler)
    root.propagate = False


class ContextLogger:
    """Thin wrapper that turns keyword arguments into structured fields."""

    def __init__(self, name: str):
        self._logger = logging.getLogger(f"{ROOT_LOGGER}.{name}")

    def info(self, message: str, **fields):
        self._logger.info(message, extra=fields)

    def warning(self, message: str, **fields):
        self._logger.warning(message, extra=fields)

    def error(self, message: str, error: Optional[BaseException] = None, **fields):
        if error is not None:
            fields["error_type"] = type(error).__name__
        exc_info = (type(error), error, error.__traceback__) if error is not None else None
        self._logger.error(message, exc_info=exc_info, extra=fields)


configure_logging()

http_logger = ContextLogger("http")        # error responses
request_logger = ContextLogger("requests")  # access log, debug only
auth_logger = ContextLogger("auth")        # registration, logins, tokens, ownership
content_logger = ContextLogger("content")  # article and comment writes
db_logger = ContextLogger("db")            # schema setup and health
