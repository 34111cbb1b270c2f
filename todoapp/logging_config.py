"""Logging configuration for the to-do application.

Provides a JSON formatted logger named ``todoapp`` writing to the console and
to a rotating log file.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

LOG_NAME = "todoapp"
LOG_FILE = Path("logs/app.log")
MAX_BYTES = 5 * 1024 * 1024
BACKUP_COUNT = 5
# Marks handlers attached by this module, as opposed to ones added by test runners.
HANDLER_TAG = "_todoapp"

# Attributes present on every LogRecord. Anything else is considered an extra field.
DEFAULT_LOG_RECORD_ATTRS = {
    "name",
    "msg",
    "args",
    "levelname",
    "levelno",
    "pathname",
    "filename",
    "module",
    "exc_info",
    "exc_text",
    "stack_info",
    "lineno",
    "funcName",
    "created",
    "msecs",
    "relativeCreated",
    "thread",
    "threadName",
    "processName",
    "process",
    "taskName",
    "message",
    "asctime",
}


class JsonFormatter(logging.Formatter):
    """Formatter returning log records as JSON strings."""

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401 - short description
        base: dict[str, Any] = {
            "time": datetime.now(timezone.utc).isoformat(timespec="seconds"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        extras = {
            key: value
            for key, value in record.__dict__.items()
            if key not in DEFAULT_LOG_RECORD_ATTRS
        }
        if extras:
            base["extra"] = extras
        if record.exc_info:
            base["exc"] = self.formatException(record.exc_info)
        return json.dumps(base, ensure_ascii=False, default=str)


def get_logger() -> logging.Logger:
    """Return a configured logger for the project."""
    logger = logging.getLogger(LOG_NAME)
    if own_handlers(logger):
        return logger
    _attach_handlers(logger, LOG_FILE, logging.INFO)
    return logger


def configure_logging(
    *,
    log_file: str | Path = LOG_FILE,
    console_level: int | str = logging.INFO,
) -> logging.Logger:
    """Replace the project logger's handlers using the given file and level."""
    logger = logging.getLogger(LOG_NAME)
    for handler in own_handlers(logger):
        logger.removeHandler(handler)
        handler.close()
    _attach_handlers(logger, Path(log_file), console_level)
    return logger


def own_handlers(logger: logging.Logger) -> list[logging.Handler]:
    return [h for h in logger.handlers if getattr(h, HANDLER_TAG, False)]


def _attach_handlers(logger: logging.Logger, path: Path, console_level: int | str) -> None:
    logger.setLevel(logging.DEBUG)

    formatter = JsonFormatter()

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(console_level)
    stream_handler.setFormatter(formatter)

    path.parent.mkdir(parents=True, exist_ok=True)
    file_handler = RotatingFileHandler(
        path,
        maxBytes=MAX_BYTES,
        backupCount=BACKUP_COUNT,
        encoding="utf-8",
    )
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(formatter)

    for handler in (stream_handler, file_handler):
        setattr(handler, HANDLER_TAG, True)
        logger.addHandler(handler)
    logger.propagate = False
