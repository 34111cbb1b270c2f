"""Application settings.

Environment variables are loaded from a ``.env`` file using ``python-dotenv``
and exposed through a Pydantic settings object.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict

# Load environment variables from a .env file if present
load_dotenv()

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------
DEFAULT_DB_PATH = Path("data") / "todos.sqlite3"
DEFAULT_LOG_FILE = Path("logs") / "app.log"
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_WORKERS = 4
DEFAULT_WINDOW_TITLE = "Todo App"


class Settings(BaseModel):
    """Immutable settings object used across the application."""

    db_path: Path = DEFAULT_DB_PATH
    log_file: Path = DEFAULT_LOG_FILE
    log_level: str = DEFAULT_LOG_LEVEL
    workers: int = DEFAULT_WORKERS
    window_title: str = DEFAULT_WINDOW_TITLE

    model_config = ConfigDict(frozen=True)


def parse_log_level(raw: str) -> str:
    """Normalise a log level name, raising ``RuntimeError`` if it is unknown."""
    level = raw.strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        raise RuntimeError(f"Unknown log level: {raw!r}")
    return level


def _parse_workers(raw: str) -> int:
    try:
        workers = int(raw)
    except ValueError:
        raise RuntimeError(f"TODO_WORKERS must be an integer, got {raw!r}") from None
    if workers < 1:
        raise RuntimeError("TODO_WORKERS must be at least 1")
    return workers


def _build_settings() -> Settings:
    """Construct the ``Settings`` instance based on environment variables."""

    db_path = Path(os.getenv("TODO_DB_PATH", str(DEFAULT_DB_PATH)))
    log_file = Path(os.getenv("TODO_LOG_FILE", str(DEFAULT_LOG_FILE)))
    log_level = parse_log_level(os.getenv("TODO_LOG_LEVEL", DEFAULT_LOG_LEVEL))
    workers = _parse_workers(os.getenv("TODO_WORKERS", str(DEFAULT_WORKERS)))
    window_title = os.getenv("TODO_WINDOW_TITLE", DEFAULT_WINDOW_TITLE)

    return Settings(
        db_path=db_path,
        log_file=log_file,
        log_level=log_level,
        workers=workers,
        window_title=window_title,
    )


# Public settings instance
settings = _build_settings()
