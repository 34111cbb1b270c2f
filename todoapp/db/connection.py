"""SQLite connection factory."""

from __future__ import annotations

import sqlite3
from pathlib import Path

MEMORY = ":memory:"


def open_connection(db_path: str | Path) -> sqlite3.Connection:
    """Open the application database, creating its directory if needed.

    The connection may be used from worker threads; callers serialise access.
    """
    target = str(db_path)
    if target != MEMORY:
        Path(target).parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(target, timeout=30.0, check_same_thread=False)
    if target != MEMORY:
        conn.execute("PRAGMA journal_mode = WAL;")
    conn.execute("PRAGMA busy_timeout = 30000;")
    return conn
