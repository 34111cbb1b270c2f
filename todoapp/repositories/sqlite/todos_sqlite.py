from __future__ import annotations

import sqlite3
import threading
from typing import Any, Optional

from todoapp.domain.entities.todo import now_millis
from todoapp.domain.interfaces.streams import Observable
from todoapp.infrastructure.live_query import LiveQuery
from todoapp.logging_config import get_logger

from ..todos import TodoEntity, TodosDao

logger = get_logger()

_COLUMNS = "id, title, description, isCompleted, createdAt"


class TodosDaoSqlite(TodosDao):
    """SQLite implementation of :class:`TodosDao`.

    The connection is shared between worker threads, so it must be opened with
    ``check_same_thread=False``; every statement runs under ``self._lock``.
    Mutations invalidate the live query after the lock is released.
    """

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn
        self._lock = threading.RLock()
        with self._lock:
            self._conn.execute(
                """
                CREATE TABLE IF NOT EXISTS todos (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    title TEXT NOT NULL,
                    description TEXT NOT NULL DEFAULT '',
                    isCompleted INTEGER NOT NULL DEFAULT 0,
                    createdAt INTEGER NOT NULL
                )
                """
            )
            self._conn.execute(
                "CREATE INDEX IF NOT EXISTS idx_todos_created_at ON todos(createdAt)"
            )
            self._conn.commit()
        self._live: LiveQuery[list[TodoEntity]] = LiveQuery(self._select_all, name="todos")

    @staticmethod
    def _row_to_entity(row: Any) -> TodoEntity:
        return TodoEntity(
            id=int(row[0]),
            title=str(row[1]),
            description=str(row[2] or ""),
            is_completed=bool(row[3]),
            created_at=int(row[4]),
        )

    def _select_all(self) -> list[TodoEntity]:
        with self._lock:
            cur = self._conn.execute(
                f"SELECT {_COLUMNS} FROM todos ORDER BY createdAt DESC, id DESC"
            )
            return [self._row_to_entity(r) for r in cur.fetchall()]

    def observe_all(self) -> Observable[list[TodoEntity]]:
        return self._live

    def get_by_id(self, todo_id: int) -> Optional[TodoEntity]:
        with self._lock:
            cur = self._conn.execute(
                f"SELECT {_COLUMNS} FROM todos WHERE id = ?",
                (todo_id,),
            )
            row = cur.fetchone()
        if row:
            return self._row_to_entity(row)
        return None

    def insert(self, entity: TodoEntity) -> int:
        created_at = entity.created_at if entity.created_at > 0 else now_millis()
        with self._lock:
            if entity.id > 0:
                cur = self._conn.execute(
                    f"INSERT OR REPLACE INTO todos ({_COLUMNS}) VALUES (?, ?, ?, ?, ?)",
                    (
                        entity.id,
                        entity.title,
                        entity.description,
                        int(entity.is_completed),
                        created_at,
                    ),
                )
            else:
                cur = self._conn.execute(
                    "INSERT INTO todos (title, description, isCompleted, createdAt) "
                    "VALUES (?, ?, ?, ?)",
                    (entity.title, entity.description, int(entity.is_completed), created_at),
                )
            self._conn.commit()
            rowid = cur.lastrowid
        if rowid is None:
            raise RuntimeError("SQLite insert failed: no lastrowid (table: todos)")
        logger.debug("Todo inserted", extra={"todo_id": int(rowid)})
        self._live.invalidate()
        return int(rowid)

    def update(self, entity: TodoEntity) -> None:
        with self._lock:
            cur = self._conn.execute(
                "UPDATE todos SET title = ?, description = ?, isCompleted = ? WHERE id = ?",
                (entity.title, entity.description, int(entity.is_completed), entity.id),
            )
            self._conn.commit()
        logger.debug("Todo updated", extra={"todo_id": entity.id, "rows": cur.rowcount})
        self._live.invalidate()

    def delete(self, entity: TodoEntity) -> None:
        self.delete_by_id(entity.id)

    def delete_by_id(self, todo_id: int) -> None:
        with self._lock:
            cur = self._conn.execute("DELETE FROM todos WHERE id = ?", (todo_id,))
            self._conn.commit()
        logger.debug("Todo deleted", extra={"todo_id": todo_id, "rows": cur.rowcount})
        self._live.invalidate()

    def count(self) -> int:
        with self._lock:
            (n,) = self._conn.execute("SELECT COUNT(*) FROM todos").fetchone()
        return int(n)
