# mypy: ignore-errors

from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import List

import pytest

from todoapp.db.connection import open_connection
from todoapp.repositories.sqlite.todos_sqlite import TodosDaoSqlite
from todoapp.repositories.todos import TodoEntity


def _dao() -> TodosDaoSqlite:
    return TodosDaoSqlite(open_connection(":memory:"))


def _entity(title: str, *, id: int = 0, created_at: int = 0, done: bool = False) -> TodoEntity:
    return TodoEntity(
        id=id, title=title, description="", is_completed=done, created_at=created_at
    )


def test_schema_created_with_expected_columns() -> None:
    dao = _dao()
    cols = [r[1] for r in dao._conn.execute("PRAGMA table_info(todos)").fetchall()]
    assert cols == ["id", "title", "description", "isCompleted", "createdAt"]


def test_insert_assigns_id_and_timestamp() -> None:
    dao = _dao()
    tid = dao.insert(_entity("Buy milk"))
    assert tid > 0
    row = dao.get_by_id(tid)
    assert row is not None
    assert row.title == "Buy milk"
    assert row.is_completed is False
    assert row.created_at > 0


def test_insert_keeps_given_created_at() -> None:
    dao = _dao()
    tid = dao.insert(_entity("A", created_at=1234))
    assert dao.get_by_id(tid).created_at == 1234


def test_insert_with_existing_id_replaces_row() -> None:
    dao = _dao()
    tid = dao.insert(_entity("first", created_at=10))
    again = dao.insert(_entity("second", id=tid, created_at=10, done=True))
    assert again == tid
    assert dao.count() == 1
    row = dao.get_by_id(tid)
    assert row.title == "second" and row.is_completed is True


def test_get_by_id_absent_returns_none() -> None:
    assert _dao().get_by_id(404) is None


def test_update_changes_fields_but_not_created_at() -> None:
    dao = _dao()
    tid = dao.insert(_entity("A", created_at=500))
    dao.update(
        TodoEntity(id=tid, title="B", description="d", is_completed=True, created_at=999)
    )
    row = dao.get_by_id(tid)
    assert (row.title, row.description, row.is_completed, row.created_at) == ("B", "d", True, 500)


def test_update_unknown_id_is_silent() -> None:
    dao = _dao()
    dao.update(_entity("ghost", id=77, created_at=1))
    assert dao.count() == 0


def test_delete_and_delete_by_id() -> None:
    dao = _dao()
    a = dao.insert(_entity("a"))
    b = dao.insert(_entity("b"))
    dao.delete(dao.get_by_id(a))
    dao.delete_by_id(b)
    dao.delete_by_id(12345)
    assert dao.count() == 0


def test_ids_are_not_reused_after_delete() -> None:
    dao = _dao()
    first = dao.insert(_entity("a"))
    dao.delete_by_id(first)
    second = dao.insert(_entity("b"))
    assert second > first


def test_observe_all_orders_newest_first_and_reemits() -> None:
    dao = _dao()
    seen: List[List[str]] = []
    dao.observe_all().subscribe(lambda rows: seen.append([r.title for r in rows]))
    assert seen == [[]]

    dao.insert(_entity("old", created_at=100))
    dao.insert(_entity("newest", created_at=300))
    mid = dao.insert(_entity("mid", created_at=200))
    assert seen[-1] == ["newest", "mid", "old"]

    dao.update(_entity("mid!", id=mid, created_at=200))
    assert seen[-1] == ["newest", "mid!", "old"]

    dao.delete_by_id(mid)
    assert seen[-1] == ["newest", "old"]
    assert len(seen) == 6


def test_same_timestamp_ties_break_on_id() -> None:
    dao = _dao()
    seen: List[List[str]] = []
    dao.observe_all().subscribe(lambda rows: seen.append([r.title for r in rows]))
    dao.insert(_entity("first", created_at=50))
    dao.insert(_entity("second", created_at=50))
    assert seen[-1] == ["second", "first"]


def test_insert_rowid_none_raises(monkeypatch: pytest.MonkeyPatch) -> None:
    dao = _dao()

    class DummyCur:
        lastrowid = None

    class StubConn:
        def execute(self, *a, **kw):
            return DummyCur()

        def commit(self) -> None:
            pass

    monkeypatch.setattr(dao, "_conn", StubConn())
    with pytest.raises(RuntimeError):
        dao.insert(_entity("X"))


def test_file_database_persists_between_connections(tmp_path: Path) -> None:
    db = tmp_path / "nested" / "todos.sqlite3"
    conn = open_connection(db)
    tid = TodosDaoSqlite(conn).insert(_entity("durable"))
    conn.close()

    conn2 = open_connection(db)
    try:
        assert TodosDaoSqlite(conn2).get_by_id(tid).title == "durable"
    finally:
        conn2.close()


def test_closed_connection_surfaces_sqlite_error() -> None:
    conn = open_connection(":memory:")
    dao = TodosDaoSqlite(conn)
    conn.close()
    with pytest.raises(sqlite3.ProgrammingError):
        dao.insert(_entity("late"))
