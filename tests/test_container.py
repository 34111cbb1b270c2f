from __future__ import annotations

from pathlib import Path

from todoapp.config.settings import Settings
from todoapp.container import AppContainer
from todoapp.domain.entities import Todo
from todoapp.presentation.state import AddTodo


def test_singletons_and_per_screen_view_models(tmp_path: Path) -> None:
    container = AppContainer(Settings(db_path=tmp_path / "db" / "todos.sqlite3", workers=1))
    try:
        assert container.connection is container.connection
        assert container.todos_dao is container.todos_dao
        assert container.repository is container.repository

        vm1 = container.view_model()
        vm2 = container.view_model()
        assert vm1 is not vm2
        vm1.initial_load.result(timeout=5)
        vm2.initial_load.result(timeout=5)

        vm1.handle_event(AddTodo("shared")).result(timeout=5)
        assert container.repository.get_todo_by_id(vm1.state.todos[0].id) == vm1.state.todos[0]
        # Both screens observe the same live table.
        assert [t.title for t in vm2.state.todos] == ["shared"]
        vm1.close()
        vm2.close()
    finally:
        container.close()
    assert (tmp_path / "db" / "todos.sqlite3").exists()


def test_close_without_connection_is_noop(tmp_path: Path) -> None:
    container = AppContainer(Settings(db_path=tmp_path / "never.sqlite3"))
    container.close()
    assert not (tmp_path / "never.sqlite3").exists()


def test_reopened_container_sees_persisted_todos(tmp_path: Path) -> None:
    settings = Settings(db_path=tmp_path / "todos.sqlite3")
    first = AppContainer(settings)
    tid = first.repository.add_todo(Todo(title="survives"))
    first.close()

    second = AppContainer(settings)
    try:
        todo = second.repository.get_todo_by_id(tid)
        assert todo is not None and todo.title == "survives"
    finally:
        second.close()
