from __future__ import annotations

from typing import Any, List, Optional

from todoapp.application.usecases import (
    AddTodoUseCase,
    DeleteTodoUseCase,
    GetTodosUseCase,
    UpdateTodoUseCase,
)
from todoapp.domain.entities import Todo
from todoapp.domain.repositories.todo_repo import TodoRepository


class _SpyRepo(TodoRepository):
    def __init__(self) -> None:
        self.calls: List[tuple[str, Any]] = []

    def get_all_todos(self) -> Any:
        self.calls.append(("all", None))
        return "stream"

    def get_todo_by_id(self, todo_id: int) -> Optional[Todo]:
        self.calls.append(("get", todo_id))
        return None

    def add_todo(self, todo: Todo) -> int:
        self.calls.append(("add", todo))
        return 11

    def update_todo(self, todo: Todo) -> None:
        self.calls.append(("update", todo))

    def delete_todo(self, todo_id: int) -> None:
        self.calls.append(("delete", todo_id))


def test_each_use_case_calls_exactly_one_repository_operation() -> None:
    repo = _SpyRepo()
    t = Todo(title="x")

    assert GetTodosUseCase(repo)() == "stream"
    assert AddTodoUseCase(repo)(t) == 11
    UpdateTodoUseCase(repo)(t)
    DeleteTodoUseCase(repo)(5)

    assert repo.calls == [("all", None), ("add", t), ("update", t), ("delete", 5)]
