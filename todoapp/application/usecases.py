"""Single-operation entry points used by the presentation layer.

Each use case exposes exactly one repository capability, so the state
container depends on "can add a todo" rather than on the whole repository.
"""

from __future__ import annotations

from todoapp.domain.entities import Todo
from todoapp.domain.interfaces.streams import Observable
from todoapp.domain.repositories.todo_repo import TodoRepository


class GetTodosUseCase:
    def __init__(self, repository: TodoRepository) -> None:
        self._repository = repository

    def __call__(self) -> Observable[list[Todo]]:
        return self._repository.get_all_todos()


class AddTodoUseCase:
    def __init__(self, repository: TodoRepository) -> None:
        self._repository = repository

    def __call__(self, todo: Todo) -> int:
        return self._repository.add_todo(todo)


class UpdateTodoUseCase:
    def __init__(self, repository: TodoRepository) -> None:
        self._repository = repository

    def __call__(self, todo: Todo) -> None:
        self._repository.update_todo(todo)


class DeleteTodoUseCase:
    def __init__(self, repository: TodoRepository) -> None:
        self._repository = repository

    def __call__(self, todo_id: int) -> None:
        self._repository.delete_todo(todo_id)
