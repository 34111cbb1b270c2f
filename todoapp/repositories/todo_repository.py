from __future__ import annotations

from typing import Optional

from todoapp.domain.entities import Todo
from todoapp.domain.interfaces.streams import Observable
from todoapp.domain.repositories.todo_repo import TodoRepository
from todoapp.domain.value_objects.ids import TodoId

from .todos import TodoEntity, TodosDao


class TodoRepositoryImpl(TodoRepository):
    """Domain-facing repository over a :class:`TodosDao`."""

    def __init__(self, dao: TodosDao) -> None:
        self._dao = dao

    def get_all_todos(self) -> Observable[list[Todo]]:
        return self._dao.observe_all().map(lambda rows: [to_domain(r) for r in rows])

    def get_todo_by_id(self, todo_id: int) -> Optional[Todo]:
        entity = self._dao.get_by_id(todo_id)
        return to_domain(entity) if entity is not None else None

    def add_todo(self, todo: Todo) -> int:
        return self._dao.insert(to_entity(todo))

    def update_todo(self, todo: Todo) -> None:
        self._dao.update(to_entity(todo))

    def delete_todo(self, todo_id: int) -> None:
        self._dao.delete_by_id(todo_id)


def to_domain(entity: TodoEntity) -> Todo:
    return Todo(
        id=TodoId(entity.id),
        title=entity.title,
        description=entity.description,
        is_completed=entity.is_completed,
        created_at=entity.created_at,
    )


def to_entity(todo: Todo) -> TodoEntity:
    return TodoEntity(
        id=int(todo.id),
        title=todo.title,
        description=todo.description,
        is_completed=todo.is_completed,
        created_at=todo.created_at,
    )
