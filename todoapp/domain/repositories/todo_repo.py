from abc import ABC, abstractmethod
from typing import Optional

from todoapp.domain.entities import Todo
from todoapp.domain.interfaces.streams import Observable


class TodoRepository(ABC):
    @abstractmethod
    def get_all_todos(self) -> Observable[list[Todo]]:
        """
        Live list of every todo, newest first.

        Example:
            >>> repo.get_all_todos().subscribe(print)
            [Todo(id=2, title="Call mum"), Todo(id=1, title="Buy milk")]

        :return: Observable re-emitting the full list after every change.
        """

    @abstractmethod
    def get_todo_by_id(self, todo_id: int) -> Optional[Todo]:
        """
        Fetch a todo by its unique ID.

        Example:
            >>> repo.get_todo_by_id(1)
            Todo(id=1, title="Buy milk")

        :param todo_id: Unique identifier of the todo.
        :return: Todo if found, otherwise None.
        """

    @abstractmethod
    def add_todo(self, todo: Todo) -> int:
        """
        Persist a new todo. Storage assigns the id.

        Example:
            >>> repo.add_todo(Todo(title="Buy milk"))
            1

        :param todo: Todo to persist.
        :return: Assigned identifier.
        """

    @abstractmethod
    def update_todo(self, todo: Todo) -> None:
        """
        Replace the mutable fields of the todo with ``todo.id``.

        Example:
            >>> repo.update_todo(todo.toggled())

        :param todo: Todo carrying the new field values.
        """

    @abstractmethod
    def delete_todo(self, todo_id: int) -> None:
        """
        Delete a todo by its ID. Unknown ids are ignored.

        Example:
            >>> repo.delete_todo(1)

        :param todo_id: Unique identifier of the todo to delete.
        """
