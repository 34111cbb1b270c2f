from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from todoapp.domain.interfaces.streams import Observable


@dataclass
class TodoEntity:
    id: int
    title: str
    description: str
    is_completed: bool
    created_at: int


class TodosDao(ABC):
    """Data access interface for the ``todos`` table."""

    @abstractmethod
    def observe_all(self) -> Observable[list[TodoEntity]]:
        """Live list of all rows, newest ``createdAt`` first."""

    @abstractmethod
    def get_by_id(self, todo_id: int) -> Optional[TodoEntity]:
        """Retrieve a row by identifier."""

    @abstractmethod
    def insert(self, entity: TodoEntity) -> int:
        """Insert a row, replacing any row with the same id. Returns the id."""

    @abstractmethod
    def update(self, entity: TodoEntity) -> None:
        """Update the row matching ``entity.id``."""

    @abstractmethod
    def delete(self, entity: TodoEntity) -> None:
        """Remove the row matching ``entity.id``."""

    @abstractmethod
    def delete_by_id(self, todo_id: int) -> None:
        """Remove a row by identifier."""

    @abstractmethod
    def count(self) -> int:
        """Number of stored rows."""
