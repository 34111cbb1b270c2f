from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from pydantic import BaseModel, ConfigDict

from todoapp.domain.entities import Todo


class TodoUiState(BaseModel):
    todos: tuple[Todo, ...] = ()
    is_loading: bool = False
    error: str | None = None

    model_config = ConfigDict(frozen=True)


@dataclass(frozen=True)
class AddTodo:
    title: str
    description: str = ""


@dataclass(frozen=True)
class UpdateTodo:
    todo: Todo


@dataclass(frozen=True)
class DeleteTodo:
    id: int


@dataclass(frozen=True)
class LoadTodos:
    pass


@dataclass(frozen=True)
class DismissError:
    pass


TodoEvent = Union[AddTodo, UpdateTodo, DeleteTodo, LoadTodos, DismissError]
