"""Widget-independent rendering decisions for the todo screen."""

from __future__ import annotations

from enum import Enum
from typing import Iterable, Sequence

from todoapp.domain.entities import Todo

from .state import TodoUiState

EMPTY_TITLE = "No todos yet"
EMPTY_HINT = "Press Add to create your first todo"
DONE_MARK = "☑"
OPEN_MARK = "☐"


class ScreenMode(str, Enum):
    LOADING = "LOADING"
    EMPTY = "EMPTY"
    LIST = "LIST"


def screen_mode(state: TodoUiState) -> ScreenMode:
    if state.is_loading:
        return ScreenMode.LOADING
    if not state.todos:
        return ScreenMode.EMPTY
    return ScreenMode.LIST


def row_id(todo: Todo) -> str:
    """Stable widget key for a todo row."""
    return str(todo.id)


def row_values(todo: Todo) -> tuple[str, str, str]:
    mark = DONE_MARK if todo.is_completed else OPEN_MARK
    # Treeview cells are single-line.
    description = " ".join(todo.description.split())
    return mark, todo.title, description


def can_submit(title: str) -> bool:
    return bool(title.strip())


def error_banner_text(state: TodoUiState) -> str | None:
    if not state.error:
        return None
    return f"Error: {state.error}"


def reconcile_rows(current_ids: Iterable[str], todos: Sequence[Todo]) -> list[str]:
    """Return the row ids that are no longer present in ``todos``."""
    wanted = {row_id(t) for t in todos}
    return [rid for rid in current_ids if rid not in wanted]
