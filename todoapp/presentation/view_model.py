from __future__ import annotations

import threading
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from typing import Any, Callable, List, Optional

from todoapp.application.usecases import (
    AddTodoUseCase,
    DeleteTodoUseCase,
    GetTodosUseCase,
    UpdateTodoUseCase,
)
from todoapp.domain.entities import Todo
from todoapp.domain.interfaces.streams import Subscription
from todoapp.logging_config import get_logger

from .state import AddTodo, DeleteTodo, DismissError, LoadTodos, TodoEvent, TodoUiState, UpdateTodo

logger = get_logger()

StateListener = Callable[[TodoUiState], None]

DEFAULT_WORKERS = 4


class TodoViewModel:
    """Owns the screen state and applies events to it.

    - The todo list only ever changes through the live subscription; event
      handlers never touch ``todos`` themselves.
    - Handlers run on ``executor`` and are independent of each other; nothing
      is cancelled or coalesced.
    - State is replaced wholesale under a lock; listeners get the new value.
    """

    def __init__(
        self,
        get_todos: GetTodosUseCase,
        add_todo: AddTodoUseCase,
        update_todo: UpdateTodoUseCase,
        delete_todo: DeleteTodoUseCase,
        *,
        executor: Optional[Executor] = None,
        workers: int = DEFAULT_WORKERS,
    ) -> None:
        self._get_todos = get_todos
        self._add_todo = add_todo
        self._update_todo = update_todo
        self._delete_todo = delete_todo

        self._owns_executor = executor is None
        self._executor: Executor = executor or ThreadPoolExecutor(
            max_workers=workers, thread_name_prefix="todo-vm"
        )

        self._state_lock = threading.Lock()
        self._state = TodoUiState(is_loading=True)
        self._listeners: List[StateListener] = []

        self._sub_lock = threading.Lock()
        self._subscription: Subscription | None = None
        self._closed = False

        self.initial_load: Future[None] = self._executor.submit(self._observe)

    # -------------------- state --------------------
    @property
    def state(self) -> TodoUiState:
        with self._state_lock:
            return self._state

    def add_listener(self, listener: StateListener) -> Callable[[], None]:
        """Register ``listener`` for state changes; returns a function removing it."""
        with self._state_lock:
            self._listeners.append(listener)

        def _remove() -> None:
            with self._state_lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return _remove

    def _update(self, **changes: Any) -> None:
        with self._state_lock:
            new_state = self._state.model_copy(update=changes)
            self._state = new_state
            listeners = list(self._listeners)
        for listener in listeners:
            try:
                listener(new_state)
            except Exception:
                logger.exception("State listener failed")

    # -------------------- events --------------------
    def handle_event(self, event: TodoEvent) -> Optional[Future[None]]:
        """Apply ``event``; returns the future of the scheduled work, if any."""
        if self._closed:
            logger.warning("Event after close ignored", extra={"event": type(event).__name__})
            return None

        if isinstance(event, AddTodo):
            title = event.title.strip()
            if not title:
                return None
            todo = Todo(title=title, description=event.description.strip())
            return self._executor.submit(
                self._run, "add", lambda: self._add_todo(todo), "Failed to add todo"
            )
        if isinstance(event, UpdateTodo):
            target = event.todo
            return self._executor.submit(
                self._run, "update", lambda: self._update_todo(target), "Failed to update todo"
            )
        if isinstance(event, DeleteTodo):
            todo_id = event.id
            return self._executor.submit(
                self._run, "delete", lambda: self._delete_todo(todo_id), "Failed to delete todo"
            )
        if isinstance(event, LoadTodos):
            return self._executor.submit(self._reload)
        if isinstance(event, DismissError):
            self._update(error=None)
            return None
        raise TypeError(f"Unknown event: {event!r}")

    def _run(self, action: str, op: Callable[[], object], fallback: str) -> None:
        try:
            op()
        except Exception as exc:
            logger.exception("Todo %s failed", action, extra={"action": action})
            self._update(error=str(exc) or fallback)
            return
        self._update(error=None)

    # -------------------- observation --------------------
    def _observe(self) -> None:
        with self._sub_lock:
            if self._closed:
                return
            if self._subscription is not None:
                self._subscription.dispose()
            self._subscription = self._get_todos().subscribe(
                self._on_todos, self._on_observe_error
            )

    def _reload(self) -> None:
        if self._closed:
            return
        self._update(is_loading=True, error=None)
        self._observe()

    def _on_todos(self, todos: list[Todo]) -> None:
        self._update(todos=tuple(todos), is_loading=False, error=None)

    def _on_observe_error(self, exc: BaseException) -> None:
        logger.error("Todo observation failed", extra={"error": str(exc)})
        self._update(is_loading=False, error=str(exc) or "Unknown error occurred")

    # -------------------- lifecycle --------------------
    def close(self) -> None:
        """Release the subscription and any executor created by this instance."""
        with self._sub_lock:
            self._closed = True
            if self._subscription is not None:
                self._subscription.dispose()
                self._subscription = None
        if self._owns_executor:
            self._executor.shutdown(wait=False)
