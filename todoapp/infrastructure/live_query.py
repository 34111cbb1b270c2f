from __future__ import annotations

import threading
from typing import Callable, Generic, List, Optional, TypeVar

from todoapp.domain.interfaces.streams import Observable, Subscription
from todoapp.logging_config import get_logger

T = TypeVar("T")

logger = get_logger()


class _LiveSubscription(Subscription, Generic[T]):
    def __init__(
        self,
        owner: "LiveQuery[T]",
        on_next: Callable[[T], None],
        on_error: Optional[Callable[[BaseException], None]],
    ) -> None:
        self._owner = owner
        self.on_next = on_next
        self.on_error = on_error
        self._disposed = False

    @property
    def disposed(self) -> bool:
        return self._disposed

    def dispose(self) -> None:
        if self._disposed:
            return
        self._disposed = True
        self._owner._remove(self)


class LiveQuery(Observable[T]):
    """Re-runs a query and pushes the full result to subscribers.

    - ``subscribe`` delivers the current result right away.
    - ``invalidate`` re-runs the loader once and delivers to every subscriber.
    - Loading and delivery happen under one lock, so subscribers see results
      in invalidation order.
    - A failing loader (or a subscriber callback that raises) terminates the
      affected subscriptions after reporting the error to ``on_error``.
    """

    def __init__(self, loader: Callable[[], T], *, name: str = "live_query") -> None:
        self._loader = loader
        self._name = name
        self._lock = threading.RLock()
        self._subscribers: List[_LiveSubscription[T]] = []

    @property
    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._subscribers)

    def subscribe(
        self,
        on_next: Callable[[T], None],
        on_error: Optional[Callable[[BaseException], None]] = None,
    ) -> Subscription:
        sub = _LiveSubscription(self, on_next, on_error)
        with self._lock:
            self._subscribers.append(sub)
            try:
                value = self._loader()
            except Exception as exc:
                self._fail(sub, exc)
                return sub
            self._deliver(sub, value)
        return sub

    def invalidate(self) -> None:
        with self._lock:
            if not self._subscribers:
                return
            try:
                value = self._loader()
            except Exception as exc:
                for sub in list(self._subscribers):
                    self._fail(sub, exc)
                return
            for sub in list(self._subscribers):
                self._deliver(sub, value)

    def _deliver(self, sub: _LiveSubscription[T], value: T) -> None:
        if sub.disposed:
            return
        try:
            sub.on_next(value)
        except Exception as exc:
            self._fail(sub, exc)

    def _fail(self, sub: _LiveSubscription[T], exc: Exception) -> None:
        sub.dispose()
        if sub.on_error is None:
            logger.error(
                "Live query failed with no error handler",
                extra={"query": self._name, "error": str(exc)},
            )
            return
        sub.on_error(exc)

    def _remove(self, sub: _LiveSubscription[T]) -> None:
        with self._lock:
            try:
                self._subscribers.remove(sub)
            except ValueError:
                pass
