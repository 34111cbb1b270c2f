from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, Generic, Optional, TypeVar

T = TypeVar("T")
U = TypeVar("U")

OnNext = Callable[[T], None]
OnError = Callable[[BaseException], None]


class Subscription(ABC):
    """Handle returned by :meth:`Observable.subscribe`."""

    @abstractmethod
    def dispose(self) -> None:
        """Stop receiving values. Calling it more than once is harmless."""

    @property
    @abstractmethod
    def disposed(self) -> bool:
        """True once the subscription no longer receives values."""


class Observable(ABC, Generic[T]):
    """A live sequence of values.

    Subscribers get the current value right away and every later value until
    they dispose their subscription or the sequence fails.
    """

    @abstractmethod
    def subscribe(
        self,
        on_next: Callable[[T], None],
        on_error: Optional[Callable[[BaseException], None]] = None,
    ) -> Subscription:
        """
        Start receiving values.

        Example:
            >>> sub = repo.get_all_todos().subscribe(print)
            [Todo(id=2, ...), Todo(id=1, ...)]
            >>> sub.dispose()

        :param on_next: Called with each emitted value.
        :param on_error: Called once if producing a value fails; the
            subscription is terminated afterwards.
        :return: Subscription handle.
        """

    def map(self, fn: Callable[[T], U]) -> "Observable[U]":
        """Return an observable emitting ``fn(value)`` for every upstream value."""
        return _MappedObservable(self, fn)


class _MappedObservable(Observable[U], Generic[T, U]):
    def __init__(self, upstream: Observable[T], fn: Callable[[T], U]) -> None:
        self._upstream = upstream
        self._fn = fn

    def subscribe(
        self,
        on_next: Callable[[U], None],
        on_error: Optional[Callable[[BaseException], None]] = None,
    ) -> Subscription:
        fn = self._fn
        return self._upstream.subscribe(lambda value: on_next(fn(value)), on_error)
