"""Core interfaces shared by the data and presentation layers."""

from .streams import Observable, Subscription

__all__ = [
    "Observable",
    "Subscription",
]
