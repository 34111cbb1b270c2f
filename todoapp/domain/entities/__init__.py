from .todo import Todo, now_millis

__all__ = [
    "Todo",
    "now_millis",
]
