from __future__ import annotations

import time

from pydantic import BaseModel, ConfigDict, Field

from ..value_objects.ids import TodoId


def now_millis() -> int:
    """Current wall-clock time as integer epoch milliseconds."""
    return int(time.time() * 1000)


class Todo(BaseModel):
    id: TodoId = Field(default=TodoId(0), ge=0, description="Storage-assigned id, 0 if unsaved")
    title: str = Field(..., description="Display title")
    description: str = Field(default="", description="Optional free text")
    is_completed: bool = Field(default=False, description="Completion flag")
    created_at: int = Field(
        default_factory=now_millis, ge=0, description="Creation time in epoch milliseconds"
    )

    model_config = ConfigDict(frozen=True)

    def toggled(self) -> "Todo":
        """Return a copy with the completion flag flipped."""
        return self.model_copy(update={"is_completed": not self.is_completed})

    def edited(self, title: str, description: str) -> "Todo":
        """Return a copy with new title and description; id and created_at are kept."""
        return self.model_copy(update={"title": title, "description": description})
