from collections.abc import Mapping
from typing import Any, Literal, get_args

from pydantic import BaseModel, Field


Priority = Literal["high", "medium", "low"]
PRIORITIES: tuple[str, ...] = get_args(Priority)


class TaskCreate(BaseModel):
    title: str = Field(..., min_length=1, description="Short task title")
    description: str = Field(default="", description="Free-form details")
    priority: Priority = Field(default="medium", description="Task urgency")

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "TaskCreate":
        """Build create input from an already validated JSON object.

        Falsy optional fields fall back to their defaults and unknown keys
        are dropped.
        """
        description = payload.get("description") or ""
        if not isinstance(description, str):
            description = str(description)
        return cls(
            title=payload["title"],
            description=description,
            priority=payload.get("priority") or "medium",
        )
