from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_serializer

from task_service.models.requests import Priority


def format_timestamp(value: datetime) -> str:
    """ISO-8601 in UTC with millisecond precision and a ``Z`` suffix."""
    return value.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class Task(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int = Field(gt=0, description="Sequential identifier, never reused")
    title: str = Field(min_length=1)
    description: str = ""
    priority: Priority = "medium"
    completed: bool = False
    created_at: datetime = Field(alias="createdAt", description="Creation time in UTC")

    @field_serializer("created_at")
    def _serialize_created_at(self, value: datetime) -> str:
        return format_timestamp(value)


class Statistics(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    count_by_priority: dict[str, int] = Field(
        default_factory=dict,
        alias="countByPriority",
        description="Number of tasks per priority, completed or not",
    )
    completed_by_day: dict[str, int] = Field(
        default_factory=dict,
        alias="completedByDay",
        description="Number of completed tasks per creation day (YYYY-MM-DD)",
    )


class ErrorResponse(BaseModel):
    error: str
    detail: str | None = None


class ValidationErrorResponse(BaseModel):
    errors: list[str]
