from collections.abc import Mapping
from typing import Any

from task_service.models.requests import PRIORITIES


TITLE_REQUIRED = "title is required"
INVALID_PRIORITY = "invalid priority"


def validate_task(payload: Mapping[str, Any]) -> list[str]:
    """Return every rule the create payload breaks; an empty list means valid."""
    errors: list[str] = []

    title = payload.get("title")
    if not isinstance(title, str) or not title:
        errors.append(TITLE_REQUIRED)

    priority = payload.get("priority")
    if priority and priority not in PRIORITIES:
        errors.append(INVALID_PRIORITY)

    return errors
