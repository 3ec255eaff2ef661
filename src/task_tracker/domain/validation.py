from __future__ import annotations
from typing import Any

from task_tracker.domain.errors import ValidationError
from task_tracker.domain.task_models import (
    DESCRIPTION_MAX_LENGTH,
    TITLE_MAX_LENGTH,
    TaskCreate,
)


def validate_task_input(payload: Any) -> TaskCreate:
    """
    Check a POST /api/tasks body and return the trimmed fields.

    Rules run in a fixed order and the first violation is raised.
    """
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object")

    title = payload.get("title")
    if not isinstance(title, str) or not title.strip():
        raise ValidationError("Title is required and must be a string")

    title = title.strip()
    if len(title) > TITLE_MAX_LENGTH:
        raise ValidationError(f"Title must be {TITLE_MAX_LENGTH} characters or less")

    description = payload.get("description")
    # null, false, 0 and "" all mean "no description"
    if description in (None, False, 0, ""):
        description = ""
    elif not isinstance(description, str):
        raise ValidationError("Description must be a string")

    description = description.strip()
    if len(description) > DESCRIPTION_MAX_LENGTH:
        raise ValidationError(
            f"Description must be {DESCRIPTION_MAX_LENGTH} characters or less"
        )

    return TaskCreate(title=title, description=description)
