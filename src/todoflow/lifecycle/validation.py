"""Task entity invariants.

Input checks run before any transition builds a new record, and
``build_task`` re-validates the finished record through the pydantic model
so a stored task can never violate the entity rules.
"""

from __future__ import annotations

from typing import Any

from pydantic import ValidationError

from todoflow.lifecycle.constants import MAX_TEXT_LENGTH
from todoflow.models.exceptions import TaskValidationError
from todoflow.models.task import Task, TaskState, TaskType


def validate_text(text: Any) -> str:
    """Return trimmed task text or raise TaskValidationError."""
    if text is None or not isinstance(text, str) or not text.strip():
        raise TaskValidationError("Todo text is required", field="text")
    text = text.strip()
    if len(text) > MAX_TEXT_LENGTH:
        raise TaskValidationError(
            f"Todo text cannot exceed {MAX_TEXT_LENGTH} characters", field="text"
        )
    return text


def validate_type(value: Any) -> TaskType:
    try:
        return TaskType(value)
    except ValueError:
        raise TaskValidationError(
            "Task type must be either 'one-time' or 'daily'", field="type"
        ) from None


def validate_state(value: Any) -> TaskState:
    try:
        return TaskState(value)
    except ValueError:
        allowed = ", ".join(s.value for s in TaskState)
        raise TaskValidationError(
            f"State must be one of: {allowed}", field="state"
        ) from None


def build_task(data: dict[str, Any]) -> Task:
    """Construct a Task, turning pydantic errors into TaskValidationError."""
    try:
        return Task.model_validate(data)
    except ValidationError as e:
        error = e.errors()[0]
        loc = error.get("loc") or ()
        field = str(loc[0]) if loc else None
        ctx_error = (error.get("ctx") or {}).get("error")
        message = str(ctx_error) if ctx_error else error.get("msg", str(e))
        raise TaskValidationError(message, field=field or _field_for(message)) from e


def _field_for(message: str) -> str | None:
    # Model-level validator errors carry no location.
    if "due date" in message.lower():
        return "due_at"
    return None
