"""Notification settings resolver.

Decides what reminder configuration a task carries after create, update,
reactivate and the reminder bookkeeping operations.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime, timedelta
from typing import Any

from pydantic import ValidationError

from todoflow.lifecycle.constants import (
    DEFAULT_REMINDER_MINUTES,
    MAX_REMINDER_MINUTES,
    MIN_REMINDER_MINUTES,
)
from todoflow.models.exceptions import TaskValidationError
from todoflow.models.notification import NotificationStatus
from todoflow.models.task import NotificationInput, NotificationSettings, Task


def coerce_reminder_minutes(value: Any) -> int:
    """Return value if it is an integer within range, else the default (15)."""
    if isinstance(value, bool):
        return DEFAULT_REMINDER_MINUTES
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if isinstance(value, str) and value.strip().lstrip("-").isdigit():
        value = int(value.strip())
    if not isinstance(value, int):
        return DEFAULT_REMINDER_MINUTES
    if value < MIN_REMINDER_MINUTES or value > MAX_REMINDER_MINUTES:
        return DEFAULT_REMINDER_MINUTES
    return value


def to_input(payload: NotificationInput | dict[str, Any] | None) -> NotificationInput | None:
    """Normalize a caller payload; camelCase ``reminderMinutes`` is accepted.

    Raises:
        TaskValidationError: If the payload is not a mapping or ``enabled``
            is not a boolean
    """
    if payload is None or isinstance(payload, NotificationInput):
        return payload
    if not isinstance(payload, Mapping):
        raise TaskValidationError(
            "Notification settings must be an object", field="notification"
        )
    data = dict(payload)
    if "reminderMinutes" in data and "reminder_minutes" not in data:
        data["reminder_minutes"] = data.pop("reminderMinutes")
    try:
        return NotificationInput.model_validate(data)
    except ValidationError as e:
        error = e.errors()[0]
        loc = ".".join(str(part) for part in error.get("loc", ()))
        field = f"notification.{loc}" if loc else "notification"
        raise TaskValidationError(
            f"Invalid notification settings: {error['msg']}", field=field
        ) from e


def for_create(payload: NotificationInput | None) -> NotificationSettings | None:
    """Settings for a new task. No ``enabled`` flag means no settings at all."""
    if payload is None or payload.enabled is None:
        return None
    return NotificationSettings(
        enabled=payload.enabled,
        reminder_minutes=coerce_reminder_minutes(payload.reminder_minutes),
    )


def for_update(
    current: NotificationSettings | None, payload: NotificationInput | None
) -> NotificationSettings | None:
    """Settings after an edit. Enabling resets ``notified_at``."""
    if payload is None or payload.enabled is None:
        return current
    notified_at = current.notified_at if current else None
    if payload.enabled:
        notified_at = None
    return NotificationSettings(
        enabled=payload.enabled,
        reminder_minutes=coerce_reminder_minutes(payload.reminder_minutes),
        notified_at=notified_at,
    )


def for_reactivate(
    source: NotificationSettings | None, payload: NotificationInput | None
) -> NotificationSettings | None:
    """Carry settings over to a reactivated task with ``notified_at`` cleared.

    Explicit settings in the reactivate call override the carried ones.
    """
    explicit = for_create(payload)
    if explicit is not None:
        return explicit
    if source is None:
        return None
    return NotificationSettings(
        enabled=source.enabled,
        reminder_minutes=source.reminder_minutes,
        notified_at=None,
    )


def mark_notified(current: NotificationSettings | None, now: datetime) -> NotificationSettings:
    """Record a sent reminder. A second call keeps the first timestamp."""
    if current is None:
        return NotificationSettings(notified_at=now)
    if current.notified_at is not None:
        return current
    return current.model_copy(update={"notified_at": now})


def status_of(task: Task) -> NotificationStatus:
    settings = task.notification
    if settings is None:
        return NotificationStatus()
    return NotificationStatus(
        enabled=settings.enabled,
        reminder_minutes=settings.reminder_minutes,
        notified=settings.notified_at is not None,
        notified_at=settings.notified_at,
    )


def reminder_due(task: Task, now: datetime) -> bool:
    """True when an unsent reminder's window has opened and the task is not yet due."""
    settings = task.notification
    if settings is None or not settings.enabled or settings.notified_at is not None:
        return False
    if task.due_at is None:
        return False
    remind_at = task.due_at - timedelta(minutes=settings.reminder_minutes)
    return remind_at <= now < task.due_at
