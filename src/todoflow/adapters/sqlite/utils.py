"""Row mapping helpers for the SQLite adapter."""

from __future__ import annotations

import sqlite3
from datetime import datetime
from typing import Any

from todoflow.models import NotificationSettings, Task
from todoflow.utils.clock import ensure_utc, parse_datetime


def to_iso(value: datetime | None) -> str | None:
    """Serialize a datetime as fixed-precision UTC ISO-8601 (sortable as text)."""
    if value is None:
        return None
    return ensure_utc(value).isoformat(timespec="microseconds")


def task_to_row(task: Task) -> dict[str, Any]:
    settings = task.notification
    return {
        "id": task.id,
        "text": task.text,
        "type": task.type.value,
        "state": task.state.value,
        "due_at": to_iso(task.due_at),
        "created_at": to_iso(task.created_at),
        "updated_at": to_iso(task.updated_at),
        "activated_at": to_iso(task.activated_at),
        "completed_at": to_iso(task.completed_at),
        "failed_at": to_iso(task.failed_at),
        "is_reactivation": int(task.is_reactivation),
        "original_id": task.original_id,
        "notification_enabled": int(settings.enabled) if settings else None,
        "reminder_minutes": settings.reminder_minutes if settings else None,
        "notified_at": to_iso(settings.notified_at) if settings else None,
    }


def row_to_task(row: sqlite3.Row) -> Task:
    data = dict(row)
    notification = None
    if data["notification_enabled"] is not None:
        notification = NotificationSettings(
            enabled=bool(data["notification_enabled"]),
            reminder_minutes=data["reminder_minutes"],
            notified_at=parse_datetime(data["notified_at"]),
        )
    return Task(
        id=data["id"],
        text=data["text"],
        type=data["type"],
        state=data["state"],
        due_at=parse_datetime(data["due_at"]),
        created_at=parse_datetime(data["created_at"]),
        updated_at=parse_datetime(data["updated_at"]),
        activated_at=parse_datetime(data["activated_at"]),
        completed_at=parse_datetime(data["completed_at"]),
        failed_at=parse_datetime(data["failed_at"]),
        is_reactivation=bool(data["is_reactivation"]),
        original_id=data["original_id"],
        notification=notification,
    )
