"""Notification data models."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field


class NotificationData(BaseModel):
    """Routing data attached to a reminder."""

    todo_id: str
    action: Literal["task_reminder"] = "task_reminder"


class NotificationPayload(BaseModel):
    """Reminder content handed to a delivery transport."""

    title: str
    body: str
    icon: str | None = "/favicon.ico"
    badge: str | None = "/favicon.ico"
    tag: str
    data: NotificationData


class NotificationStatus(BaseModel):
    """Read-side view of a task's reminder configuration."""

    enabled: bool = False
    reminder_minutes: int = Field(default=15)
    notified: bool = False
    notified_at: datetime | None = None
