"""Task data models."""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from todoflow.lifecycle.constants import (
    DEFAULT_REMINDER_MINUTES,
    MAX_REMINDER_MINUTES,
    MAX_TEXT_LENGTH,
    MIN_REMINDER_MINUTES,
)
from todoflow.utils.clock import ensure_utc


class TaskType(StrEnum):
    """Kind of task. Immutable after creation."""

    ONE_TIME = "one-time"
    DAILY = "daily"


class TaskState(StrEnum):
    """Lifecycle state of a task."""

    PENDING = "pending"
    ACTIVE = "active"
    COMPLETED = "completed"
    FAILED = "failed"


TERMINAL_STATES = frozenset({TaskState.COMPLETED, TaskState.FAILED})
EDITABLE_STATES = frozenset({TaskState.PENDING, TaskState.ACTIVE})


class NotificationSettings(BaseModel):
    """Reminder configuration stored on a task.

    Attributes:
        enabled: Whether a reminder should be sent
        reminder_minutes: Lead time before ``due_at``, in minutes
        notified_at: When the reminder was sent, None if not yet sent
    """

    enabled: bool = False
    reminder_minutes: int = Field(
        default=DEFAULT_REMINDER_MINUTES, ge=MIN_REMINDER_MINUTES, le=MAX_REMINDER_MINUTES
    )
    notified_at: datetime | None = None

    @field_validator("notified_at")
    @classmethod
    def _to_utc(cls, value: datetime | None) -> datetime | None:
        return ensure_utc(value) if value is not None else None


class NotificationInput(BaseModel):
    """Caller-supplied reminder payload.

    Both fields are optional and unvalidated here; the notification
    resolver decides what gets stored.
    """

    model_config = ConfigDict(extra="ignore")

    enabled: bool | None = None
    reminder_minutes: Any = None


class Task(BaseModel):
    """Task model representing a complete task entity.

    Attributes:
        id: Unique identifier, assigned at creation
        text: Trimmed task text (1-500 chars)
        type: one-time or daily
        state: Current lifecycle state
        due_at: Due timestamp, present only for one-time tasks
        created_at: Creation timestamp
        updated_at: Last update timestamp
        activated_at: Set by activate/reactivate
        completed_at: Set by complete
        failed_at: Set by fail
        is_reactivation: True when spawned from a terminal task
        original_id: Id of the task this one was reactivated from
        notification: Optional reminder settings
    """

    id: str
    text: str
    type: TaskType
    state: TaskState = TaskState.PENDING
    due_at: datetime | None = None
    created_at: datetime
    updated_at: datetime
    activated_at: datetime | None = None
    completed_at: datetime | None = None
    failed_at: datetime | None = None
    is_reactivation: bool = False
    original_id: str | None = None
    notification: NotificationSettings | None = None

    @field_validator(
        "due_at", "created_at", "updated_at", "activated_at", "completed_at", "failed_at"
    )
    @classmethod
    def _to_utc(cls, value: datetime | None) -> datetime | None:
        return ensure_utc(value) if value is not None else None

    @field_validator("text")
    @classmethod
    def _check_text(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Todo text is required")
        if len(value) > MAX_TEXT_LENGTH:
            raise ValueError(f"Todo text cannot exceed {MAX_TEXT_LENGTH} characters")
        return value

    @model_validator(mode="after")
    def _check_due_at(self) -> Task:
        if self.type == TaskType.ONE_TIME and self.due_at is None:
            raise ValueError("Due date is required for one-time tasks")
        if self.type == TaskType.DAILY and self.due_at is not None:
            raise ValueError("Daily tasks cannot have a due date")
        return self


class TaskFilters(BaseModel):
    """Filters for querying tasks.

    Every field that is set must match (logical AND).

    Attributes:
        text: Exact (trimmed) text match
        type: Task type
        state: Single state
        states: Any of these states
        due_before: due_at strictly earlier than this
        activated_from: activated_at at or after this
        activated_before: activated_at strictly earlier than this
        notification_enabled: Match notification.enabled (absent reads as False)
        notified_before: notification.notified_at strictly earlier than this
        exclude_id: Skip the task with this id
        id_prefix: Id starts with this prefix (short id lookup)
    """

    text: str | None = None
    type: TaskType | None = None
    state: TaskState | None = None
    states: list[TaskState] | None = None
    due_before: datetime | None = None
    activated_from: datetime | None = None
    activated_before: datetime | None = None
    notification_enabled: bool | None = None
    notified_before: datetime | None = None
    exclude_id: str | None = None
    id_prefix: str | None = None

    def matches(self, task: Task) -> bool:
        """Evaluate the filter against a task held in memory."""
        if self.text is not None and task.text != self.text:
            return False
        if self.type is not None and task.type != self.type:
            return False
        if self.state is not None and task.state != self.state:
            return False
        if self.states is not None and task.state not in self.states:
            return False
        if self.due_before is not None and (
            task.due_at is None or task.due_at >= self.due_before
        ):
            return False
        if self.activated_from is not None and (
            task.activated_at is None or task.activated_at < self.activated_from
        ):
            return False
        if self.activated_before is not None and (
            task.activated_at is None or task.activated_at >= self.activated_before
        ):
            return False
        if self.notification_enabled is not None:
            enabled = task.notification.enabled if task.notification else False
            if enabled != self.notification_enabled:
                return False
        if self.notified_before is not None:
            notified_at = task.notification.notified_at if task.notification else None
            if notified_at is None or notified_at >= self.notified_before:
                return False
        if self.exclude_id is not None and task.id == self.exclude_id:
            return False
        if self.id_prefix is not None and not task.id.startswith(self.id_prefix):
            return False
        return True
