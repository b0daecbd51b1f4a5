"""Notification service - reminder bookkeeping for tasks.

Delivery (push, browser, email) is someone else's job: this service
finds the tasks whose reminder window is open, builds the payload to
send and records that a reminder went out.
"""

from __future__ import annotations

from datetime import timedelta, tzinfo
from typing import Any

from todoflow.lifecycle import notifications
from todoflow.lifecycle.constants import NOTIFICATION_RETENTION_DAYS
from todoflow.lifecycle.transitions import ensure_editable
from todoflow.models import (
    TERMINAL_STATES,
    NotFoundError,
    NotificationData,
    NotificationInput,
    NotificationPayload,
    NotificationStatus,
    Task,
    TaskFilters,
    TaskState,
    TaskValidationError,
)
from todoflow.repositories import TaskRepository
from todoflow.utils.clock import Clock, utc_now
from todoflow.utils.logger import get_logger


class NotificationService:
    """Service for task reminder settings and reminder bookkeeping."""

    def __init__(
        self,
        task_repository: TaskRepository,
        *,
        clock: Clock = utc_now,
        timezone: tzinfo | None = None,
    ):
        """Initialize the notification service.

        Args:
            task_repository: TaskRepository implementation for data access
            clock: Returns the current aware UTC time
            timezone: Zone used to render due times in reminder text;
                None renders in UTC
        """
        self.repository = task_repository
        self.clock = clock
        self.timezone = timezone
        self.logger = get_logger("services.notifications")

    async def _load(self, task_id: str) -> Task:
        task = await self.repository.find_by_id(task_id)
        if task is None:
            raise NotFoundError(task_id)
        return task

    async def mark_notified(self, task_id: str) -> Task:
        """Record that the reminder for a task was sent.

        Idempotent: a task already marked keeps its first timestamp.
        """
        task = await self._load(task_id)
        settings = notifications.mark_notified(task.notification, self.clock())
        if settings == task.notification:
            return task
        saved = await self.repository.save(task.model_copy(update={"notification": settings}))
        self.logger.info("task marked as notified: %s", task_id)
        return saved

    async def update_notification_settings(
        self, task_id: str, settings: NotificationInput | dict[str, Any]
    ) -> Task:
        """Replace the reminder settings of a pending or active task.

        Out-of-range or missing ``reminder_minutes`` falls back to 15.
        Enabling clears ``notified_at`` so the reminder can fire again.

        Raises:
            TaskValidationError: If ``enabled`` is missing
            NotFoundError: If no task has this id
            InvalidTransitionError: If the task is completed or failed
        """
        payload = notifications.to_input(settings)
        if payload is None or payload.enabled is None:
            raise TaskValidationError(
                "Notification enabled flag is required", field="notification.enabled"
            )
        task = await self._load(task_id)
        ensure_editable(task)
        resolved = notifications.for_update(task.notification, payload)
        saved = await self.repository.save(
            task.model_copy(update={"notification": resolved, "updated_at": self.clock()})
        )
        self.logger.info("notification settings updated for task %s", task_id)
        return saved

    async def get_notification_status(self, task_id: str) -> NotificationStatus:
        """Reminder status of a task; absent settings read as the defaults."""
        return notifications.status_of(await self._load(task_id))

    async def find_due_reminders(self) -> list[Task]:
        """Active tasks whose reminder window is open and not yet notified."""
        now = self.clock()
        candidates = await self.repository.find(
            TaskFilters(state=TaskState.ACTIVE, notification_enabled=True)
        )
        ready = [task for task in candidates if notifications.reminder_due(task, now)]
        self.logger.info("found %d task(s) ready for notification", len(ready))
        return ready

    def build_notification(self, task: Task) -> NotificationPayload:
        """Reminder payload for a task, ready for a delivery channel."""
        if task.due_at is not None:
            local_due = task.due_at.astimezone(self.timezone) if self.timezone else task.due_at
            when = f"at {local_due.strftime('%H:%M')}"
        else:
            when = "soon"
        return NotificationPayload(
            title="Task Reminder",
            body=f'"{task.text}" is due {when}',
            tag=f"task-{task.id}",
            data=NotificationData(todo_id=task.id),
        )

    async def disable_for_terminal_tasks(self) -> int:
        """Turn reminders off on completed and failed tasks. Returns the count."""
        tasks = await self.repository.find(
            TaskFilters(states=sorted(TERMINAL_STATES), notification_enabled=True)
        )
        for task in tasks:
            assert task.notification is not None
            settings = task.notification.model_copy(update={"enabled": False})
            await self.repository.save(task.model_copy(update={"notification": settings}))
        self.logger.info("disabled notifications for %d completed/failed task(s)", len(tasks))
        return len(tasks)

    async def cleanup_old_notifications(self) -> int:
        """Clear ``notified_at`` older than the retention window on terminal tasks."""
        cutoff = self.clock() - timedelta(days=NOTIFICATION_RETENTION_DAYS)
        tasks = await self.repository.find(
            TaskFilters(states=sorted(TERMINAL_STATES), notified_before=cutoff)
        )
        for task in tasks:
            assert task.notification is not None
            settings = task.notification.model_copy(update={"notified_at": None})
            await self.repository.save(task.model_copy(update={"notification": settings}))
        self.logger.info("cleaned up %d old notification record(s)", len(tasks))
        return len(tasks)
