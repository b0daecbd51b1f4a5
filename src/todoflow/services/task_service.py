"""Task service - the lifecycle operations of a todo.

This service layer sits between callers (CLI, HTTP) and the repository.
Each operation loads a detached copy, runs the pure lifecycle rules,
and writes the result only after every check has passed.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from todoflow.lifecycle import transitions
from todoflow.lifecycle.duplicates import ensure_no_active_duplicate
from todoflow.lifecycle.notifications import to_input
from todoflow.lifecycle.validation import validate_state
from todoflow.models import (
    NotFoundError,
    NotificationInput,
    Task,
    TaskFilters,
    TaskState,
)
from todoflow.repositories import TaskRepository
from todoflow.utils.clock import Clock, utc_now
from todoflow.utils.logger import get_logger
from todoflow.utils.uuid_utils import generate_uuid

NotificationPayload = NotificationInput | dict[str, Any] | None


class TaskService:
    """Service for task lifecycle operations.

    Every method is async and returns the persisted task (or a count).
    Failures are raised as ``TaskError`` subclasses whose ``kind`` tells
    the caller what went wrong.
    """

    def __init__(
        self,
        task_repository: TaskRepository,
        *,
        clock: Clock = utc_now,
        id_factory: Callable[[], str] = generate_uuid,
    ):
        """Initialize the task service.

        Args:
            task_repository: TaskRepository implementation for data access
            clock: Returns the current aware UTC time
            id_factory: Returns a fresh task id
        """
        self.repository = task_repository
        self.clock = clock
        self.id_factory = id_factory
        self.logger = get_logger("services.tasks")

    async def _load(self, task_id: str) -> Task:
        task = await self.repository.find_by_id(task_id)
        if task is None:
            raise NotFoundError(task_id)
        return task

    async def get_task(self, task_id: str) -> Task:
        """Get a specific task by ID.

        Raises:
            NotFoundError: If no task has this id
        """
        return await self._load(task_id)

    async def list_tasks(self, state: str | TaskState | None = None) -> list[Task]:
        """List tasks newest first, optionally restricted to one state."""
        filters = TaskFilters(state=validate_state(state)) if state is not None else TaskFilters()
        return await self.repository.find(filters)

    async def list_grouped(self) -> dict[TaskState, list[Task]]:
        """All tasks grouped by state; every state is present, possibly empty."""
        grouped: dict[TaskState, list[Task]] = {state: [] for state in TaskState}
        for task in await self.repository.find(TaskFilters()):
            grouped[task.state].append(task)
        return grouped

    async def create_task(
        self,
        text: Any,
        task_type: Any,
        due_at: Any = None,
        notification: NotificationPayload = None,
    ) -> Task:
        """Create a new pending task.

        Args:
            text: Task text (trimmed, 1-500 chars)
            task_type: ``one-time`` or ``daily``
            due_at: Due date (ISO string or datetime), one-time tasks only
            notification: Optional ``{enabled, reminder_minutes}`` payload

        Returns:
            Created Task object

        Raises:
            TaskValidationError: Bad text, type or missing due date
            DueDateError: Unparsable due date or less than 10 minutes ahead
            DuplicateActiveTaskError: An active task with this text and type exists
        """
        task = transitions.new_task(
            task_id=self.id_factory(),
            text=text,
            task_type=task_type,
            now=self.clock(),
            due_at=due_at,
            notification=to_input(notification),
        )
        await ensure_no_active_duplicate(self.repository, task.text, task.type)
        created = await self.repository.create(task)
        self.logger.info("task created: %s (%s)", created.id, created.type)
        return created

    async def update_task(
        self,
        task_id: str,
        *,
        text: Any = None,
        due_at: Any = None,
        notification: NotificationPayload = None,
    ) -> Task:
        """Edit text, due date or notification settings of a pending or active task.

        A due date supplied for a daily task is ignored.
        """
        task = await self._load(task_id)
        updated = transitions.update(
            task,
            self.clock(),
            text=text,
            due_at=due_at,
            notification=to_input(notification),
        )
        if updated.state == TaskState.ACTIVE and updated.text != task.text:
            await ensure_no_active_duplicate(
                self.repository, updated.text, updated.type, exclude_id=updated.id
            )
        saved = await self.repository.save(updated)
        self.logger.info("task updated: %s", saved.id)
        return saved

    async def activate_task(self, task_id: str) -> Task:
        """Move a pending task to active."""
        task = await self._load(task_id)
        activated = transitions.activate(task, self.clock())
        await ensure_no_active_duplicate(
            self.repository, activated.text, activated.type, exclude_id=activated.id
        )
        saved = await self.repository.save(activated)
        self.logger.info("task activated: %s", saved.id)
        return saved

    async def complete_task(self, task_id: str) -> Task:
        """Move an active task to completed."""
        task = await self._load(task_id)
        saved = await self.repository.save(transitions.complete(task, self.clock()))
        self.logger.info("task completed: %s", saved.id)
        return saved

    async def fail_task(self, task_id: str) -> Task:
        """Move an active task to failed."""
        task = await self._load(task_id)
        saved = await self.repository.save(transitions.fail(task, self.clock()))
        self.logger.info("task failed: %s", saved.id)
        return saved

    async def reactivate_task(
        self,
        task_id: str,
        new_due_at: Any = None,
        notification: NotificationPayload = None,
    ) -> Task:
        """Spawn a new active task from a completed or failed one.

        The source task is left as it is. The new record links back to it
        through ``original_id`` and inherits its notification settings with
        ``notified_at`` cleared, unless explicit settings are given.
        """
        source = await self._load(task_id)
        task = transitions.reactivate(
            source,
            task_id=self.id_factory(),
            now=self.clock(),
            new_due_at=new_due_at,
            notification=to_input(notification),
        )
        await ensure_no_active_duplicate(self.repository, task.text, task.type)
        created = await self.repository.create(task)
        self.logger.info("task reactivated: %s -> %s", source.id, created.id)
        return created

    async def delete_task(self, task_id: str) -> int:
        """Delete one task. Returns 1.

        Raises:
            NotFoundError: If no task has this id
        """
        if not await self.repository.delete(task_id):
            raise NotFoundError(task_id)
        self.logger.info("task deleted: %s", task_id)
        return 1

    async def delete_by_state(self, state: str | TaskState) -> int:
        """Delete every task in ``state``. Returns the number removed."""
        target = validate_state(state)
        count = await self.repository.delete_many(TaskFilters(state=target))
        self.logger.info("deleted %d %s task(s)", count, target)
        return count
