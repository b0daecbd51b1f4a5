"""Transition engine for the task state machine.

Pure functions: each takes a detached task plus "now" and returns a new
record to persist, or raises before anything is written.

    pending   --activate-->   active
    active    --complete-->   completed
    active    --fail------->  failed
    completed --reactivate--> active   (new record)
    failed    --reactivate--> active   (new record)
"""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum
from typing import Any

from todoflow.lifecycle import due_dates, notifications
from todoflow.lifecycle.validation import build_task, validate_text, validate_type
from todoflow.models.exceptions import InvalidTransitionError
from todoflow.models.task import (
    EDITABLE_STATES,
    NotificationInput,
    Task,
    TaskState,
    TaskType,
)


class Operation(StrEnum):
    ACTIVATE = "activate"
    COMPLETE = "complete"
    FAIL = "fail"
    REACTIVATE = "reactivate"
    UPDATE = "update"


TRANSITIONS: dict[tuple[TaskState, Operation], TaskState] = {
    (TaskState.PENDING, Operation.ACTIVATE): TaskState.ACTIVE,
    (TaskState.ACTIVE, Operation.COMPLETE): TaskState.COMPLETED,
    (TaskState.ACTIVE, Operation.FAIL): TaskState.FAILED,
    (TaskState.COMPLETED, Operation.REACTIVATE): TaskState.ACTIVE,
    (TaskState.FAILED, Operation.REACTIVATE): TaskState.ACTIVE,
}

_REJECTIONS = {
    Operation.ACTIVATE: "Only pending tasks can be activated",
    Operation.COMPLETE: "Only active tasks can be completed",
    Operation.FAIL: "Only active tasks can be marked as failed",
    Operation.REACTIVATE: "Only completed or failed tasks can be re-activated",
    Operation.UPDATE: "Only pending or active tasks can be edited",
}


def target_state(state: TaskState, operation: Operation) -> TaskState:
    """Look up the edge for (state, operation) or raise InvalidTransitionError."""
    try:
        return TRANSITIONS[(state, operation)]
    except KeyError:
        raise InvalidTransitionError(
            _REJECTIONS[operation], state=state.value, operation=operation.value
        ) from None


def ensure_editable(task: Task) -> None:
    if task.state not in EDITABLE_STATES:
        raise InvalidTransitionError(
            _REJECTIONS[Operation.UPDATE],
            state=task.state.value,
            operation=Operation.UPDATE.value,
        )


def _evolve(task: Task, **changes: Any) -> Task:
    return build_task({**task.model_dump(), **changes})


def _blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def new_task(
    *,
    task_id: str,
    text: Any,
    task_type: Any,
    now: datetime,
    due_at: Any = None,
    notification: NotificationInput | None = None,
) -> Task:
    """Build a pending task for the create operation.

    A one-time task needs a due date at least 10 minutes ahead; a due date
    passed for a daily task is ignored.
    """
    text = validate_text(text)
    task_type = validate_type(task_type)
    resolved_due = None
    # A missing due date on a one-time task is rejected by the model itself.
    if task_type == TaskType.ONE_TIME and not _blank(due_at):
        resolved_due = due_dates.resolve_due_at(due_at, now)
    return build_task(
        {
            "id": task_id,
            "text": text,
            "type": task_type,
            "state": TaskState.PENDING,
            "due_at": resolved_due,
            "created_at": now,
            "updated_at": now,
            "notification": notifications.for_create(notification),
        }
    )


def activate(task: Task, now: datetime) -> Task:
    state = target_state(task.state, Operation.ACTIVATE)
    return _evolve(task, state=state, activated_at=now, updated_at=now)


def complete(task: Task, now: datetime) -> Task:
    state = target_state(task.state, Operation.COMPLETE)
    return _evolve(task, state=state, completed_at=now, updated_at=now)


def fail(task: Task, now: datetime) -> Task:
    state = target_state(task.state, Operation.FAIL)
    return _evolve(task, state=state, failed_at=now, updated_at=now)


def reactivate(
    source: Task,
    *,
    task_id: str,
    now: datetime,
    new_due_at: Any = None,
    notification: NotificationInput | None = None,
) -> Task:
    """Spawn a new active record from a completed or failed task.

    The source is left untouched. One-time tasks take ``new_due_at`` when
    given and otherwise keep the source's due date; daily tasks never carry
    one.
    """
    state = target_state(source.state, Operation.REACTIVATE)
    due_at = None
    if source.type == TaskType.ONE_TIME:
        due_at = (
            due_dates.parse_due_at(new_due_at) if new_due_at is not None else source.due_at
        )
    return build_task(
        {
            "id": task_id,
            "text": source.text,
            "type": source.type,
            "state": state,
            "due_at": due_at,
            "created_at": now,
            "updated_at": now,
            "activated_at": now,
            "is_reactivation": True,
            "original_id": source.id,
            "notification": notifications.for_reactivate(source.notification, notification),
        }
    )


def spawn_daily(template: Task, *, task_id: str, now: datetime) -> Task:
    """New active instance of a daily task for the current day."""
    return build_task(
        {
            "id": task_id,
            "text": template.text,
            "type": TaskType.DAILY,
            "state": TaskState.ACTIVE,
            "created_at": now,
            "updated_at": now,
            "activated_at": now,
            "notification": notifications.for_reactivate(template.notification, None),
        }
    )


def update(
    task: Task,
    now: datetime,
    *,
    text: Any = None,
    due_at: Any = None,
    notification: NotificationInput | None = None,
) -> Task:
    """Apply a text/due date/notification edit to a pending or active task."""
    ensure_editable(task)
    changes: dict[str, Any] = {"updated_at": now}
    if text is not None:
        changes["text"] = validate_text(text)
    if not _blank(due_at) and task.type == TaskType.ONE_TIME:
        changes["due_at"] = due_dates.resolve_due_at(due_at, now)
    if notification is not None:
        resolved = notifications.for_update(task.notification, notification)
        changes["notification"] = resolved.model_dump() if resolved else None
    return _evolve(task, **changes)
