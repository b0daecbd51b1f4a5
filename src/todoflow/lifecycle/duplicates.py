"""Duplicate guard.

At most one active task may exist per (text, type). The check is a
point-in-time read with no lock: two callers racing on the same key can
both pass it. The SQLite adapter backs it with a partial unique index.
"""

from __future__ import annotations

from todoflow.models import DuplicateActiveTaskError, Task, TaskFilters, TaskState, TaskType
from todoflow.repositories import TaskRepository


async def find_active_duplicate(
    repository: TaskRepository,
    text: str,
    task_type: TaskType,
    *,
    exclude_id: str | None = None,
) -> Task | None:
    return await repository.find_one(
        TaskFilters(text=text, type=task_type, state=TaskState.ACTIVE, exclude_id=exclude_id)
    )


async def ensure_no_active_duplicate(
    repository: TaskRepository,
    text: str,
    task_type: TaskType,
    *,
    exclude_id: str | None = None,
) -> None:
    """Raise DuplicateActiveTaskError if an active task with this key exists."""
    existing = await find_active_duplicate(
        repository, text, task_type, exclude_id=exclude_id
    )
    if existing is not None:
        raise DuplicateActiveTaskError(existing_id=existing.id)
