"""In-memory implementation of TaskRepository."""

from __future__ import annotations

from todoflow.models import NotFoundError, StorageError, Task, TaskFilters
from todoflow.repositories import TaskRepository


class InMemoryTaskRepository(TaskRepository):
    """Dict-backed task repository.

    Stores and returns deep copies so callers always work on detached
    records.
    """

    def __init__(self, tasks: list[Task] | None = None):
        self._tasks: dict[str, Task] = {}
        for task in tasks or []:
            self._tasks[task.id] = task.model_copy(deep=True)

    def _sorted(self, filters: TaskFilters) -> list[Task]:
        matches = [t for t in self._tasks.values() if filters.matches(t)]
        matches.sort(key=lambda t: t.created_at, reverse=True)
        return matches

    async def find_by_id(self, task_id: str) -> Task | None:
        task = self._tasks.get(task_id)
        return task.model_copy(deep=True) if task else None

    async def find_one(self, filters: TaskFilters) -> Task | None:
        matches = self._sorted(filters)
        return matches[0].model_copy(deep=True) if matches else None

    async def find(self, filters: TaskFilters) -> list[Task]:
        return [t.model_copy(deep=True) for t in self._sorted(filters)]

    async def create(self, task: Task) -> Task:
        if task.id in self._tasks:
            raise StorageError(f"Task already exists: {task.id}")
        self._tasks[task.id] = task.model_copy(deep=True)
        return task.model_copy(deep=True)

    async def save(self, task: Task) -> Task:
        if task.id not in self._tasks:
            raise NotFoundError(task.id)
        self._tasks[task.id] = task.model_copy(deep=True)
        return task.model_copy(deep=True)

    async def delete(self, task_id: str) -> bool:
        return self._tasks.pop(task_id, None) is not None

    async def delete_many(self, filters: TaskFilters) -> int:
        doomed = [t.id for t in self._tasks.values() if filters.matches(t)]
        for task_id in doomed:
            del self._tasks[task_id]
        return len(doomed)
