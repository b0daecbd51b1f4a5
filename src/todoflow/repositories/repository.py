"""Repository abstraction layer for todoflow.

This module defines the persistence port consumed by the task services,
following the hexagonal architecture (Ports & Adapters) pattern. Adapters
return detached copies: mutating a returned Task never changes storage
until it is passed back to ``save``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from todoflow.models import Task, TaskFilters


class TaskRepository(ABC):
    """Abstract base class for task persistence operations.

    Every method may raise StorageError when the backend fails.
    """

    @abstractmethod
    async def find_by_id(self, task_id: str) -> Task | None:
        """Get a task by ID.

        Args:
            task_id: Unique identifier for the task

        Returns:
            Task object, or None if it does not exist
        """
        raise NotImplementedError(
            "TaskRepository.find_by_id() must be implemented by adapter"
        )

    @abstractmethod
    async def find_one(self, filters: TaskFilters) -> Task | None:
        """Get the newest task matching the filters.

        Args:
            filters: TaskFilters object specifying filter criteria

        Returns:
            Task object, or None if nothing matches
        """
        raise NotImplementedError(
            "TaskRepository.find_one() must be implemented by adapter"
        )

    @abstractmethod
    async def find(self, filters: TaskFilters) -> list[Task]:
        """List tasks matching the filters, newest first.

        Args:
            filters: TaskFilters object specifying filter criteria

        Returns:
            List of Task objects matching the filters
        """
        raise NotImplementedError("TaskRepository.find() must be implemented by adapter")

    @abstractmethod
    async def create(self, task: Task) -> Task:
        """Insert a new task.

        Args:
            task: Fully built Task with its id assigned

        Returns:
            The stored Task

        Raises:
            DuplicateActiveTaskError: If the backend enforces active uniqueness
        """
        raise NotImplementedError("TaskRepository.create() must be implemented by adapter")

    @abstractmethod
    async def save(self, task: Task) -> Task:
        """Replace an existing task with the given copy.

        Args:
            task: Task to persist

        Returns:
            The stored Task

        Raises:
            NotFoundError: If the task does not exist
        """
        raise NotImplementedError("TaskRepository.save() must be implemented by adapter")

    @abstractmethod
    async def delete(self, task_id: str) -> bool:
        """Delete a task.

        Args:
            task_id: Unique identifier for the task

        Returns:
            True if a task was deleted
        """
        raise NotImplementedError("TaskRepository.delete() must be implemented by adapter")

    @abstractmethod
    async def delete_many(self, filters: TaskFilters) -> int:
        """Delete every task matching the filters.

        Args:
            filters: TaskFilters object specifying filter criteria

        Returns:
            Number of deleted tasks
        """
        raise NotImplementedError(
            "TaskRepository.delete_many() must be implemented by adapter"
        )
