"""Storage adapters implementing todoflow.repositories.TaskRepository."""

from .memory import InMemoryTaskRepository
from .sqlite import SqliteTaskRepository

__all__ = ["InMemoryTaskRepository", "SqliteTaskRepository"]
