"""SQLite storage adapter."""

from .connection import DatabaseConnection, configure_connection, get_connection
from .task_repository import SqliteTaskRepository

__all__ = [
    "DatabaseConnection",
    "SqliteTaskRepository",
    "configure_connection",
    "get_connection",
]
