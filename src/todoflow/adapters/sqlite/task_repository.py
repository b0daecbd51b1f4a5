"""SQLite implementation of TaskRepository."""

from __future__ import annotations

import contextlib
import sqlite3
from collections.abc import Iterator
from pathlib import Path
from typing import Any

from todoflow.adapters.sqlite.connection import DEFAULT_TIMEOUT, get_connection
from todoflow.adapters.sqlite.schema import TODO_COLUMNS
from todoflow.adapters.sqlite.utils import row_to_task, task_to_row, to_iso
from todoflow.models import (
    DuplicateActiveTaskError,
    NotFoundError,
    StorageError,
    Task,
    TaskFilters,
)
from todoflow.repositories import TaskRepository

_ACTIVE_UNIQUE_MARKERS = ("uq_todos_active_text_type", "todos.text, todos.type")


def build_where_clause(filters: TaskFilters) -> tuple[str, list[Any]]:
    """Translate TaskFilters into a SQL WHERE clause and its parameters."""
    conditions: list[str] = []
    params: list[Any] = []

    if filters.text is not None:
        conditions.append("text = ?")
        params.append(filters.text)
    if filters.type is not None:
        conditions.append("type = ?")
        params.append(filters.type.value)
    if filters.state is not None:
        conditions.append("state = ?")
        params.append(filters.state.value)
    if filters.states is not None:
        if not filters.states:
            conditions.append("0 = 1")
        else:
            conditions.append(f"state IN ({', '.join('?' for _ in filters.states)})")
            params.extend(s.value for s in filters.states)
    if filters.due_before is not None:
        conditions.append("due_at IS NOT NULL AND due_at < ?")
        params.append(to_iso(filters.due_before))
    if filters.activated_from is not None:
        conditions.append("activated_at IS NOT NULL AND activated_at >= ?")
        params.append(to_iso(filters.activated_from))
    if filters.activated_before is not None:
        conditions.append("activated_at IS NOT NULL AND activated_at < ?")
        params.append(to_iso(filters.activated_before))
    if filters.notification_enabled is not None:
        conditions.append("COALESCE(notification_enabled, 0) = ?")
        params.append(int(filters.notification_enabled))
    if filters.notified_before is not None:
        conditions.append("notified_at IS NOT NULL AND notified_at < ?")
        params.append(to_iso(filters.notified_before))
    if filters.exclude_id is not None:
        conditions.append("id != ?")
        params.append(filters.exclude_id)
    if filters.id_prefix is not None:
        conditions.append("id LIKE ? ESCAPE '\\'")
        params.append(_escape_like(filters.id_prefix) + "%")

    where_clause = " AND ".join(conditions) if conditions else "1=1"
    return where_clause, params


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class SqliteTaskRepository(TaskRepository):
    """SQLite implementation of task repository."""

    def __init__(
        self,
        db_path: str | Path | None = None,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        connection: sqlite3.Connection | None = None,
    ):
        """Initialize SQLite task repository.

        Args:
            db_path: Optional database file path. If None, uses default location.
            timeout: Seconds to wait on a locked database
            connection: Pre-configured connection (tests, embedding)
        """
        self.db_path = db_path
        self.timeout = timeout
        self._connection = connection

    @property
    def connection(self) -> sqlite3.Connection:
        """Get or create database connection."""
        if self._connection is None:
            with self._storage_errors():
                self._connection = get_connection(self.db_path, self.timeout)
        return self._connection

    @contextlib.contextmanager
    def _storage_errors(self) -> Iterator[None]:
        """Surface sqlite3 failures as todoflow errors, rolling back the write."""
        try:
            yield
        except sqlite3.IntegrityError as e:
            self._rollback()
            if any(marker in str(e) for marker in _ACTIVE_UNIQUE_MARKERS):
                raise DuplicateActiveTaskError() from e
            raise StorageError(f"Storage constraint violated: {e}") from e
        except sqlite3.Error as e:
            self._rollback()
            raise StorageError(f"Storage failure: {e}") from e

    def _rollback(self) -> None:
        if self._connection is not None:
            with contextlib.suppress(sqlite3.Error):
                self._connection.rollback()

    def _select(self, filters: TaskFilters, limit: int | None = None) -> list[Task]:
        where, params = build_where_clause(filters)
        query = f"SELECT * FROM todos WHERE {where} ORDER BY created_at DESC, rowid DESC"
        if limit is not None:
            query += " LIMIT ?"
            params.append(limit)
        with self._storage_errors():
            rows = self.connection.execute(query, params).fetchall()
        return [row_to_task(row) for row in rows]

    async def find_by_id(self, task_id: str) -> Task | None:
        with self._storage_errors():
            row = self.connection.execute(
                "SELECT * FROM todos WHERE id = ?", (task_id,)
            ).fetchone()
        return row_to_task(row) if row else None

    async def find_one(self, filters: TaskFilters) -> Task | None:
        tasks = self._select(filters, limit=1)
        return tasks[0] if tasks else None

    async def find(self, filters: TaskFilters) -> list[Task]:
        return self._select(filters)

    async def create(self, task: Task) -> Task:
        row = task_to_row(task)
        placeholders = ", ".join("?" for _ in TODO_COLUMNS)
        with self._storage_errors():
            self.connection.execute(
                f"INSERT INTO todos ({', '.join(TODO_COLUMNS)}) VALUES ({placeholders})",
                [row[col] for col in TODO_COLUMNS],
            )
            self.connection.commit()
        return task

    async def save(self, task: Task) -> Task:
        row = task_to_row(task)
        columns = [col for col in TODO_COLUMNS if col != "id"]
        set_clause = ", ".join(f"{col} = ?" for col in columns)
        with self._storage_errors():
            cursor = self.connection.execute(
                f"UPDATE todos SET {set_clause} WHERE id = ?",
                [row[col] for col in columns] + [task.id],
            )
            self.connection.commit()
        if cursor.rowcount == 0:
            raise NotFoundError(task.id)
        return task

    async def delete(self, task_id: str) -> bool:
        with self._storage_errors():
            cursor = self.connection.execute("DELETE FROM todos WHERE id = ?", (task_id,))
            self.connection.commit()
        return cursor.rowcount > 0

    async def delete_many(self, filters: TaskFilters) -> int:
        where, params = build_where_clause(filters)
        with self._storage_errors():
            cursor = self.connection.execute(f"DELETE FROM todos WHERE {where}", params)
            self.connection.commit()
        return cursor.rowcount
