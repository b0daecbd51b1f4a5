"""Error kinds raised by todoflow operations.

Every error carries a ``kind`` so an outer layer (CLI, HTTP) can map it to
an exit or status code without inspecting the class.
"""

from __future__ import annotations

from enum import StrEnum


class ErrorKind(StrEnum):
    VALIDATION = "validation"
    INVALID_TRANSITION = "invalid_transition"
    DUPLICATE_ACTIVE_TASK = "duplicate_active_task"
    DUE_DATE_TOO_SOON = "due_date_too_soon"
    INVALID_DUE_DATE = "invalid_due_date"
    NOT_FOUND = "not_found"
    STORAGE = "storage"


class TaskError(Exception):
    """Base exception for all todoflow errors."""

    kind: ErrorKind = ErrorKind.VALIDATION

    def __init__(self, message: str, *, field: str | None = None):
        super().__init__(message)
        self.message = message
        self.field = field


class TaskValidationError(TaskError):
    """Raised when input has the wrong shape, length or type."""

    kind = ErrorKind.VALIDATION


class InvalidTransitionError(TaskError):
    """Raised when an operation is not legal for the task's current state."""

    kind = ErrorKind.INVALID_TRANSITION

    def __init__(self, message: str, *, state: str, operation: str):
        super().__init__(message, field="state")
        self.state = state
        self.operation = operation


class DuplicateActiveTaskError(TaskError):
    """Raised when an active task with the same text and type already exists."""

    kind = ErrorKind.DUPLICATE_ACTIVE_TASK

    def __init__(
        self,
        message: str = "An active task with this content already exists",
        *,
        existing_id: str | None = None,
    ):
        super().__init__(message, field="text")
        self.existing_id = existing_id


class DueDateError(TaskError):
    """Base for due date policy violations."""

    def __init__(self, message: str):
        super().__init__(message, field="due_at")


class DueDateTooSoonError(DueDateError):
    """Raised when a due date is closer than the minimum lead time."""

    kind = ErrorKind.DUE_DATE_TOO_SOON


class InvalidDueDateError(DueDateError):
    """Raised when a due date cannot be parsed."""

    kind = ErrorKind.INVALID_DUE_DATE


class NotFoundError(TaskError):
    """Raised when no task exists with the requested id."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, task_id: str):
        super().__init__("Todo not found", field="id")
        self.task_id = task_id


class StorageError(TaskError):
    """Raised when the persistence collaborator fails."""

    kind = ErrorKind.STORAGE
