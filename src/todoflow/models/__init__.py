"""Data models for todoflow."""

from .exceptions import (
    DueDateError,
    DueDateTooSoonError,
    DuplicateActiveTaskError,
    ErrorKind,
    InvalidDueDateError,
    InvalidTransitionError,
    NotFoundError,
    StorageError,
    TaskError,
    TaskValidationError,
)
from .job import JobResult
from .notification import NotificationData, NotificationPayload, NotificationStatus
from .task import (
    EDITABLE_STATES,
    TERMINAL_STATES,
    NotificationInput,
    NotificationSettings,
    Task,
    TaskFilters,
    TaskState,
    TaskType,
)

__all__ = [
    "DueDateError",
    "DueDateTooSoonError",
    "DuplicateActiveTaskError",
    "EDITABLE_STATES",
    "ErrorKind",
    "InvalidDueDateError",
    "InvalidTransitionError",
    "JobResult",
    "NotFoundError",
    "NotificationData",
    "NotificationInput",
    "NotificationPayload",
    "NotificationSettings",
    "NotificationStatus",
    "StorageError",
    "TERMINAL_STATES",
    "Task",
    "TaskError",
    "TaskFilters",
    "TaskState",
    "TaskType",
    "TaskValidationError",
]
