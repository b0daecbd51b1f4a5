"""Tests for the error hierarchy."""

from __future__ import annotations

from todoflow.models import (
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


def test_every_error_is_a_task_error_with_a_kind():
    errors = [
        (TaskValidationError("bad", field="text"), ErrorKind.VALIDATION),
        (
            InvalidTransitionError("no", state="failed", operation="complete"),
            ErrorKind.INVALID_TRANSITION,
        ),
        (DuplicateActiveTaskError(existing_id="t1"), ErrorKind.DUPLICATE_ACTIVE_TASK),
        (DueDateTooSoonError("soon"), ErrorKind.DUE_DATE_TOO_SOON),
        (InvalidDueDateError("bad date"), ErrorKind.INVALID_DUE_DATE),
        (NotFoundError("t1"), ErrorKind.NOT_FOUND),
        (StorageError("disk"), ErrorKind.STORAGE),
    ]
    for error, kind in errors:
        assert isinstance(error, TaskError)
        assert error.kind == kind


def test_error_fields():
    assert NotFoundError("t1").field == "id"
    assert NotFoundError("t1").task_id == "t1"
    assert DueDateTooSoonError("soon").field == "due_at"
    duplicate = DuplicateActiveTaskError(existing_id="t1")
    assert duplicate.field == "text"
    assert duplicate.existing_id == "t1"
    assert str(duplicate) == "An active task with this content already exists"
    transition = InvalidTransitionError("no", state="failed", operation="complete")
    assert (transition.state, transition.operation) == ("failed", "complete")
