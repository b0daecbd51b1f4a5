"""Due date policy for one-time tasks."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any

from todoflow.lifecycle.constants import MIN_DUE_DATE_OFFSET_MINUTES
from todoflow.models.exceptions import DueDateTooSoonError, InvalidDueDateError
from todoflow.utils.clock import ensure_utc, parse_datetime

MIN_DUE_DATE_OFFSET = timedelta(minutes=MIN_DUE_DATE_OFFSET_MINUTES)


def parse_due_at(value: Any) -> datetime:
    """Parse a caller-supplied due date into aware UTC.

    Accepts datetime objects and ISO-8601 strings.

    Raises:
        InvalidDueDateError: If the value cannot be parsed
    """
    if isinstance(value, datetime):
        return ensure_utc(value)
    if not isinstance(value, str) or not value.strip():
        raise InvalidDueDateError("Invalid due date format")
    try:
        return parse_datetime(value)
    except ValueError:
        raise InvalidDueDateError("Invalid due date format") from None


def check_lead_time(due_at: datetime, now: datetime) -> datetime:
    """Require ``due_at >= now + 10 minutes``.

    Raises:
        DueDateTooSoonError: If the due date is too close or in the past
    """
    if due_at < ensure_utc(now) + MIN_DUE_DATE_OFFSET:
        raise DueDateTooSoonError(
            f"Due date must be at least {MIN_DUE_DATE_OFFSET_MINUTES} minutes from now"
        )
    return due_at


def resolve_due_at(value: Any, now: datetime) -> datetime:
    """Parse and validate a due date for create/update of a one-time task."""
    return check_lead_time(parse_due_at(value), now)
