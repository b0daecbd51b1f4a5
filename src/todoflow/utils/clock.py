"""Time helpers shared by the lifecycle core and the storage adapters."""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime, timedelta, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import tzlocal

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(UTC)


def ensure_utc(value: datetime) -> datetime:
    """Normalize a datetime to aware UTC. Naive values are taken as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def parse_datetime(value: str | datetime | None) -> datetime | None:
    """Parse an ISO-8601 string (``Z`` suffix allowed) into aware UTC.

    Args:
        value: String, datetime object, or None

    Returns:
        Aware UTC datetime or None

    Raises:
        ValueError: If the string is not ISO-8601
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return ensure_utc(value)
    return ensure_utc(datetime.fromisoformat(value.strip().replace("Z", "+00:00")))


def resolve_timezone(name: str | None = None) -> tzinfo:
    """Return the named IANA zone, or the system zone when name is empty."""
    if name:
        try:
            return ZoneInfo(name)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown timezone: {name}") from e
    return tzlocal.get_localzone()


def day_window(now: datetime, tz: tzinfo) -> tuple[datetime, datetime]:
    """Local midnight-to-midnight window containing ``now``, in UTC.

    Returns:
        (start, end) with start inclusive and end exclusive
    """
    local = ensure_utc(now).astimezone(tz)
    start_local = local.replace(hour=0, minute=0, second=0, microsecond=0)
    # Re-localize the next midnight so DST days keep 23 or 25 hours.
    next_day = (start_local + timedelta(days=1)).date()
    end_local = datetime(next_day.year, next_day.month, next_day.day, tzinfo=tz)
    return start_local.astimezone(UTC), end_local.astimezone(UTC)
