"""Tests for the time helpers."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from unittest.mock import patch
from zoneinfo import ZoneInfo

import pytest

from todoflow.utils.clock import day_window, ensure_utc, parse_datetime, resolve_timezone, utc_now


def test_utc_now_is_aware():
    assert utc_now().tzinfo is UTC


def test_ensure_utc():
    naive = datetime(2026, 1, 1, 8, 0)
    assert ensure_utc(naive) == datetime(2026, 1, 1, 8, 0, tzinfo=UTC)
    berlin = datetime(2026, 1, 1, 9, 0, tzinfo=ZoneInfo("Europe/Berlin"))
    assert ensure_utc(berlin) == datetime(2026, 1, 1, 8, 0, tzinfo=UTC)


def test_parse_datetime():
    assert parse_datetime(None) is None
    assert parse_datetime("2026-01-01T08:00:00Z") == datetime(2026, 1, 1, 8, 0, tzinfo=UTC)
    with pytest.raises(ValueError):
        parse_datetime("yesterday")


def test_resolve_timezone_by_name():
    assert resolve_timezone("Asia/Tokyo") == ZoneInfo("Asia/Tokyo")


def test_resolve_timezone_unknown():
    with pytest.raises(ValueError, match="Unknown timezone"):
        resolve_timezone("Nowhere/Special")


def test_resolve_timezone_defaults_to_system_zone():
    with patch("todoflow.utils.clock.tzlocal.get_localzone", return_value=ZoneInfo("UTC")):
        assert resolve_timezone(None) == ZoneInfo("UTC")


def test_day_window_utc():
    start, end = day_window(datetime(2026, 3, 10, 15, 30, tzinfo=UTC), UTC)
    assert start == datetime(2026, 3, 10, tzinfo=UTC)
    assert end == datetime(2026, 3, 11, tzinfo=UTC)


def test_day_window_local_zone():
    # 23:30 UTC on the 9th is already the 10th in Tokyo
    start, end = day_window(datetime(2026, 3, 9, 23, 30, tzinfo=UTC), ZoneInfo("Asia/Tokyo"))
    assert start == datetime(2026, 3, 9, 15, 0, tzinfo=UTC)
    assert end - start == timedelta(hours=24)


def test_day_window_on_dst_change_is_23_hours():
    # Europe/Berlin springs forward on 2026-03-29
    start, end = day_window(datetime(2026, 3, 29, 12, 0, tzinfo=UTC), ZoneInfo("Europe/Berlin"))
    assert end - start == timedelta(hours=23)
