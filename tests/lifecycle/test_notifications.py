"""Tests for the notification settings resolver."""

from __future__ import annotations

from datetime import timedelta

import pytest

from todoflow.lifecycle import notifications
from todoflow.models import (
    NotificationInput,
    NotificationSettings,
    NotificationStatus,
    Task,
    TaskState,
    TaskType,
    TaskValidationError,
)


def _task(clock, notification=None, due_in=timedelta(minutes=30)) -> Task:
    return Task(
        id="t1",
        text="Call the bank",
        type=TaskType.ONE_TIME,
        state=TaskState.ACTIVE,
        due_at=clock.now + due_in,
        created_at=clock.now,
        updated_at=clock.now,
        activated_at=clock.now,
        notification=notification,
    )


# ---------------------------------------------------------------------------
# reminder_minutes coercion
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "value,expected",
    [
        (1, 1),
        (60, 60),
        (10080, 10080),
        (0, 15),
        (-5, 15),
        (10081, 15),
        (None, 15),
        (30.0, 30),
        (30.5, 15),
        ("45", 45),
        ("-5", 15),
        ("abc", 15),
        (True, 15),
    ],
)
def test_coerce_reminder_minutes(value, expected):
    assert notifications.coerce_reminder_minutes(value) == expected


def test_to_input_accepts_camel_case():
    payload = notifications.to_input({"enabled": True, "reminderMinutes": 60})
    assert payload == NotificationInput(enabled=True, reminder_minutes=60)


def test_to_input_passes_none_through():
    assert notifications.to_input(None) is None


@pytest.mark.parametrize("payload", [{"enabled": "maybe"}, {"enabled": [1]}])
def test_to_input_rejects_non_boolean_enabled(payload):
    with pytest.raises(TaskValidationError) as exc_info:
        notifications.to_input(payload)
    assert exc_info.value.field == "notification.enabled"


def test_to_input_rejects_non_mapping():
    with pytest.raises(TaskValidationError) as exc_info:
        notifications.to_input(["enabled", True])
    assert exc_info.value.field == "notification"


# ---------------------------------------------------------------------------
# create / update / reactivate
# ---------------------------------------------------------------------------


def test_for_create_without_enabled_flag_writes_nothing():
    assert notifications.for_create(None) is None
    assert notifications.for_create(NotificationInput(reminder_minutes=30)) is None


def test_for_create_defaults_minutes():
    settings = notifications.for_create(NotificationInput(enabled=True))
    assert settings == NotificationSettings(enabled=True, reminder_minutes=15, notified_at=None)


def test_for_update_without_enabled_flag_preserves_current(clock):
    current = NotificationSettings(enabled=True, reminder_minutes=30, notified_at=clock.now)
    assert notifications.for_update(current, NotificationInput(reminder_minutes=5)) is current
    assert notifications.for_update(current, None) is current


def test_for_update_disabling_keeps_notified_at(clock):
    current = NotificationSettings(enabled=True, reminder_minutes=30, notified_at=clock.now)
    updated = notifications.for_update(current, NotificationInput(enabled=False, reminder_minutes=30))
    assert updated.enabled is False
    assert updated.notified_at == clock.now


def test_for_update_out_of_range_minutes_become_default():
    updated = notifications.for_update(None, NotificationInput(enabled=True, reminder_minutes=-5))
    assert updated.reminder_minutes == 15


def test_for_reactivate_without_source_settings():
    assert notifications.for_reactivate(None, None) is None


# ---------------------------------------------------------------------------
# mark_notified / status / reminder window
# ---------------------------------------------------------------------------


def test_mark_notified_without_settings_creates_defaults(clock):
    settings = notifications.mark_notified(None, clock.now)
    assert settings == NotificationSettings(enabled=False, reminder_minutes=15, notified_at=clock.now)


def test_mark_notified_is_idempotent(clock):
    first = notifications.mark_notified(NotificationSettings(enabled=True), clock.now)
    second = notifications.mark_notified(first, clock.now + timedelta(minutes=5))
    assert second.notified_at == clock.now


def test_status_of_task_without_settings(clock):
    assert notifications.status_of(_task(clock)) == NotificationStatus(
        enabled=False, reminder_minutes=15, notified=False, notified_at=None
    )


def test_status_of_notified_task(clock):
    task = _task(clock, NotificationSettings(enabled=True, reminder_minutes=20, notified_at=clock.now))
    status = notifications.status_of(task)
    assert status.notified is True
    assert status.notified_at == clock.now
    assert status.reminder_minutes == 20


@pytest.mark.parametrize(
    "due_in,reminder,expected",
    [
        (timedelta(minutes=30), 60, True),
        (timedelta(minutes=30), 30, True),
        (timedelta(minutes=30), 15, False),
        (timedelta(seconds=0), 15, False),
        (timedelta(minutes=-1), 15, False),
    ],
)
def test_reminder_due_window(clock, due_in, reminder, expected):
    task = _task(clock, NotificationSettings(enabled=True, reminder_minutes=reminder), due_in)
    assert notifications.reminder_due(task, clock.now) is expected


def test_reminder_not_due_when_disabled_or_sent(clock):
    disabled = _task(clock, NotificationSettings(enabled=False, reminder_minutes=60))
    sent = _task(clock, NotificationSettings(enabled=True, reminder_minutes=60, notified_at=clock.now))
    assert not notifications.reminder_due(disabled, clock.now)
    assert not notifications.reminder_due(sent, clock.now)
    assert not notifications.reminder_due(_task(clock), clock.now)
