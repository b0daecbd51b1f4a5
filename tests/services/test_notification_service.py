"""Unit tests for NotificationService."""

from __future__ import annotations

from datetime import timedelta
from zoneinfo import ZoneInfo

import pytest

from todoflow.models import (
    InvalidTransitionError,
    NotFoundError,
    NotificationSettings,
    NotificationStatus,
    Task,
    TaskState,
    TaskType,
    TaskValidationError,
)
from todoflow.services.notification_service import NotificationService


@pytest.fixture()
def service(repo, clock) -> NotificationService:
    return NotificationService(repo, clock=clock)


def _task(
    clock,
    task_id="t1",
    *,
    state=TaskState.ACTIVE,
    due_in=timedelta(minutes=30),
    notification=None,
    text="Renew passport",
) -> Task:
    return Task(
        id=task_id,
        text=text,
        type=TaskType.ONE_TIME,
        state=state,
        due_at=clock.now + due_in,
        created_at=clock.now,
        updated_at=clock.now,
        notification=notification,
    )


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


class TestUpdateSettings:
    @pytest.mark.asyncio
    async def test_negative_minutes_fall_back_to_default(self, service, repo, clock):
        await repo.create(_task(clock))

        task = await service.update_notification_settings(
            "t1", {"enabled": True, "reminderMinutes": -5}
        )

        assert task.notification.reminder_minutes == 15
        assert (await repo.find_by_id("t1")).notification.reminder_minutes == 15

    @pytest.mark.asyncio
    async def test_enabling_resets_notified_at(self, service, repo, clock):
        settings = NotificationSettings(enabled=False, reminder_minutes=30, notified_at=clock.now)
        await repo.create(_task(clock, notification=settings))

        task = await service.update_notification_settings(
            "t1", {"enabled": True, "reminder_minutes": 30}
        )

        assert task.notification.notified_at is None

    @pytest.mark.asyncio
    async def test_enabled_flag_is_required(self, service, repo, clock):
        await repo.create(_task(clock))
        with pytest.raises(TaskValidationError):
            await service.update_notification_settings("t1", {"reminder_minutes": 30})

    @pytest.mark.asyncio
    async def test_malformed_enabled_flag_is_a_validation_error(self, service, repo, clock):
        await repo.create(_task(clock))
        with pytest.raises(TaskValidationError) as exc_info:
            await service.update_notification_settings("t1", {"enabled": [1]})
        assert exc_info.value.field == "notification.enabled"
        assert (await repo.find_by_id("t1")).notification is None

    @pytest.mark.asyncio
    async def test_terminal_task_is_rejected(self, service, repo, clock):
        await repo.create(_task(clock, state=TaskState.COMPLETED))
        with pytest.raises(InvalidTransitionError):
            await service.update_notification_settings("t1", {"enabled": True})

    @pytest.mark.asyncio
    async def test_unknown_task(self, service):
        with pytest.raises(NotFoundError):
            await service.update_notification_settings("nope", {"enabled": True})


class TestStatusAndMarking:
    @pytest.mark.asyncio
    async def test_status_defaults_when_unset(self, service, repo, clock):
        await repo.create(_task(clock))
        assert await service.get_notification_status("t1") == NotificationStatus()

    @pytest.mark.asyncio
    async def test_mark_notified_sets_timestamp(self, service, repo, clock):
        await repo.create(_task(clock, notification=NotificationSettings(enabled=True)))

        await service.mark_notified("t1")

        status = await service.get_notification_status("t1")
        assert status.notified is True
        assert status.notified_at == clock.now

    @pytest.mark.asyncio
    async def test_mark_notified_twice_keeps_first_timestamp(self, service, repo, clock):
        await repo.create(_task(clock, notification=NotificationSettings(enabled=True)))
        first = clock.now
        await service.mark_notified("t1")
        clock.advance(minutes=5)

        task = await service.mark_notified("t1")

        assert task.notification.notified_at == first

    @pytest.mark.asyncio
    async def test_mark_notified_without_settings(self, service, repo, clock):
        await repo.create(_task(clock))

        task = await service.mark_notified("t1")

        assert task.notification == NotificationSettings(
            enabled=False, reminder_minutes=15, notified_at=clock.now
        )


# ---------------------------------------------------------------------------
# Reminders
# ---------------------------------------------------------------------------


class TestReminders:
    @pytest.mark.asyncio
    async def test_find_due_reminders(self, service, repo, clock):
        on = NotificationSettings(enabled=True, reminder_minutes=60)
        await repo.create(_task(clock, "due", notification=on, text="a"))
        await repo.create(_task(clock, "later", notification=on, due_in=timedelta(hours=3), text="b"))
        await repo.create(_task(clock, "off", notification=NotificationSettings(), text="c"))
        await repo.create(
            _task(clock, "pending", state=TaskState.PENDING, notification=on, text="d")
        )
        await repo.create(
            _task(
                clock,
                "sent",
                notification=on.model_copy(update={"notified_at": clock.now}),
                text="e",
            )
        )

        ready = await service.find_due_reminders()

        assert [t.id for t in ready] == ["due"]

    def test_build_notification(self, service, clock):
        task = _task(clock, due_in=timedelta(minutes=30))
        payload = service.build_notification(task)

        assert payload.title == "Task Reminder"
        assert payload.body == '"Renew passport" is due at 12:30'
        assert payload.tag == "task-t1"
        assert payload.icon == payload.badge == "/favicon.ico"
        assert payload.data.todo_id == "t1"
        assert payload.data.action == "task_reminder"

    def test_build_notification_in_configured_zone(self, repo, clock):
        service = NotificationService(repo, clock=clock, timezone=ZoneInfo("Asia/Tokyo"))
        payload = service.build_notification(_task(clock, due_in=timedelta(minutes=30)))
        assert payload.body.endswith("is due at 21:30")

    def test_build_notification_without_due_date(self, service, clock):
        task = Task(
            id="d1",
            text="Meditate",
            type=TaskType.DAILY,
            created_at=clock.now,
            updated_at=clock.now,
        )
        assert service.build_notification(task).body == '"Meditate" is due soon'


# ---------------------------------------------------------------------------
# Maintenance
# ---------------------------------------------------------------------------


class TestMaintenance:
    @pytest.mark.asyncio
    async def test_disable_for_terminal_tasks(self, service, repo, clock):
        on = NotificationSettings(enabled=True, reminder_minutes=30)
        await repo.create(_task(clock, "done", state=TaskState.COMPLETED, notification=on, text="a"))
        await repo.create(_task(clock, "failed", state=TaskState.FAILED, notification=on, text="b"))
        await repo.create(_task(clock, "active", notification=on, text="c"))

        assert await service.disable_for_terminal_tasks() == 2

        assert (await repo.find_by_id("done")).notification.enabled is False
        assert (await repo.find_by_id("failed")).notification.enabled is False
        assert (await repo.find_by_id("active")).notification.enabled is True
        assert (await repo.find_by_id("done")).notification.reminder_minutes == 30

    @pytest.mark.asyncio
    async def test_cleanup_old_notifications(self, service, repo, clock):
        old = NotificationSettings(enabled=False, notified_at=clock.now - timedelta(days=8))
        recent = NotificationSettings(enabled=False, notified_at=clock.now - timedelta(days=2))
        await repo.create(_task(clock, "old", state=TaskState.COMPLETED, notification=old, text="a"))
        await repo.create(_task(clock, "recent", state=TaskState.FAILED, notification=recent, text="b"))
        await repo.create(_task(clock, "active", notification=old, text="c"))

        assert await service.cleanup_old_notifications() == 1

        assert (await repo.find_by_id("old")).notification.notified_at is None
        assert (await repo.find_by_id("recent")).notification.notified_at is not None
        assert (await repo.find_by_id("active")).notification.notified_at is not None

