"""Job service - batch reconciliation that advances tasks without a user.

Both jobs are meant to be triggered from outside (cron, systemd timer,
``todoflow jobs ...``). A failure on one task is logged and skipped so
the rest of the batch still runs.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, tzinfo

from todoflow.lifecycle import transitions
from todoflow.models import JobResult, Task, TaskError, TaskFilters, TaskState, TaskType
from todoflow.repositories import TaskRepository
from todoflow.utils.clock import Clock, day_window, resolve_timezone, utc_now
from todoflow.utils.logger import get_logger
from todoflow.utils.uuid_utils import generate_uuid

OVERDUE_SWEEP = "overdue-sweep"
DAILY_ROLLOVER = "daily-rollover"


class JobService:
    """Service running the overdue sweep and the daily rollover."""

    def __init__(
        self,
        task_repository: TaskRepository,
        *,
        clock: Clock = utc_now,
        id_factory: Callable[[], str] = generate_uuid,
        timezone: tzinfo | None = None,
    ):
        """Initialize the job service.

        Args:
            task_repository: TaskRepository implementation for data access
            clock: Returns the current aware UTC time
            id_factory: Returns a fresh task id
            timezone: Zone whose midnight starts a new day; None means the
                system zone
        """
        self.repository = task_repository
        self.clock = clock
        self.id_factory = id_factory
        self.timezone = timezone if timezone is not None else resolve_timezone()
        self.logger = get_logger("services.jobs")

    async def run_overdue_sweep(self) -> JobResult:
        """Fail every active one-time task whose due date has passed."""
        now = self.clock()
        result = JobResult(job=OVERDUE_SWEEP)
        overdue = await self.repository.find(
            TaskFilters(state=TaskState.ACTIVE, type=TaskType.ONE_TIME, due_before=now)
        )
        for task in overdue:
            try:
                await self.repository.save(transitions.fail(task, now))
            except TaskError:
                self.logger.exception("overdue sweep: could not fail task %s", task.id)
                result.skipped += 1
                continue
            result.processed += 1
        self.logger.info(
            "overdue sweep: %d failed, %d skipped", result.processed, result.skipped
        )
        return result

    async def run_daily_rollover(self) -> JobResult:
        """Make sure every daily task has an active instance for today.

        Daily tasks are grouped by text; the newest record of a group is the
        template. A group with an instance activated inside today's window
        (whatever its state now) is left alone, so running the job twice a
        day creates nothing new. An instance still active from an earlier
        day is failed first.
        """
        now = self.clock()
        day_start, _ = day_window(now, self.timezone)
        result = JobResult(job=DAILY_ROLLOVER)

        groups: dict[str, list[Task]] = {}
        for task in await self.repository.find(TaskFilters(type=TaskType.DAILY)):
            groups.setdefault(task.text, []).append(task)

        for text, tasks in groups.items():
            try:
                created = await self._roll_over(tasks, now, day_start, result)
            except TaskError:
                self.logger.exception("daily rollover: could not roll over %r", text)
                result.skipped += 1
                continue
            if created:
                result.processed += 1

        self.logger.info(
            "daily rollover: %d activated, %d expired, %d skipped",
            result.processed,
            result.expired,
            result.skipped,
        )
        return result

    async def _roll_over(
        self, tasks: list[Task], now: datetime, day_start: datetime, result: JobResult
    ) -> bool:
        if any(t.activated_at is not None and t.activated_at >= day_start for t in tasks):
            return False

        stale = [t for t in tasks if t.state == TaskState.ACTIVE]

        for task in stale:
            await self.repository.save(transitions.fail(task, now))
            result.expired += 1
            self.logger.info("daily rollover: expired yesterday's instance %s", task.id)

        instance = transitions.spawn_daily(tasks[0], task_id=self.id_factory(), now=now)
        await self.repository.create(instance)
        self.logger.info("daily rollover: activated %s", instance.id)
        return True
