"""Service wiring.

Builds the repository chosen by the configuration once and hands the
same instance to every service, so commands never pick a storage
backend themselves.
"""

from __future__ import annotations

from dataclasses import dataclass

from todoflow.config import Config, get_config_manager
from todoflow.repositories import TaskRepository
from todoflow.services.job_service import JobService
from todoflow.services.notification_service import NotificationService
from todoflow.services.task_service import TaskService
from todoflow.utils.clock import Clock, resolve_timezone, utc_now
from todoflow.utils.logger import get_logger, set_level


@dataclass
class ServiceContext:
    """Services sharing one repository."""

    repository: TaskRepository
    tasks: TaskService
    notifications: NotificationService
    jobs: JobService


def build_repository(config: Config) -> TaskRepository:
    """Create the task repository for the configured backend."""
    # Import here so the memory backend never touches sqlite setup
    if config.storage.backend == "memory":
        from todoflow.adapters.memory import InMemoryTaskRepository

        return InMemoryTaskRepository()

    from todoflow.adapters.sqlite import SqliteTaskRepository

    return SqliteTaskRepository(config.storage.db_path, timeout=config.storage.timeout)


def build_services(
    config: Config,
    repository: TaskRepository | None = None,
    *,
    clock: Clock = utc_now,
) -> ServiceContext:
    """Wire the task, notification and job services around one repository."""
    if repository is None:
        repository = build_repository(config)
    timezone = resolve_timezone(config.schedule.timezone)
    get_logger().debug(
        "services built: backend=%s timezone=%s", config.storage.backend, timezone
    )
    return ServiceContext(
        repository=repository,
        tasks=TaskService(repository, clock=clock),
        notifications=NotificationService(repository, clock=clock, timezone=timezone),
        jobs=JobService(repository, clock=clock, timezone=timezone),
    )


def get_service_context(profile: str = "default") -> ServiceContext:
    """Services for a configuration profile, with its log level applied."""
    config = get_config_manager(profile).config
    set_level(config.logging.level)
    return build_services(config)
