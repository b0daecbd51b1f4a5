"""Services layer for todoflow.

Services hold the task lifecycle operations and batch jobs on top of a
TaskRepository.
"""

from .job_service import JobService
from .notification_service import NotificationService
from .task_service import TaskService

__all__ = ["JobService", "NotificationService", "TaskService"]
