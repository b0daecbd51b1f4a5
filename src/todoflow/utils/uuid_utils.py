"""UUID utility functions for todoflow.

Provides UUID generation, short UUID display, and short-id resolution.
"""

from __future__ import annotations

import re
import uuid
from typing import TYPE_CHECKING

from todoflow.models import NotFoundError, TaskFilters, TaskValidationError

if TYPE_CHECKING:
    from todoflow.repositories import TaskRepository

UUID_PATTERN = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$", re.IGNORECASE
)

SHORT_ID_LENGTH = 8
MIN_PREFIX_LENGTH = 4


def generate_uuid() -> str:
    """Generate a new UUID as string."""
    return str(uuid.uuid4())


def is_full_uuid(value: str) -> bool:
    return isinstance(value, str) and UUID_PATTERN.match(value) is not None


def shorten_uuid(value: str, length: int = SHORT_ID_LENGTH) -> str:
    """First ``length`` characters of an id, as shown in task lists."""
    return value[:length]


async def resolve_task_id(
    short_or_full_id: str,
    repository: TaskRepository,
    min_length: int = MIN_PREFIX_LENGTH,
) -> str:
    """Resolve a full id or an id prefix to a full task id.

    Args:
        short_or_full_id: Full id or a prefix of at least ``min_length`` chars
        repository: TaskRepository instance
        min_length: Minimum prefix length

    Returns:
        Full id string

    Raises:
        TaskValidationError: If the prefix is too short or ambiguous
        NotFoundError: If no task matches
    """
    identifier = short_or_full_id.strip().lower()

    if is_full_uuid(identifier):
        return identifier

    if len(identifier) < min_length:
        raise TaskValidationError(
            f"ID must be at least {min_length} characters. Got: {identifier}", field="id"
        )

    tasks = await repository.find(TaskFilters(id_prefix=identifier))

    if not tasks:
        raise NotFoundError(identifier)

    if len(tasks) > 1:
        matches = ", ".join(shorten_uuid(t.id) for t in tasks[:5])
        if len(tasks) > 5:
            matches += f", ... ({len(tasks)} total)"
        raise TaskValidationError(
            f"Ambiguous ID '{identifier}' matches {len(tasks)} tasks: {matches}", field="id"
        )

    return tasks[0].id
