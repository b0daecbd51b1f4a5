"""Shared test fixtures and configuration.

Keeps tests away from the real log, config and data directories and
gives every test a controllable clock.
"""

from __future__ import annotations

import logging
import logging.handlers
from datetime import UTC, datetime, timedelta
from itertools import count
from unittest.mock import patch

import pytest

from todoflow.adapters.memory import InMemoryTaskRepository

NOW = datetime(2026, 3, 10, 12, 0, 0, tzinfo=UTC)


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, now: datetime = NOW):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


# ---------------------------------------------------------------------------
# Filesystem isolation
# ---------------------------------------------------------------------------


def _drop_file_handlers() -> None:
    """Detach the app log file handler; pytest's capture handlers stay."""
    root = logging.getLogger("todoflow")
    for handler in list(root.handlers):
        if isinstance(handler, logging.handlers.RotatingFileHandler):
            root.removeHandler(handler)
            handler.close()


@pytest.fixture(autouse=True)
def isolated_dirs(tmp_path):
    """Redirect log and config directories into tmp_path."""
    import todoflow.config as config_mod
    import todoflow.utils.logger as logger_mod

    _drop_file_handlers()
    logger_mod._logger = None
    config_mod._config_manager = None

    with (
        patch("todoflow.utils.logger.user_log_dir", return_value=str(tmp_path / "logs")),
        patch("todoflow.config.user_config_dir", return_value=str(tmp_path / "config")),
    ):
        yield tmp_path

    _drop_file_handlers()
    logger_mod._logger = None
    config_mod._config_manager = None


# ---------------------------------------------------------------------------
# Core fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def ids():
    """Deterministic id factory: task-1, task-2, ..."""
    counter = count(1)
    return lambda: f"task-{next(counter)}"


@pytest.fixture()
def repo() -> InMemoryTaskRepository:
    return InMemoryTaskRepository()
