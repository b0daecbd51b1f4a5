"""Tests for the application logger utility."""

from __future__ import annotations

import logging
import logging.handlers

import pytest

from todoflow.utils.logger import get_logger, set_level


def _rotating(logger: logging.Logger) -> list[logging.handlers.RotatingFileHandler]:
    return [h for h in logger.handlers if isinstance(h, logging.handlers.RotatingFileHandler)]


def _flush(logger: logging.Logger) -> None:
    for handler in logger.handlers:
        handler.flush()


def test_get_logger_creates_log_file(isolated_dirs):
    logger = get_logger()

    assert (isolated_dirs / "logs" / "todoflow.log").exists()
    assert isinstance(logger, logging.Logger)
    assert logger.name == "todoflow"
    assert logger.propagate is False


def test_get_logger_returns_singleton():
    assert get_logger() is get_logger()


def test_child_loggers_write_to_the_same_file(isolated_dirs):
    child = get_logger("services.tasks")
    child.info("hello from child")
    _flush(get_logger())

    assert child.name == "todoflow.services.tasks"
    content = (isolated_dirs / "logs" / "todoflow.log").read_text()
    assert "hello from child" in content
    assert "[todoflow.services.tasks]" in content


def test_handler_is_rotating():
    [handler] = _rotating(get_logger())
    assert handler.maxBytes == 5 * 1024 * 1024
    assert handler.backupCount == 3


def test_set_level():
    set_level("warning")
    assert get_logger().level == logging.WARNING
    with pytest.raises(ValueError):
        set_level("chatty")


def test_file_handler_is_added_next_to_existing_handlers(isolated_dirs):
    foreign = logging.NullHandler()
    logging.getLogger("todoflow").addHandler(foreign)
    try:
        logger = get_logger()
        assert foreign in logger.handlers
        assert len(_rotating(logger)) == 1
        assert (isolated_dirs / "logs" / "todoflow.log").exists()
    finally:
        logging.getLogger("todoflow").removeHandler(foreign)
