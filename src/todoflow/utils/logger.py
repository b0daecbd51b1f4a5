"""Application logger.

Everything goes to one rotating file under the platform log directory;
nothing is printed, so log output never mixes with command output.
Modules log through children of the ``todoflow`` logger::

    logger = get_logger("services.tasks")   # -> "todoflow.services.tasks"
"""

from __future__ import annotations

import logging
import logging.handlers
from pathlib import Path

from platformdirs import user_log_dir

_APP_NAME = "todoflow"
_LOG_FILE = "todoflow.log"
_MAX_BYTES = 5 * 1024 * 1024  # 5 MB
_BACKUP_COUNT = 3
_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"
_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"
_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

_logger: logging.Logger | None = None


def _file_handler() -> logging.Handler:
    log_dir = Path(user_log_dir(_APP_NAME))
    log_dir.mkdir(parents=True, exist_ok=True)
    handler = logging.handlers.RotatingFileHandler(
        log_dir / _LOG_FILE, maxBytes=_MAX_BYTES, backupCount=_BACKUP_COUNT, encoding="utf-8"
    )
    handler.setFormatter(logging.Formatter(_FORMAT, _DATE_FORMAT))
    return handler


def _file_handlers(logger: logging.Logger) -> list[logging.Handler]:
    return [
        h for h in logger.handlers if isinstance(h, logging.handlers.RotatingFileHandler)
    ]


def get_logger(name: str | None = None) -> logging.Logger:
    """Return the ``todoflow`` logger, or its child ``name``.

    The file handler is attached on first use.
    """
    global _logger
    if _logger is None:
        root = logging.getLogger(_APP_NAME)
        root.setLevel(logging.DEBUG)
        root.propagate = False
        # other handlers (e.g. log capture) may already be attached
        if not _file_handlers(root):
            root.addHandler(_file_handler())
        _logger = root
    return _logger.getChild(name) if name else _logger


def set_level(level: str) -> None:
    """Change the threshold by level name; raises ValueError for unknown names."""
    level = level.upper()
    if level not in _LEVELS:
        raise ValueError(f"Invalid log level: {level}")
    get_logger().setLevel(level)
