"""Database connection management for the todoflow SQLite store.

One connection per process, opened lazily, migrated on open and closed at
interpreter exit.
"""

from __future__ import annotations

import atexit
import os
import sqlite3
from pathlib import Path

from platformdirs import user_data_dir

from todoflow.adapters.sqlite.migrations import ALL_MIGRATIONS, MigrationRunner
from todoflow.utils.logger import get_logger

DEFAULT_TIMEOUT = 30.0
MEMORY_DB = ":memory:"


def default_db_path() -> Path:
    return Path(user_data_dir("todoflow")) / "todoflow.db"


def configure_connection(connection: sqlite3.Connection) -> sqlite3.Connection:
    """Apply row factory and pragmas, then bring the schema up to date."""
    connection.row_factory = sqlite3.Row
    connection.execute("PRAGMA foreign_keys = ON")
    connection.execute("PRAGMA journal_mode = WAL")
    MigrationRunner(connection).migrate(ALL_MIGRATIONS)
    return connection


class DatabaseConnection:
    """Process-wide connection holder.

    Reopens the connection when a different database path is requested.
    """

    _connection: sqlite3.Connection | None = None
    _db_path: Path | None = None
    _registered: bool = False

    @classmethod
    def get_connection(
        cls, db_path: str | Path | None = None, timeout: float = DEFAULT_TIMEOUT
    ) -> sqlite3.Connection:
        """Get or create the database connection.

        Args:
            db_path: Path to database file. If None, uses the platform data dir.
            timeout: Seconds to wait on a locked database before failing

        Returns:
            Configured sqlite3.Connection
        """
        if db_path is not None and str(db_path) == MEMORY_DB:
            path = Path(MEMORY_DB)
        else:
            path = Path(db_path) if db_path is not None else default_db_path()

        if cls._connection is not None and cls._db_path == path:
            return cls._connection

        cls.close_connection()

        in_memory = str(path) == MEMORY_DB
        if not in_memory:
            path.parent.mkdir(parents=True, exist_ok=True)
        is_new_database = not in_memory and not path.exists()

        connection = sqlite3.connect(str(path), check_same_thread=False, timeout=timeout)
        cls._connection = configure_connection(connection)
        if is_new_database:
            os.chmod(path, 0o600)
        cls._db_path = path

        if not cls._registered:
            atexit.register(cls.close_connection)
            cls._registered = True

        return connection

    @classmethod
    def close_connection(cls) -> None:
        """Close the connection if one is open."""
        if cls._connection is None:
            return
        try:
            cls._connection.commit()
            cls._connection.close()
        except sqlite3.Error as e:
            get_logger("sqlite").warning("could not close database cleanly: %s", e)
        finally:
            cls._connection = None
            cls._db_path = None

    @classmethod
    def get_db_path(cls) -> Path | None:
        return cls._db_path


def get_connection(
    db_path: str | Path | None = None, timeout: float = DEFAULT_TIMEOUT
) -> sqlite3.Connection:
    return DatabaseConnection.get_connection(db_path, timeout)
