"""Forward-only migrations for the todoflow SQLite store.

A migration is a numbered list of SQL statements. The runner applies the
ones newer than the version recorded in ``schema_version``; each runs in
its own transaction together with its version row, so a failing step
leaves neither a half-built schema nor a bogus version behind.
"""

from __future__ import annotations

import sqlite3
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import UTC, datetime
from operator import attrgetter

from todoflow.utils.logger import get_logger

CREATE_VERSION_TABLE = """
CREATE TABLE IF NOT EXISTS schema_version (
    version INTEGER PRIMARY KEY,
    description TEXT NOT NULL,
    applied_at TEXT NOT NULL
)
"""


@dataclass(frozen=True)
class Migration:
    """One schema step.

    Attributes:
        version: Sequential number recorded in ``schema_version``
        description: Short label shown in the history
        statements: SQL run in order inside a single transaction
    """

    version: int
    description: str
    statements: tuple[str, ...]


class MigrationRunner:
    """Brings a connection's schema up to date."""

    def __init__(self, connection: sqlite3.Connection):
        self.connection = connection
        self.logger = get_logger("sqlite.migrations")
        with connection:
            connection.execute(CREATE_VERSION_TABLE)

    @property
    def version(self) -> int:
        """Highest applied version, 0 on a fresh database."""
        (current,) = self.connection.execute(
            "SELECT COALESCE(MAX(version), 0) FROM schema_version"
        ).fetchone()
        return current

    def pending(self, migrations: Iterable[Migration]) -> list[Migration]:
        current = self.version
        return sorted(
            (m for m in migrations if m.version > current), key=attrgetter("version")
        )

    def apply(self, migration: Migration) -> None:
        """Run one migration and record it.

        Raises:
            ValueError: If the schema is already at or past this version
            RuntimeError: If a statement fails; nothing is kept
        """
        current = self.version
        if migration.version <= current:
            raise ValueError(
                f"Migration {migration.version} is not greater than "
                f"schema version {current}"
            )

        conn = self.connection
        # DDL is not wrapped implicitly by sqlite3, so open the transaction here
        conn.execute("BEGIN")
        try:
            for statement in migration.statements:
                conn.execute(statement)
            conn.execute(
                "INSERT INTO schema_version (version, description, applied_at) VALUES (?, ?, ?)",
                (migration.version, migration.description, datetime.now(UTC).isoformat()),
            )
        except sqlite3.Error as e:
            conn.rollback()
            raise RuntimeError(f"Migration {migration.version} failed: {e}") from e
        conn.commit()
        self.logger.info("applied migration %03d: %s", migration.version, migration.description)

    def migrate(self, migrations: Iterable[Migration]) -> int:
        """Apply every pending migration in version order. Returns how many ran."""
        pending = self.pending(migrations)
        for migration in pending:
            self.apply(migration)
        return len(pending)

    def history(self) -> list[dict]:
        rows = self.connection.execute(
            "SELECT version, description, applied_at FROM schema_version ORDER BY version"
        )
        return [
            {"version": version, "description": description, "applied_at": applied_at}
            for version, description, applied_at in rows
        ]
