"""Forward-only schema migrations for the SQLite store."""

from .m001_initial_schema import initial_schema
from .runner import Migration, MigrationRunner

ALL_MIGRATIONS = (initial_schema,)

__all__ = ["ALL_MIGRATIONS", "Migration", "MigrationRunner", "initial_schema"]
