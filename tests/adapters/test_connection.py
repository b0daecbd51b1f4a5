"""Tests for the SQLite connection holder."""

from __future__ import annotations

import stat

import pytest

from todoflow.adapters.sqlite import DatabaseConnection, SqliteTaskRepository
from todoflow.adapters.sqlite.connection import get_connection
from todoflow.models import TaskFilters


@pytest.fixture(autouse=True)
def reset_connection():
    DatabaseConnection.close_connection()
    yield
    DatabaseConnection.close_connection()


def test_creates_migrated_database_file(tmp_path):
    db_path = tmp_path / "data" / "todoflow.db"

    connection = get_connection(db_path)

    assert db_path.exists()
    assert stat.S_IMODE(db_path.stat().st_mode) == 0o600
    tables = {r[0] for r in connection.execute("SELECT name FROM sqlite_master")}
    assert {"todos", "schema_version"} <= tables


def test_connection_is_reused_for_same_path(tmp_path):
    db_path = tmp_path / "todoflow.db"
    assert get_connection(db_path) is get_connection(db_path)
    assert DatabaseConnection.get_db_path() == db_path


def test_new_path_reopens(tmp_path):
    first = get_connection(tmp_path / "one.db")
    second = get_connection(tmp_path / "two.db")
    assert first is not second
    assert DatabaseConnection.get_db_path() == tmp_path / "two.db"


@pytest.mark.asyncio
async def test_repository_opens_connection_lazily(tmp_path):
    repo = SqliteTaskRepository(tmp_path / "lazy.db", timeout=1.0)
    assert not (tmp_path / "lazy.db").exists()

    assert await repo.find(TaskFilters()) == []
    assert (tmp_path / "lazy.db").exists()
