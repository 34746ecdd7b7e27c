"""Tests for file-backed connections."""

from __future__ import annotations

import sqlite3
import stat
from unittest.mock import MagicMock

import pytest

from taskdeck_cli.adapters.sqlite import connection as conn_mod


@pytest.fixture(autouse=True)
def close_connections():
    yield
    conn_mod.close_all()


def test_new_database_is_private_and_migrated(tmp_path):
    db = tmp_path / "nested" / "taskdeck.db"

    connection = conn_mod.get_connection(db)

    assert stat.S_IMODE(db.stat().st_mode) == 0o600
    tables = {row["name"] for row in connection.execute("SELECT name FROM sqlite_master")}
    assert "tasks" in tables


def test_connection_is_shared_per_path(tmp_path):
    first = conn_mod.get_connection(tmp_path / "a.db")

    assert conn_mod.get_connection(str(tmp_path / "a.db")) is first
    assert conn_mod.get_connection(tmp_path / "b.db") is not first


def test_close_all_forgets_connections(tmp_path):
    first = conn_mod.get_connection(tmp_path / "a.db")
    conn_mod.close_all()

    assert conn_mod.get_connection(tmp_path / "a.db") is not first


def test_retry_gives_up_after_repeated_locks(monkeypatch):
    monkeypatch.setattr(conn_mod.time, "sleep", lambda _: None)
    connection = MagicMock()
    connection.execute.side_effect = sqlite3.OperationalError("database is locked")

    with pytest.raises(sqlite3.OperationalError):
        conn_mod.execute_with_retry(connection, "SELECT 1")

    assert connection.execute.call_count == conn_mod.LOCKED_RETRIES


def test_retry_recovers_once_the_lock_clears(monkeypatch):
    monkeypatch.setattr(conn_mod.time, "sleep", lambda _: None)
    connection = MagicMock()
    connection.execute.side_effect = [sqlite3.OperationalError("database is locked"), "cursor"]

    assert conn_mod.execute_with_retry(connection, "SELECT 1") == "cursor"


def test_other_operational_errors_are_not_retried():
    connection = MagicMock()
    connection.execute.side_effect = sqlite3.OperationalError("no such table: x")

    with pytest.raises(sqlite3.OperationalError):
        conn_mod.execute_with_retry(connection, "SELECT * FROM x")

    assert connection.execute.call_count == 1
