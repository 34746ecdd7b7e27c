"""Connections to the local SQLite entity store.

One connection is opened per database file and reused for the life of the
process. New files get WAL journaling, owner-only permissions and the full
schema; every open connection is committed and closed at interpreter exit.
"""

from __future__ import annotations

import atexit
import os
import sqlite3
import time
from pathlib import Path

from platformdirs import user_data_dir

from taskdeck_cli.adapters.sqlite.migrations import ALL_MIGRATIONS, MigrationRunner
from taskdeck_cli.utils.logger import get_logger

DEFAULT_DB_NAME = "taskdeck.db"
LOCK_TIMEOUT_SECONDS = 30.0
LOCKED_RETRIES = 3

_open: dict[Path, sqlite3.Connection] = {}


def default_db_path() -> Path:
    return Path(user_data_dir("taskdeck_cli")) / DEFAULT_DB_NAME


def configure_connection(connection: sqlite3.Connection) -> sqlite3.Connection:
    """Switch to name-addressable rows and migrate the schema to the latest version."""
    connection.row_factory = sqlite3.Row
    MigrationRunner(connection).run_migrations(ALL_MIGRATIONS)
    return connection


def _open_file(path: Path) -> sqlite3.Connection:
    path.parent.mkdir(parents=True, exist_ok=True)
    created = not path.exists()

    connection = sqlite3.connect(str(path), check_same_thread=False, timeout=LOCK_TIMEOUT_SECONDS)
    connection.execute("PRAGMA journal_mode = WAL")
    if created:
        os.chmod(path, 0o600)
        get_logger().info("created database at %s", path)
    return configure_connection(connection)


def get_connection(db_path: str | Path | None = None) -> sqlite3.Connection:
    """Return the shared connection for ``db_path`` (default: the user data dir)."""
    path = Path(db_path) if db_path is not None else default_db_path()
    if path not in _open:
        if not _open:
            atexit.register(close_all)
        _open[path] = _open_file(path)
    return _open[path]


def close_all() -> None:
    """Commit and close every connection opened through ``get_connection``."""
    while _open:
        path, connection = _open.popitem()
        try:
            connection.commit()
        except sqlite3.Error as e:
            get_logger().warning("could not commit %s on close: %s", path, e)
        finally:
            connection.close()


def execute_with_retry(
    connection: sqlite3.Connection, sql: str, params: tuple | list | dict = ()
) -> sqlite3.Cursor:
    """Run one statement, backing off briefly while another process holds the lock.

    Raises:
        sqlite3.OperationalError: the database is still locked after
            ``LOCKED_RETRIES`` attempts, or any other operational error.
    """
    for attempt in range(LOCKED_RETRIES - 1):
        try:
            return connection.execute(sql, params)
        except sqlite3.OperationalError as e:
            if "database is locked" not in str(e):
                raise
            time.sleep(0.1 * 2**attempt)
    return connection.execute(sql, params)
