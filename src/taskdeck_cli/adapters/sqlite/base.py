"""Shared connection handling for the SQLite repositories."""

from __future__ import annotations

import sqlite3
from typing import Any

from taskdeck_cli.adapters.sqlite.connection import execute_with_retry, get_connection
from taskdeck_cli.adapters.sqlite.utils import build_update_clause


class SqliteRepository:
    """Base for SQLite repositories.

    Args:
        db_path: Optional database file path. If None, uses default location.
        connection: Optional ready connection (e.g. an in-memory database);
            takes precedence over ``db_path``.
    """

    def __init__(
        self, db_path: str | None = None, connection: sqlite3.Connection | None = None
    ):
        self.db_path = db_path
        self._connection = connection

    @property
    def connection(self) -> sqlite3.Connection:
        """Get or create database connection."""
        if self._connection is None:
            self._connection = get_connection(self.db_path)
        return self._connection

    def _execute(self, sql: str, params: tuple | list = ()) -> sqlite3.Cursor:
        return execute_with_retry(self.connection, sql, params)

    def _patch_row(self, table: str, row_id: str, fields: dict[str, Any]) -> int:
        """UPDATE the given columns of one row; returns the affected row count."""
        set_clause, params = build_update_clause(fields)
        cursor = self._execute(
            f"UPDATE {table} SET {set_clause} WHERE id = ?", (*params, row_id)
        )
        return cursor.rowcount
