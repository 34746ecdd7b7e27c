"""Forward-only schema migrations.

Migrations carry sequential integer versions. Every applied version is
recorded in ``schema_version`` together with an epoch-ms timestamp, and a
database is never migrated backwards.
"""

from __future__ import annotations

import sqlite3
from abc import ABC, abstractmethod
from typing import ClassVar

from taskdeck_cli.utils.clock import now_ms
from taskdeck_cli.utils.logger import get_logger

_VERSION_TABLE = """
CREATE TABLE IF NOT EXISTS schema_version (
    version INTEGER PRIMARY KEY,
    description TEXT NOT NULL,
    applied_at INTEGER NOT NULL
)
"""


class Migration(ABC):
    """One schema step. Subclasses set ``version`` and ``description``."""

    version: ClassVar[int]
    description: ClassVar[str]

    @abstractmethod
    def up(self, connection: sqlite3.Connection) -> None: ...


class MigrationRunner:
    """Brings a connection's schema up to the newest known version."""

    def __init__(self, connection: sqlite3.Connection):
        self.connection = connection
        with self.connection:
            self.connection.execute(_VERSION_TABLE)

    def get_current_version(self) -> int:
        """Highest applied version, 0 for an empty database."""
        (version,) = self.connection.execute(
            "SELECT COALESCE(MAX(version), 0) FROM schema_version"
        ).fetchone()
        return version

    def pending(self, migrations: list[Migration]) -> list[Migration]:
        current = self.get_current_version()
        return sorted(
            (m for m in migrations if m.version > current), key=lambda m: m.version
        )

    def run_migration(self, migration: Migration) -> None:
        """Apply one migration and record it.

        Raises:
            ValueError: ``migration`` is not newer than the current version.
            RuntimeError: SQLite rejected the migration; its transaction is
                rolled back.
        """
        current = self.get_current_version()
        if migration.version <= current:
            raise ValueError(
                f"migration {migration.version} is not newer than schema version {current}"
            )

        try:
            with self.connection:
                migration.up(self.connection)
                self.connection.execute(
                    "INSERT INTO schema_version (version, description, applied_at) "
                    "VALUES (?, ?, ?)",
                    (migration.version, migration.description, now_ms()),
                )
        except sqlite3.Error as e:
            raise RuntimeError(
                f"migration {migration.version} ({migration.description}) failed: {e}"
            ) from e

        get_logger().info(
            "applied schema migration %d: %s", migration.version, migration.description
        )

    def run_migrations(self, migrations: list[Migration]) -> int:
        """Apply every pending migration in version order; returns how many ran."""
        todo = self.pending(migrations)
        for migration in todo:
            self.run_migration(migration)
        return len(todo)

    def get_migration_history(self) -> list[dict]:
        rows = self.connection.execute(
            "SELECT version, description, applied_at FROM schema_version ORDER BY version"
        ).fetchall()
        return [
            {"version": version, "description": description, "applied_at": applied_at}
            for version, description, applied_at in rows
        ]
