"""SQLite implementation of UserRepository."""

from __future__ import annotations

from taskdeck_cli.adapters.sqlite.base import SqliteRepository
from taskdeck_cli.adapters.sqlite.utils import generate_uuid, row_to_dict
from taskdeck_cli.models import User
from taskdeck_cli.repositories import UserRepository


class SqliteUserRepository(SqliteRepository, UserRepository):
    """SQLite implementation of user repository.

    Emails are stored lower-cased so lookups are case-insensitive.
    """

    async def list_all(self) -> list[User]:
        rows = self._execute("SELECT * FROM users ORDER BY created_at, rowid").fetchall()
        return [User(**row_to_dict(row)) for row in rows]

    async def get(self, user_id: str) -> User | None:
        row = self._execute("SELECT * FROM users WHERE id = ?", (user_id,)).fetchone()
        return User(**row_to_dict(row)) if row else None

    async def get_by_email(self, email: str) -> User | None:
        row = self._execute(
            "SELECT * FROM users WHERE email = ?", (email.strip().lower(),)
        ).fetchone()
        return User(**row_to_dict(row)) if row else None

    async def add(self, email: str, name: str | None, now: int) -> User:
        user_id = generate_uuid()
        self._execute(
            "INSERT INTO users (id, email, name, created_at) VALUES (?, ?, ?, ?)",
            (user_id, email.strip().lower(), name, now),
        )
        self.connection.commit()
        return await self.get(user_id)
