"""SQLite implementation of StatusUpdateRepository (task comments)."""

from __future__ import annotations

from taskdeck_cli.adapters.sqlite.base import SqliteRepository
from taskdeck_cli.adapters.sqlite.utils import generate_uuid, row_to_dict
from taskdeck_cli.models import StatusUpdate
from taskdeck_cli.models.exceptions import NotFoundError
from taskdeck_cli.repositories import StatusUpdateRepository


class SqliteStatusUpdateRepository(SqliteRepository, StatusUpdateRepository):
    async def list_for_task(self, task_id: str) -> list[StatusUpdate]:
        rows = self._execute(
            "SELECT * FROM task_updates WHERE task_id = ? ORDER BY created_at, rowid",
            (task_id,),
        ).fetchall()
        return [StatusUpdate(**row_to_dict(row)) for row in rows]

    async def get(self, update_id: str) -> StatusUpdate:
        row = self._execute("SELECT * FROM task_updates WHERE id = ?", (update_id,)).fetchone()
        if not row:
            raise NotFoundError(f"Update not found: {update_id}")
        return StatusUpdate(**row_to_dict(row))

    async def add(self, task_id: str, user_id: str, body: str, now: int) -> StatusUpdate:
        update_id = generate_uuid()
        self._execute(
            """INSERT INTO task_updates (id, task_id, user_id, body, created_at)
               VALUES (?, ?, ?, ?, ?)""",
            (update_id, task_id, user_id, body, now),
        )
        self.connection.commit()
        return await self.get(update_id)

    async def delete(self, update_id: str) -> None:
        self._execute("DELETE FROM task_updates WHERE id = ?", (update_id,))
        self.connection.commit()

    async def delete_for_task(self, task_id: str) -> int:
        cursor = self._execute("DELETE FROM task_updates WHERE task_id = ?", (task_id,))
        self.connection.commit()
        return cursor.rowcount
