"""SQLite implementation of TagRepository."""

from __future__ import annotations

from typing import Any

from taskdeck_cli.adapters.sqlite.base import SqliteRepository
from taskdeck_cli.adapters.sqlite.utils import generate_uuid, row_to_dict
from taskdeck_cli.models import Tag, TagCreate
from taskdeck_cli.models.exceptions import NotFoundError
from taskdeck_cli.repositories import TagRepository


class SqliteTagRepository(SqliteRepository, TagRepository):
    """SQLite implementation of tag repository."""

    async def list_all(self) -> list[Tag]:
        rows = self._execute("SELECT * FROM tags ORDER BY name").fetchall()
        return [Tag(**row_to_dict(row)) for row in rows]

    async def get(self, tag_id: str) -> Tag:
        row = self._execute("SELECT * FROM tags WHERE id = ?", (tag_id,)).fetchone()
        if not row:
            raise NotFoundError(f"Tag not found: {tag_id}")
        return Tag(**row_to_dict(row))

    async def add(self, data: TagCreate, now: int) -> Tag:
        tag_id = generate_uuid()
        self._execute(
            """INSERT INTO tags (id, name, color, created_at, updated_at)
               VALUES (?, ?, ?, ?, ?)""",
            (tag_id, data.name, data.color, now, now),
        )
        self.connection.commit()
        return await self.get(tag_id)

    async def update(self, tag_id: str, fields: dict[str, Any], now: int) -> Tag:
        if self._patch_row("tags", tag_id, {**fields, "updated_at": now}) == 0:
            raise NotFoundError(f"Tag not found: {tag_id}")
        self.connection.commit()
        return await self.get(tag_id)

    async def delete(self, tag_id: str) -> None:
        # Task links are stripped by the service before this runs
        self._execute("DELETE FROM tags WHERE id = ?", (tag_id,))
        self.connection.commit()
