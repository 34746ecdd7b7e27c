"""SQLite implementation of FilterPresetRepository."""

from __future__ import annotations

from typing import Any

from taskdeck_cli.adapters.sqlite.base import SqliteRepository
from taskdeck_cli.adapters.sqlite.utils import generate_uuid, row_to_dict
from taskdeck_cli.models import FilterPreset
from taskdeck_cli.models.exceptions import NotFoundError
from taskdeck_cli.repositories import FilterPresetRepository


class SqliteFilterPresetRepository(SqliteRepository, FilterPresetRepository):
    """SQLite implementation of filter preset repository.

    Presets are shared: every allowed user sees and may edit all of them.
    """

    async def list_all(self) -> list[FilterPreset]:
        rows = self._execute("SELECT * FROM filter_presets ORDER BY name").fetchall()
        return [FilterPreset(**row_to_dict(row)) for row in rows]

    async def get(self, preset_id: str) -> FilterPreset:
        row = self._execute(
            "SELECT * FROM filter_presets WHERE id = ?", (preset_id,)
        ).fetchone()
        if not row:
            raise NotFoundError(f"Preset not found: {preset_id}")
        return FilterPreset(**row_to_dict(row))

    async def get_by_name(self, name: str) -> FilterPreset | None:
        row = self._execute(
            "SELECT * FROM filter_presets WHERE name = ? ORDER BY created_at LIMIT 1", (name,)
        ).fetchone()
        return FilterPreset(**row_to_dict(row)) if row else None

    async def add(
        self, name: str, filters: str, sort_keys: str, created_by: str, now: int
    ) -> FilterPreset:
        preset_id = generate_uuid()
        self._execute(
            """INSERT INTO filter_presets (id, name, filters, sort_keys, created_by,
                   created_at, updated_at)
               VALUES (?, ?, ?, ?, ?, ?, ?)""",
            (preset_id, name, filters, sort_keys, created_by, now, now),
        )
        self.connection.commit()
        return await self.get(preset_id)

    async def update(self, preset_id: str, fields: dict[str, Any], now: int) -> FilterPreset:
        if self._patch_row("filter_presets", preset_id, {**fields, "updated_at": now}) == 0:
            raise NotFoundError(f"Preset not found: {preset_id}")
        self.connection.commit()
        return await self.get(preset_id)

    async def delete(self, preset_id: str) -> None:
        self._execute("DELETE FROM filter_presets WHERE id = ?", (preset_id,))
        self.connection.commit()
