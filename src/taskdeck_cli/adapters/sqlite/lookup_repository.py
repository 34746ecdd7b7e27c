"""SQLite implementations of LookupRepository for task states and priorities."""

from __future__ import annotations

from typing import Any

from taskdeck_cli.adapters.sqlite.base import SqliteRepository
from taskdeck_cli.adapters.sqlite.utils import generate_uuid, row_to_dict
from taskdeck_cli.models import LookupCreate, OrderedEntry, Priority, TaskState
from taskdeck_cli.models.exceptions import NotFoundError
from taskdeck_cli.repositories import LookupRepository


class SqliteLookupRepository(SqliteRepository, LookupRepository):
    """Ordered lookup table. Subclasses set ``table``, ``model`` and ``label``."""

    table: str
    model: type[OrderedEntry]
    label: str

    def _to_model(self, row) -> OrderedEntry:
        data = row_to_dict(row)
        data["order"] = data.pop("position")
        return self.model(**data)

    async def list_all(self) -> list[OrderedEntry]:
        rows = self._execute(f"SELECT * FROM {self.table} ORDER BY position").fetchall()
        return [self._to_model(row) for row in rows]

    async def get(self, entry_id: str) -> OrderedEntry:
        row = self._execute(f"SELECT * FROM {self.table} WHERE id = ?", (entry_id,)).fetchone()
        if not row:
            raise NotFoundError(f"{self.label} not found: {entry_id}")
        return self._to_model(row)

    async def add(self, data: LookupCreate, order: int, now: int) -> OrderedEntry:
        entry_id = generate_uuid()
        self._execute(
            f"""INSERT INTO {self.table} (id, name, color, position, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?)""",
            (entry_id, data.name, data.color, order, now, now),
        )
        self.connection.commit()
        return await self.get(entry_id)

    async def update(self, entry_id: str, fields: dict[str, Any], now: int) -> OrderedEntry:
        if self._patch_row(self.table, entry_id, {**fields, "updated_at": now}) == 0:
            raise NotFoundError(f"{self.label} not found: {entry_id}")
        self.connection.commit()
        return await self.get(entry_id)

    async def set_orders(self, orders: dict[str, int], now: int) -> None:
        for entry_id, order in orders.items():
            self._patch_row(self.table, entry_id, {"position": order, "updated_at": now})
        self.connection.commit()

    async def delete(self, entry_id: str) -> None:
        self._execute(f"DELETE FROM {self.table} WHERE id = ?", (entry_id,))
        self.connection.commit()


class SqliteTaskStateRepository(SqliteLookupRepository):
    table = "task_states"
    model = TaskState
    label = "Task state"


class SqlitePriorityRepository(SqliteLookupRepository):
    table = "priorities"
    model = Priority
    label = "Priority"
