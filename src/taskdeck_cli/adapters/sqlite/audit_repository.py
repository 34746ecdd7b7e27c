"""SQLite implementation of AuditLogRepository.

The table is append-only: there are no update or delete statements here.
"""

from __future__ import annotations

from taskdeck_cli.adapters.sqlite.base import SqliteRepository
from taskdeck_cli.adapters.sqlite.utils import dump_json, load_json, row_to_dict
from taskdeck_cli.models import AuditEntry
from taskdeck_cli.repositories import AuditLogRepository


def _to_entry(row) -> AuditEntry:
    data = row_to_dict(row)
    data["changes"] = load_json(data["changes"])
    data["metadata"] = load_json(data["metadata"])
    return AuditEntry(**data)


class SqliteAuditLogRepository(SqliteRepository, AuditLogRepository):
    async def append(self, entry: AuditEntry) -> None:
        data = entry.model_dump(mode="json")
        self._execute(
            """INSERT INTO audit_logs (id, user_id, action, entity_type, entity_id,
                   changes, metadata, timestamp)
               VALUES (?, ?, ?, ?, ?, ?, ?, ?)""",
            (
                data["id"],
                data["user_id"],
                data["action"],
                data["entity_type"],
                data["entity_id"],
                dump_json(data["changes"]),
                dump_json(data["metadata"]),
                data["timestamp"],
            ),
        )
        self.connection.commit()

    async def list_all(self, entity_type: str | None = None) -> list[AuditEntry]:
        if entity_type is None:
            rows = self._execute(
                "SELECT * FROM audit_logs ORDER BY timestamp DESC, rowid DESC"
            ).fetchall()
        else:
            rows = self._execute(
                "SELECT * FROM audit_logs WHERE entity_type = ? "
                "ORDER BY timestamp DESC, rowid DESC",
                (entity_type,),
            ).fetchall()
        return [_to_entry(row) for row in rows]

    async def list_for_entity(self, entity_type: str, entity_id: str) -> list[AuditEntry]:
        rows = self._execute(
            "SELECT * FROM audit_logs WHERE entity_type = ? AND entity_id = ? "
            "ORDER BY timestamp DESC, rowid DESC",
            (entity_type, entity_id),
        ).fetchall()
        return [_to_entry(row) for row in rows]
