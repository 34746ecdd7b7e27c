"""Audit recorder: append-only history of state-changing actions."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from taskdeck_cli.adapters.sqlite.utils import generate_uuid
from taskdeck_cli.models import (
    AuditAction,
    AuditEntry,
    AuditEntryDetail,
    EntityType,
    FieldChange,
)
from taskdeck_cli.repositories import AuditLogRepository, UserRepository
from taskdeck_cli.services.authz_service import AuthorizationGate
from taskdeck_cli.utils.clock import Clock, now_ms
from taskdeck_cli.utils.logger import get_logger


def compute_changes(current: Mapping[str, Any], supplied: Mapping[str, Any]) -> dict[str, FieldChange]:
    """Diff the supplied fields against their current values.

    Fields that were not supplied never appear; supplied fields whose value
    did not change are left out as well.
    """
    changes = {}
    for field, new_value in supplied.items():
        old_value = current.get(field)
        if old_value != new_value:
            changes[field] = FieldChange(old=old_value, new=new_value)
    return changes


class AuditService:
    """Writes audit entries and serves the (gated) audit history."""

    def __init__(
        self,
        audit_repository: AuditLogRepository,
        user_repository: UserRepository,
        gate: AuthorizationGate,
        clock: Clock = now_ms,
    ):
        self.repository = audit_repository
        self.users = user_repository
        self.gate = gate
        self.clock = clock

    async def record(
        self,
        user_id: str,
        action: AuditAction,
        entity_type: EntityType,
        entity_id: str,
        changes: dict[str, FieldChange] | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> AuditEntry:
        """Append one entry stamped with the current time.

        Callers run this after their primary write has committed; a failure
        here propagates but does not undo that write.
        """
        entry = AuditEntry(
            id=generate_uuid(),
            user_id=user_id,
            action=action,
            entity_type=entity_type,
            entity_id=entity_id,
            changes=changes or None,
            metadata=metadata,
            timestamp=self.clock(),
        )
        await self.repository.append(entry)
        get_logger().debug(
            "audit: %s %s %s by %s", action.value, entity_type.value, entity_id, user_id
        )
        return entry

    async def _with_users(self, entries: list[AuditEntry]) -> list[AuditEntryDetail]:
        users = {}
        for user_id in {entry.user_id for entry in entries}:
            users[user_id] = await self.users.get(user_id)
        return [
            AuditEntryDetail(**entry.model_dump(), user=users.get(entry.user_id))
            for entry in entries
        ]

    async def list_all(self, entity_type: EntityType | None = None) -> list[AuditEntryDetail]:
        """List entries newest first; empty for unauthorized callers."""
        if await self.gate.resolve_authorized_user() is None:
            return []
        type_filter = entity_type.value if entity_type is not None else None
        return await self._with_users(await self.repository.list_all(type_filter))

    async def list_for_entity(
        self, entity_type: EntityType, entity_id: str
    ) -> list[AuditEntryDetail]:
        """List one entity's history newest first; empty for unauthorized callers."""
        if await self.gate.resolve_authorized_user() is None:
            return []
        entries = await self.repository.list_for_entity(entity_type.value, entity_id)
        return await self._with_users(entries)


def get_audit_service() -> AuditService:
    """Factory function to get an AuditService instance."""
    from taskdeck_cli.services.authz_service import get_authorization_gate
    from taskdeck_cli.services.config_service import get_storage_strategy_context

    context = get_storage_strategy_context()
    return AuditService(context.audit_repository, context.user_repository, get_authorization_gate())
