"""Lookup service - task states and priorities share the same rules."""

from __future__ import annotations

from taskdeck_cli.models import (
    AuditAction,
    EntityType,
    FieldChange,
    LookupCreate,
    LookupUpdate,
    OrderedEntry,
)
from taskdeck_cli.models.exceptions import InUseError
from taskdeck_cli.repositories import LookupRepository, TaskRepository
from taskdeck_cli.services.audit_service import AuditService, compute_changes
from taskdeck_cli.services.authz_service import AuthorizationGate
from taskdeck_cli.utils.clock import Clock, now_ms


class LookupService:
    """Service for an ordered lookup collection.

    Orders are kept dense and zero-based: new entries go last, deletes close
    the gap, and reorder rewrites every position.

    Args:
        repository: The states or priorities repository
        task_repository: Used to refuse deleting entries still in use
        entity_type: EntityType.TASK_STATE or EntityType.PRIORITY
        reference_column: Task column pointing at this collection
    """

    def __init__(
        self,
        repository: LookupRepository,
        task_repository: TaskRepository,
        entity_type: EntityType,
        reference_column: str,
        audit: AuditService,
        gate: AuthorizationGate,
        clock: Clock = now_ms,
    ):
        self.repository = repository
        self.tasks = task_repository
        self.entity_type = entity_type
        self.reference_column = reference_column
        self.audit = audit
        self.gate = gate
        self.clock = clock

    @property
    def label(self) -> str:
        return "state" if self.entity_type == EntityType.TASK_STATE else "priority"

    async def list(self) -> list[OrderedEntry]:
        if await self.gate.resolve_authorized_user() is None:
            return []
        return await self.repository.list_all()

    async def create(self, name: str, color: str | None = None) -> str:
        """Append a new entry after the current last one and return its id."""
        user_id = await self.gate.require_authorized_user()
        data = LookupCreate(name=name, color=color)
        existing = await self.repository.list_all()
        next_order = max((entry.order for entry in existing), default=-1) + 1

        entry = await self.repository.add(data, order=next_order, now=self.clock())
        await self.audit.record(
            user_id, AuditAction.CREATE, self.entity_type, entry.id, metadata={"name": entry.name}
        )
        return entry.id

    async def update(self, entry_id: str, data: LookupUpdate) -> None:
        user_id = await self.gate.require_authorized_user()
        current = await self.repository.get(entry_id)
        supplied = data.model_dump(exclude_unset=True)
        changes = compute_changes(current.model_dump(), supplied)

        updated = await self.repository.update(entry_id, supplied, now=self.clock())
        if changes:
            await self.audit.record(
                user_id,
                AuditAction.UPDATE,
                self.entity_type,
                entry_id,
                changes=changes,
                metadata={"name": updated.name},
            )

    async def remove(self, entry_id: str) -> None:
        """Delete an entry.

        Raises:
            InUseError: If any task still references the entry; nothing changes
            NotFoundError: If the entry does not exist
        """
        user_id = await self.gate.require_authorized_user()
        entry = await self.repository.get(entry_id)

        in_use = await self.tasks.count_referencing(self.reference_column, entry_id)
        if in_use:
            raise InUseError(
                f"Cannot delete {self.label} '{entry.name}': it is assigned to {in_use} task(s)"
            )

        await self.repository.delete(entry_id)

        remaining = await self.repository.list_all()
        gaps = {e.id: index for index, e in enumerate(remaining) if e.order != index}
        if gaps:
            await self.repository.set_orders(gaps, now=self.clock())

        await self.audit.record(
            user_id, AuditAction.DELETE, self.entity_type, entry_id, metadata={"name": entry.name}
        )

    async def reorder(self, ids: list[str]) -> None:
        """Set each entry's order to its index in ``ids``.

        Raises:
            ValueError: If ``ids`` is not exactly a permutation of the existing ids
        """
        user_id = await self.gate.require_authorized_user()
        existing = {entry.id: entry for entry in await self.repository.list_all()}
        if len(ids) != len(set(ids)) or set(ids) != set(existing):
            raise ValueError(f"Reorder must list every existing {self.label} exactly once")

        moved = {
            entry_id: index for index, entry_id in enumerate(ids)
            if existing[entry_id].order != index
        }
        if not moved:
            return

        await self.repository.set_orders(moved, now=self.clock())
        for entry_id, new_order in moved.items():
            await self.audit.record(
                user_id,
                AuditAction.REORDER,
                self.entity_type,
                entry_id,
                changes={"order": FieldChange(old=existing[entry_id].order, new=new_order)},
                metadata={"name": existing[entry_id].name},
            )


def _build(entity_type: EntityType) -> LookupService:
    from taskdeck_cli.services.audit_service import get_audit_service
    from taskdeck_cli.services.authz_service import get_authorization_gate
    from taskdeck_cli.services.config_service import get_storage_strategy_context

    context = get_storage_strategy_context()
    if entity_type == EntityType.TASK_STATE:
        repository, column = context.state_repository, "state_id"
    else:
        repository, column = context.priority_repository, "priority_id"
    return LookupService(
        repository,
        context.task_repository,
        entity_type,
        column,
        get_audit_service(),
        get_authorization_gate(),
    )


def get_state_service() -> LookupService:
    """Factory function to get the task state LookupService."""
    return _build(EntityType.TASK_STATE)


def get_priority_service() -> LookupService:
    """Factory function to get the priority LookupService."""
    return _build(EntityType.PRIORITY)
