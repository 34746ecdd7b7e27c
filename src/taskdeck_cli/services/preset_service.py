"""Filter preset service - named, shared filter and sort combinations."""

from __future__ import annotations

import json

from pydantic import TypeAdapter

from taskdeck_cli.models import AuditAction, EntityType, FilterPreset, SortKey, TaskFilters
from taskdeck_cli.models.exceptions import NotFoundError
from taskdeck_cli.repositories import FilterPresetRepository
from taskdeck_cli.services.audit_service import AuditService, compute_changes
from taskdeck_cli.services.authz_service import AuthorizationGate
from taskdeck_cli.services.sort_search import validate_sort_keys
from taskdeck_cli.utils.clock import Clock, now_ms

_SORT_KEYS = TypeAdapter(list[SortKey])


def serialize_filters(filters: TaskFilters) -> str:
    return filters.model_dump_json()


def _preset_name(name: str) -> str:
    stripped = name.strip()
    if not stripped:
        raise ValueError("Preset name must not be empty")
    return stripped


def serialize_sort_keys(sort_keys: list[SortKey]) -> str:
    return json.dumps([key.model_dump() for key in validate_sort_keys(sort_keys)])


class PresetService:
    """Service for filter presets.

    Presets are visible to every allowed user and any of them may edit or
    delete any preset.
    """

    def __init__(
        self,
        preset_repository: FilterPresetRepository,
        audit: AuditService,
        gate: AuthorizationGate,
        clock: Clock = now_ms,
    ):
        self.repository = preset_repository
        self.audit = audit
        self.gate = gate
        self.clock = clock

    async def list_presets(self) -> list[FilterPreset]:
        if await self.gate.resolve_authorized_user() is None:
            return []
        return await self.repository.list_all()

    async def find_preset(self, name_or_id: str) -> FilterPreset | None:
        """Look a preset up by name first, then by id."""
        if await self.gate.resolve_authorized_user() is None:
            return None
        preset = await self.repository.get_by_name(name_or_id)
        if preset is not None:
            return preset
        try:
            return await self.repository.get(name_or_id)
        except NotFoundError:
            return None

    async def load_preset(self, name_or_id: str) -> tuple[TaskFilters, list[SortKey]] | None:
        """Deserialize a preset into filters and sort keys, or None if missing."""
        preset = await self.find_preset(name_or_id)
        if preset is None:
            return None
        filters = TaskFilters.model_validate_json(preset.filters)
        sort_keys = _SORT_KEYS.validate_json(preset.sort_keys)
        return filters, sort_keys

    async def save_preset(self, name: str, filters: TaskFilters, sort_keys: list[SortKey]) -> str:
        user_id = await self.gate.require_authorized_user()
        name = _preset_name(name)

        preset = await self.repository.add(
            name,
            serialize_filters(filters),
            serialize_sort_keys(sort_keys),
            created_by=user_id,
            now=self.clock(),
        )
        await self.audit.record(
            user_id, AuditAction.CREATE, EntityType.FILTER_PRESET, preset.id, metadata={"name": name}
        )
        return preset.id

    async def update_preset(
        self,
        preset_id: str,
        *,
        name: str | None = None,
        filters: TaskFilters | None = None,
        sort_keys: list[SortKey] | None = None,
    ) -> None:
        """Replace whichever of name, filters and sort keys are given."""
        user_id = await self.gate.require_authorized_user()
        current = await self.repository.get(preset_id)

        supplied = {}
        if name is not None:
            supplied["name"] = _preset_name(name)
        if filters is not None:
            supplied["filters"] = serialize_filters(filters)
        if sort_keys is not None:
            supplied["sort_keys"] = serialize_sort_keys(sort_keys)
        changes = compute_changes(current.model_dump(), supplied)

        updated = await self.repository.update(preset_id, supplied, now=self.clock())
        if changes:
            await self.audit.record(
                user_id,
                AuditAction.UPDATE,
                EntityType.FILTER_PRESET,
                preset_id,
                changes=changes,
                metadata={"name": updated.name},
            )

    async def remove_preset(self, preset_id: str) -> None:
        user_id = await self.gate.require_authorized_user()
        preset = await self.repository.get(preset_id)
        await self.repository.delete(preset_id)
        await self.audit.record(
            user_id,
            AuditAction.DELETE,
            EntityType.FILTER_PRESET,
            preset_id,
            metadata={"name": preset.name},
        )


def get_preset_service() -> PresetService:
    """Factory function to get a PresetService instance."""
    from taskdeck_cli.services.audit_service import get_audit_service
    from taskdeck_cli.services.authz_service import get_authorization_gate
    from taskdeck_cli.services.config_service import get_storage_strategy_context

    context = get_storage_strategy_context()
    return PresetService(context.preset_repository, get_audit_service(), get_authorization_gate())
