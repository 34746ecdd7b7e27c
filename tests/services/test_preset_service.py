"""Tests for PresetService."""

from __future__ import annotations

import pytest

from taskdeck_cli.models import AuditAction, SortKey, TaskFilters
from taskdeck_cli.services.preset_service import PresetService


@pytest.fixture()
def service(context, audit, gate, clock):
    return PresetService(context.preset_repository, audit, gate, clock)


FILTERS = TaskFilters(state_ids=["s1"], exclude_tag_ids=["t9"], limit=20)
SORT = [SortKey(column="priority", direction="desc"), SortKey(column="title")]


@pytest.mark.asyncio
async def test_save_and_load_round_trip(service, alice):
    await service.save_preset("My bugs", FILTERS, SORT)

    filters, sort_keys = await service.load_preset("My bugs")

    assert filters == FILTERS
    assert sort_keys == SORT


@pytest.mark.asyncio
async def test_find_by_id_falls_back_after_name(service, alice):
    preset_id = await service.save_preset("Mine", FILTERS, [])

    assert (await service.find_preset(preset_id)).name == "Mine"
    assert await service.find_preset("nothing") is None


@pytest.mark.asyncio
async def test_blank_name_rejected(service, alice):
    with pytest.raises(ValueError):
        await service.save_preset("  ", FILTERS, [])


@pytest.mark.asyncio
async def test_rename_to_blank_rejected(service, context, alice):
    preset_id = await service.save_preset("Mine", FILTERS, [])

    with pytest.raises(ValueError, match="must not be empty"):
        await service.update_preset(preset_id, name="   ")

    assert (await service.find_preset("Mine")).id == preset_id
    entries = await context.audit_repository.list_for_entity("filter_preset", preset_id)
    assert [e.action for e in entries] == [AuditAction.CREATE]


@pytest.mark.asyncio
async def test_rename_is_stripped(service, alice):
    preset_id = await service.save_preset("Mine", FILTERS, [])

    await service.update_preset(preset_id, name="  Ours  ")

    assert (await service.find_preset("Ours")).id == preset_id


@pytest.mark.asyncio
async def test_duplicate_sort_columns_rejected(service, alice):
    with pytest.raises(ValueError):
        await service.save_preset("dup", FILTERS, [SortKey(column="title"), SortKey(column="title")])


@pytest.mark.asyncio
async def test_update_and_remove_are_audited(service, context, alice):
    preset_id = await service.save_preset("Mine", FILTERS, SORT)

    await service.update_preset(preset_id, name="Ours")
    await service.update_preset(preset_id, name="Ours")
    await service.remove_preset(preset_id)

    assert await service.list_presets() == []
    entries = await context.audit_repository.list_for_entity("filter_preset", preset_id)
    assert [e.action for e in entries] == [
        AuditAction.DELETE,
        AuditAction.UPDATE,
        AuditAction.CREATE,
    ]


@pytest.mark.asyncio
async def test_presets_hidden_when_not_signed_in(service, identity, alice):
    await service.save_preset("Mine", FILTERS, [])
    identity.user_id = None

    assert await service.list_presets() == []
    assert await service.load_preset("Mine") is None
