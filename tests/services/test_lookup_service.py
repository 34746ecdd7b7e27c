"""Tests for the task state / priority service."""

from __future__ import annotations

import pytest

from taskdeck_cli.models import (
    AuditAction,
    EntityType,
    FieldChange,
    LookupUpdate,
    TaskCreate,
)
from taskdeck_cli.models.exceptions import InUseError, NotFoundError
from taskdeck_cli.services.lookup_service import LookupService


@pytest.fixture()
def states(context, audit, gate, clock):
    return LookupService(
        context.state_repository,
        context.task_repository,
        EntityType.TASK_STATE,
        "state_id",
        audit,
        gate,
        clock,
    )


@pytest.fixture()
def priorities(context, audit, gate, clock):
    return LookupService(
        context.priority_repository,
        context.task_repository,
        EntityType.PRIORITY,
        "priority_id",
        audit,
        gate,
        clock,
    )


async def _orders(service):
    return [(entry.name, entry.order) for entry in await service.list()]


@pytest.mark.asyncio
async def test_create_appends_at_the_end(states, alice):
    await states.create("To Do")
    await states.create("Done", "#22c55e")

    assert await _orders(states) == [("To Do", 0), ("Done", 1)]


@pytest.mark.asyncio
async def test_update_audits_only_real_changes(states, context, alice):
    state_id = await states.create("To Do")

    await states.update(state_id, LookupUpdate(name="To Do"))
    await states.update(state_id, LookupUpdate(color="#ffffff"))

    entries = await context.audit_repository.list_for_entity("task_state", state_id)
    assert [e.action for e in entries] == [AuditAction.UPDATE, AuditAction.CREATE]
    assert entries[0].changes == {"color": FieldChange(old=None, new="#ffffff")}


@pytest.mark.asyncio
async def test_remove_in_use_fails_and_changes_nothing(
    states, priorities, context, alice, clock
):
    state_id = await states.create("To Do")
    priority_id = await priorities.create("High")
    task = await context.task_repository.add(
        TaskCreate(title="Busy", state_id=state_id, priority_id=priority_id),
        creator_id=alice.id,
        now=clock(),
    )
    audit_before = len(await context.audit_repository.list_all())

    with pytest.raises(InUseError):
        await states.remove(state_id)
    with pytest.raises(InUseError):
        await priorities.remove(priority_id)

    assert await _orders(states) == [("To Do", 0)]
    assert await _orders(priorities) == [("High", 0)]
    assert await context.task_repository.get(task.id) == task
    assert len(await context.audit_repository.list_all()) == audit_before


@pytest.mark.asyncio
async def test_remove_closes_the_gap(states, alice):
    await states.create("To Do")
    doing = await states.create("Doing")
    await states.create("Done")

    await states.remove(doing)

    assert await _orders(states) == [("To Do", 0), ("Done", 1)]


@pytest.mark.asyncio
async def test_remove_missing_raises(states, alice):
    with pytest.raises(NotFoundError):
        await states.remove("missing")


@pytest.mark.asyncio
async def test_reorder_audits_each_moved_entry(states, context, alice):
    a = await states.create("A")
    b = await states.create("B")
    c = await states.create("C")

    await states.reorder([c, b, a])

    assert await _orders(states) == [("C", 0), ("B", 1), ("A", 2)]
    reorders = [
        e for e in await context.audit_repository.list_all() if e.action == AuditAction.REORDER
    ]
    assert {e.entity_id: e.changes["order"] for e in reorders} == {
        a: FieldChange(old=0, new=2),
        c: FieldChange(old=2, new=0),
    }


@pytest.mark.asyncio
@pytest.mark.parametrize("mutation", ["missing", "duplicate", "unknown"])
async def test_reorder_requires_exact_permutation(states, alice, mutation):
    a = await states.create("A")
    b = await states.create("B")
    ids = {"missing": [a], "duplicate": [a, a, b], "unknown": [a, b, "x"]}[mutation]

    with pytest.raises(ValueError):
        await states.reorder(ids)


@pytest.mark.asyncio
async def test_list_empty_when_not_signed_in(states, identity, alice):
    await states.create("To Do")
    identity.user_id = None

    assert await states.list() == []
