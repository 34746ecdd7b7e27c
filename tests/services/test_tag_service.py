"""Tests for TagService."""

from __future__ import annotations

import pytest

from taskdeck_cli.models import AuditAction, TagUpdate, TaskCreate
from taskdeck_cli.models.exceptions import NotFoundError
from taskdeck_cli.services.tag_service import TagService


@pytest.fixture()
def service(context, audit, gate, clock):
    return TagService(context.tag_repository, context.task_repository, audit, gate, clock)


@pytest.mark.asyncio
async def test_delete_strips_tag_from_every_task(service, context, alice, clock):
    bug = await service.create_tag("bug", "#ef4444")
    docs = await service.create_tag("docs", "#3b82f6")
    tasks = context.task_repository
    tagged = []
    for title, tag_ids in (("one", [bug, docs]), ("two", [bug]), ("three", [docs, bug])):
        task = await tasks.add(
            TaskCreate(title=title, state_id="s", priority_id="p", tag_ids=tag_ids),
            creator_id=alice.id,
            now=clock(),
        )
        tagged.append(task.id)

    await service.remove_tag(bug)

    assert [(await tasks.get(task_id)).tag_ids for task_id in tagged] == [[docs], [], [docs]]
    assert [tag.id for tag in await service.list_tags()] == [docs]
    latest = (await context.audit_repository.list_all())[0]
    assert latest.action == AuditAction.DELETE
    assert latest.metadata == {"name": "bug"}


@pytest.mark.asyncio
async def test_delete_unused_tag(service, alice):
    tag_id = await service.create_tag("spare", "#000000")

    await service.remove_tag(tag_id)

    assert await service.list_tags() == []


@pytest.mark.asyncio
async def test_delete_missing_tag_raises(service, alice):
    with pytest.raises(NotFoundError):
        await service.remove_tag("missing")


@pytest.mark.asyncio
async def test_update_tag(service, context, alice):
    tag_id = await service.create_tag("bug", "#ef4444")

    await service.update_tag(tag_id, TagUpdate(color="#000000"))

    (tag,) = await service.list_tags()
    assert tag.color == "#000000"
    entries = await context.audit_repository.list_for_entity("tag", tag_id)
    assert [e.action for e in entries] == [AuditAction.UPDATE, AuditAction.CREATE]


@pytest.mark.asyncio
async def test_invalid_color_rejected(service, alice):
    with pytest.raises(ValueError):
        await service.create_tag("bad", "red")
