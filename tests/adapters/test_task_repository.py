"""Unit tests for SqliteTaskRepository.

Uses a real SQLite in-memory database with the full migration schema applied,
so we test the real SQL without touching production data.
"""

from __future__ import annotations

import pytest
import pytest_asyncio

from taskdeck_cli.adapters.sqlite.task_repository import SqliteTaskRepository, build_task_filter
from taskdeck_cli.models import TaskCreate, TaskFilters
from taskdeck_cli.models.exceptions import NotFoundError

T0 = 1_700_000_000_000


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def repo(connection):
    return SqliteTaskRepository(connection=connection)


async def _add(repo, title, now, **fields):
    data = {"state_id": "todo", "priority_id": "low", **fields}
    return await repo.add(TaskCreate(title=title, **data), creator_id="u1", now=now)


@pytest_asyncio.fixture
async def seeded(repo):
    """Six tasks created one millisecond apart; the last one is archived."""
    tasks = [
        await _add(repo, "Write docs", T0 + 1, project_id="proj-a", tag_ids=["t-docs"]),
        await _add(repo, "Fix login", T0 + 2, state_id="doing", assignees=["u1"]),
        await _add(repo, "Plan sprint", T0 + 3, priority_id="high", project_id="proj-b"),
        await _add(repo, "Triage bugs", T0 + 4, assignees=["u1", "u2"], tag_ids=["t-bug"]),
        await _add(repo, "Release", T0 + 5, state_id="done", tag_ids=["t-bug", "t-docs"]),
        await _add(repo, "Old task", T0 + 6),
    ]
    await repo.set_archived(tasks[-1].id, True, now=T0 + 7)
    return {task.title: task.id for task in tasks}


async def _titles(repo, **filters):
    tasks, _ = await repo.query(TaskFilters(**filters))
    return [task.title for task in tasks]


# ---------------------------------------------------------------------------
# add / get
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_add_keeps_link_order(repo):
    task = await _add(repo, "Ordered", T0, assignees=["u3", "u1", "u2"], tag_ids=["b", "a"])

    loaded = await repo.get(task.id)
    assert loaded.assignees == ["u3", "u1", "u2"]
    assert loaded.tag_ids == ["b", "a"]
    assert loaded.created_at == loaded.updated_at == T0
    assert loaded.archived is False
    assert loaded.archived_at is None


@pytest.mark.asyncio
async def test_get_missing_raises(repo):
    with pytest.raises(NotFoundError):
        await repo.get("missing")


# ---------------------------------------------------------------------------
# query
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_query_is_newest_first(repo, seeded):
    assert await _titles(repo) == [
        "Release",
        "Triage bugs",
        "Plan sprint",
        "Fix login",
        "Write docs",
    ]


@pytest.mark.asyncio
@pytest.mark.parametrize("archived", [False, True])
async def test_query_never_mixes_partitions(repo, seeded, archived):
    tasks, total = await repo.query(TaskFilters(archived=archived))
    assert tasks
    assert all(task.archived is archived for task in tasks)
    assert total == (1 if archived else 5)


@pytest.mark.asyncio
async def test_include_and_exclude_in_same_dimension_both_apply(repo, seeded):
    titles = await _titles(repo, tag_ids=["t-bug"], exclude_tag_ids=["t-docs"])
    assert titles == ["Triage bugs"]


@pytest.mark.asyncio
async def test_scalar_include_and_exclude_conjunction(repo, seeded):
    titles = await _titles(repo, state_ids=["todo", "done"], exclude_state_ids=["done"])
    assert titles == ["Triage bugs", "Plan sprint", "Write docs"]


@pytest.mark.asyncio
async def test_assignee_inclusion_is_intersection(repo, seeded):
    assert await _titles(repo, assignee_ids=["u2", "u9"]) == ["Triage bugs"]
    assert await _titles(repo, exclude_assignee_ids=["u1"]) == [
        "Release",
        "Plan sprint",
        "Write docs",
    ]


@pytest.mark.asyncio
async def test_dimensions_are_anded(repo, seeded):
    titles = await _titles(repo, state_ids=["todo"], tag_ids=["t-docs"])
    assert titles == ["Write docs"]


@pytest.mark.asyncio
async def test_project_inclusion_never_matches_tasks_without_project(repo, seeded):
    assert await _titles(repo, project_ids=["proj-a"]) == ["Write docs"]


@pytest.mark.asyncio
async def test_project_exclusion_keeps_tasks_without_project(repo, seeded):
    titles = await _titles(repo, exclude_project_ids=["proj-a"])
    assert titles == ["Release", "Triage bugs", "Plan sprint", "Fix login"]


@pytest.mark.asyncio
@pytest.mark.parametrize("limit", [1, 2, 5, 10])
async def test_total_count_ignores_limit(repo, seeded, limit):
    tasks, total = await repo.query(TaskFilters(limit=limit))
    assert len(tasks) == min(limit, 5)
    assert total == 5


@pytest.mark.asyncio
async def test_larger_limit_is_superset_in_same_order(repo, seeded):
    small, _ = await repo.query(TaskFilters(limit=2))
    large, _ = await repo.query(TaskFilters(limit=4))
    assert [t.id for t in large][: len(small)] == [t.id for t in small]


@pytest.mark.asyncio
async def test_same_created_at_ties_break_by_insertion(repo):
    first = await _add(repo, "First", T0)
    second = await _add(repo, "Second", T0)

    tasks, _ = await repo.query(TaskFilters())
    assert [t.id for t in tasks] == [second.id, first.id]


def test_build_task_filter_starts_with_partition():
    clause, params = build_task_filter(TaskFilters(archived=True))
    assert clause == "t.archived = ?"
    assert params == [1]


# ---------------------------------------------------------------------------
# update / archive / delete
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_update_patches_fields_and_replaces_links(repo):
    task = await _add(repo, "Draft", T0, project_id="proj-a", assignees=["u1"])

    updated = await repo.update(
        task.id, {"title": "Final", "project_id": None, "assignees": ["u2"]}, now=T0 + 10
    )

    assert updated.title == "Final"
    assert updated.project_id is None
    assert updated.assignees == ["u2"]
    assert updated.updated_at == T0 + 10
    assert updated.created_at == T0


@pytest.mark.asyncio
async def test_update_missing_raises(repo):
    with pytest.raises(NotFoundError):
        await repo.update("missing", {"title": "x"}, now=T0)


@pytest.mark.asyncio
async def test_set_archived_sets_and_clears_timestamp(repo):
    task = await _add(repo, "Archive me", T0)

    archived = await repo.set_archived(task.id, True, now=T0 + 5)
    assert archived.archived is True
    assert archived.archived_at == T0 + 5

    restored = await repo.set_archived(task.id, False, now=T0 + 6)
    assert restored.archived is False
    assert restored.archived_at is None
    assert restored.updated_at == T0 + 6


@pytest.mark.asyncio
async def test_delete_removes_task_and_links(repo, connection):
    task = await _add(repo, "Gone", T0, assignees=["u1"], tag_ids=["t1"])

    await repo.delete(task.id)

    with pytest.raises(NotFoundError):
        await repo.get(task.id)
    assert connection.execute("SELECT COUNT(*) FROM task_tags").fetchone()[0] == 0
    assert connection.execute("SELECT COUNT(*) FROM task_assignees").fetchone()[0] == 0


# ---------------------------------------------------------------------------
# reference helpers
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_count_referencing(repo, seeded):
    assert await repo.count_referencing("state_id", "todo") == 4
    assert await repo.count_referencing("priority_id", "high") == 1
    assert await repo.count_referencing("state_id", "nobody") == 0


@pytest.mark.asyncio
async def test_count_referencing_rejects_unknown_column(repo):
    with pytest.raises(ValueError):
        await repo.count_referencing("title", "x")


@pytest.mark.asyncio
async def test_strip_tag_touches_only_tagged_tasks(repo, seeded):
    stripped = await repo.strip_tag("t-bug", now=T0 + 100)
    assert stripped == 2

    release = await repo.get(seeded["Release"])
    assert release.tag_ids == ["t-docs"]
    assert release.updated_at == T0 + 100

    docs = await repo.get(seeded["Write docs"])
    assert docs.tag_ids == ["t-docs"]
    assert docs.updated_at == T0 + 1


@pytest.mark.asyncio
async def test_list_stale_uses_inclusive_cutoff(repo, seeded):
    stale = await repo.list_stale(["done"], cutoff=T0 + 5)
    assert [t.title for t in stale] == ["Release"]
    assert await repo.list_stale(["done"], cutoff=T0 + 4) == []
    assert await repo.list_stale([], cutoff=T0 + 100) == []
