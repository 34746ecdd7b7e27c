"""Unit tests for the task commands."""

from __future__ import annotations

import json
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from typer.testing import CliRunner

from taskdeck_cli.commands.tasks import app
from taskdeck_cli.models import SortKey, TaskDetail, TaskFilters, TaskPage
from taskdeck_cli.models.exceptions import NotFoundError, UnauthorizedError
from taskdeck_cli.utils.exit_codes import (
    ERROR_INVALID_ARGS,
    ERROR_NOT_FOUND,
    ERROR_PERMISSION_DENIED,
)

runner = CliRunner()


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _task(task_id, title, created_at):
    return TaskDetail(
        id=task_id,
        title=title,
        state_id="s1",
        priority_id="p1",
        creator_id="u1",
        created_at=created_at,
        updated_at=created_at,
    )


@pytest.fixture(autouse=True)
def configured_gate():
    with patch("taskdeck_cli.commands.decorators.get_authorization_gate") as get_gate:
        yield get_gate


@pytest.fixture(autouse=True)
def config_service():
    svc = MagicMock()
    svc.config.output.format = "json"
    svc.config.output.compact = False
    with patch("taskdeck_cli.commands.tasks.get_config_service", return_value=svc):
        with patch("taskdeck_cli.commands.common.get_config_service", return_value=svc):
            yield svc


@pytest.fixture()
def task_service():
    svc = MagicMock()
    svc.list_tasks = AsyncMock(
        return_value=TaskPage(
            tasks=[_task("b", "Bravo", 2), _task("a", "Alpha", 1)], total_count=7
        )
    )
    svc.get_task = AsyncMock(return_value=_task("a", "Alpha", 1))
    svc.create_task = AsyncMock(return_value="new-id")
    svc.update_task = AsyncMock()
    svc.archive_task = AsyncMock()
    svc.unarchive_task = AsyncMock()
    svc.remove_task = AsyncMock()
    with patch("taskdeck_cli.commands.tasks.get_task_service", return_value=svc):
        yield svc


# ---------------------------------------------------------------------------
# list
# ---------------------------------------------------------------------------


def test_list_outputs_page_and_total(task_service):
    result = runner.invoke(app, ["list"])

    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    assert [t["id"] for t in data["tasks"]] == ["b", "a"]
    assert data["total_count"] == 7


def test_list_builds_filters_from_options(task_service):
    result = runner.invoke(
        app,
        ["list", "--state", "s1,s2", "--not-tag", "t1", "--archived", "--limit", "5"],
    )

    assert result.exit_code == 0, result.output
    filters = task_service.list_tasks.call_args[0][0]
    assert filters.state_ids == ["s1", "s2"]
    assert filters.exclude_tag_ids == ["t1"]
    assert filters.archived is True
    assert filters.limit == 5


def test_list_sorts_the_fetched_page(task_service):
    result = runner.invoke(app, ["list", "--sort", "title"])

    assert result.exit_code == 0, result.output
    assert [t["id"] for t in json.loads(result.output)["tasks"]] == ["a", "b"]


def test_list_rejects_unknown_sort_column(task_service):
    result = runner.invoke(app, ["list", "--sort", "due"])

    assert result.exit_code == ERROR_INVALID_ARGS
    task_service.list_tasks.assert_not_called()


def test_list_with_preset(task_service):
    preset_service = MagicMock()
    preset_service.load_preset = AsyncMock(
        return_value=(
            TaskFilters(tag_ids=["t1"]),
            [SortKey(column="created_at", direction="asc")],
        )
    )
    with patch("taskdeck_cli.commands.tasks.get_preset_service", return_value=preset_service):
        result = runner.invoke(app, ["list", "--preset", "mine", "-n", "10"])

    assert result.exit_code == 0, result.output
    filters = task_service.list_tasks.call_args[0][0]
    assert filters.tag_ids == ["t1"]
    assert filters.limit == 10
    assert [t["id"] for t in json.loads(result.output)["tasks"]] == ["a", "b"]


def test_list_with_missing_preset(task_service):
    preset_service = MagicMock()
    preset_service.load_preset = AsyncMock(return_value=None)
    with patch("taskdeck_cli.commands.tasks.get_preset_service", return_value=preset_service):
        result = runner.invoke(app, ["list", "--preset", "nope"])

    assert result.exit_code == ERROR_NOT_FOUND


@pytest.mark.parametrize(
    "extra", [["--state", "s1"], ["--not-tag", "t1"], ["--archived"]]
)
def test_preset_rejects_filter_options(task_service, extra):
    preset_service = MagicMock()
    preset_service.load_preset = AsyncMock(return_value=(TaskFilters(), []))
    with patch("taskdeck_cli.commands.tasks.get_preset_service", return_value=preset_service):
        result = runner.invoke(app, ["list", "--preset", "mine", *extra])

    assert result.exit_code == ERROR_INVALID_ARGS
    assert "--preset cannot" in result.output
    preset_service.load_preset.assert_not_called()
    task_service.list_tasks.assert_not_called()


# ---------------------------------------------------------------------------
# get / create / update
# ---------------------------------------------------------------------------


def test_get_missing_task(task_service):
    task_service.get_task.return_value = None

    result = runner.invoke(app, ["get", "zzz"])

    assert result.exit_code == ERROR_NOT_FOUND


def test_create_task(task_service):
    result = runner.invoke(
        app,
        ["create", "Ship it", "--state", "s1", "--priority", "p1", "--tag", "t1,t2"],
    )

    assert result.exit_code == 0, result.output
    assert "new-id" in result.output
    task_data = task_service.create_task.call_args[0][0]
    assert task_data.title == "Ship it"
    assert task_data.tag_ids == ["t1", "t2"]
    assert task_data.project_id is None


def test_create_with_blank_title_is_invalid(task_service):
    result = runner.invoke(app, ["create", "   ", "--state", "s1", "--priority", "p1"])

    assert result.exit_code == ERROR_INVALID_ARGS
    task_service.create_task.assert_not_called()


def test_update_sends_only_given_fields(task_service):
    result = runner.invoke(app, ["update", "a", "--state", "s2", "--no-project"])

    assert result.exit_code == 0, result.output
    task_id, update = task_service.update_task.call_args[0]
    assert task_id == "a"
    assert update.supplied_fields() == {"state_id": "s2", "project_id": None}


def test_update_without_fields(task_service):
    result = runner.invoke(app, ["update", "a"])

    assert result.exit_code == ERROR_INVALID_ARGS
    task_service.update_task.assert_not_called()


# ---------------------------------------------------------------------------
# archive / delete and error mapping
# ---------------------------------------------------------------------------


def test_archive_missing_task_maps_to_not_found(task_service):
    task_service.archive_task.side_effect = NotFoundError("Task not found: zzz")

    result = runner.invoke(app, ["archive", "zzz"])

    assert result.exit_code == ERROR_NOT_FOUND
    assert "Task not found" in result.output


def test_unauthorized_write_maps_to_permission_denied(task_service):
    task_service.unarchive_task.side_effect = UnauthorizedError()

    result = runner.invoke(app, ["unarchive", "a"])

    assert result.exit_code == ERROR_PERMISSION_DENIED


def test_delete_asks_for_confirmation(task_service):
    result = runner.invoke(app, ["delete", "a"], input="n\n")

    assert result.exit_code == 0
    task_service.remove_task.assert_not_called()


def test_delete_with_yes(task_service):
    result = runner.invoke(app, ["delete", "a", "--yes"])

    assert result.exit_code == 0, result.output
    task_service.remove_task.assert_awaited_once_with("a")
