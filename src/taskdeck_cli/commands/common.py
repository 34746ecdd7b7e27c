"""Helpers shared by the command modules."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel

from taskdeck_cli.models import TaskFilters
from taskdeck_cli.models.filters import DEFAULT_PAGE_SIZE
from taskdeck_cli.services.config_service import get_config_service

OUTPUT_HELP = "Output format (pretty, table, json, yaml, quiet)"


def resolve_output(output: str | None) -> str:
    """Use the explicit ``--output`` value, else the configured default."""
    if output:
        return output
    return get_config_service().config.output.format


def to_data(value: BaseModel | list[BaseModel] | None) -> Any:
    """Convert models into JSON-ready dicts for the formatters."""
    if value is None:
        return None
    if isinstance(value, list):
        return [item.model_dump(mode="json") for item in value]
    return value.model_dump(mode="json")


def split_ids(values: list[str] | None) -> list[str]:
    """Accept repeated options and comma separated lists alike."""
    ids: list[str] = []
    for value in values or []:
        ids.extend(part.strip() for part in value.split(",") if part.strip())
    return ids


def build_filters(
    *,
    archived: bool = False,
    state: list[str] | None = None,
    not_state: list[str] | None = None,
    priority: list[str] | None = None,
    not_priority: list[str] | None = None,
    project: list[str] | None = None,
    not_project: list[str] | None = None,
    assignee: list[str] | None = None,
    not_assignee: list[str] | None = None,
    tag: list[str] | None = None,
    not_tag: list[str] | None = None,
    limit: int = DEFAULT_PAGE_SIZE,
) -> TaskFilters:
    """Build TaskFilters from the include/exclude command line options."""
    return TaskFilters(
        archived=archived,
        state_ids=split_ids(state),
        exclude_state_ids=split_ids(not_state),
        priority_ids=split_ids(priority),
        exclude_priority_ids=split_ids(not_priority),
        project_ids=split_ids(project),
        exclude_project_ids=split_ids(not_project),
        assignee_ids=split_ids(assignee),
        exclude_assignee_ids=split_ids(not_assignee),
        tag_ids=split_ids(tag),
        exclude_tag_ids=split_ids(not_tag),
        limit=limit,
    )
