"""Task query filters and sort keys."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

SortColumn = Literal["title", "state", "priority", "project", "created_at", "updated_at"]
SortDirection = Literal["asc", "desc"]

SORTABLE_COLUMNS: tuple[str, ...] = (
    "title",
    "state",
    "priority",
    "project",
    "created_at",
    "updated_at",
)

DEFAULT_PAGE_SIZE = 50


class TaskFilters(BaseModel):
    """Filter criteria for the task query.

    Each of the five dimensions has an inclusion and an exclusion list. A task
    passes a dimension when (inclusion is empty or its value is included) and
    (exclusion is empty or its value is not excluded). For assignees and tags
    "included" means the task's set intersects the filter set. Dimensions are
    combined with AND.

    Attributes:
        archived: Select the archived partition instead of the active one
        state_ids / exclude_state_ids: State dimension
        priority_ids / exclude_priority_ids: Priority dimension
        project_ids / exclude_project_ids: Project dimension
        assignee_ids / exclude_assignee_ids: Assignee dimension
        tag_ids / exclude_tag_ids: Tag dimension
        limit: Prefix cap applied after ordering newest first
    """

    archived: bool = False
    state_ids: list[str] = Field(default_factory=list)
    exclude_state_ids: list[str] = Field(default_factory=list)
    priority_ids: list[str] = Field(default_factory=list)
    exclude_priority_ids: list[str] = Field(default_factory=list)
    project_ids: list[str] = Field(default_factory=list)
    exclude_project_ids: list[str] = Field(default_factory=list)
    assignee_ids: list[str] = Field(default_factory=list)
    exclude_assignee_ids: list[str] = Field(default_factory=list)
    tag_ids: list[str] = Field(default_factory=list)
    exclude_tag_ids: list[str] = Field(default_factory=list)
    limit: int = Field(default=DEFAULT_PAGE_SIZE, ge=1)


class SortKey(BaseModel):
    """One (column, direction) pair; several keys compose lexicographically."""

    column: SortColumn
    direction: SortDirection = "asc"
