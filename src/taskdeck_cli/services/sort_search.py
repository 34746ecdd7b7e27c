"""Client-side sort and search over an already-fetched page of tasks.

Nothing here touches storage, so ``total_count`` of the page is unaffected.
"""

from __future__ import annotations

import locale
from collections.abc import Callable, Sequence
from functools import cmp_to_key

from taskdeck_cli.models import SORTABLE_COLUMNS, SortKey, TaskDetail
from taskdeck_cli.utils.logger import get_logger

Comparator = Callable[[TaskDetail, TaskDetail], int]


def use_user_collation() -> None:
    """Compare titles and project names by the user's ``LC_COLLATE`` locale.

    Called once at CLI startup. Until then the process runs in the C locale,
    which orders text by code point.
    """
    try:
        locale.setlocale(locale.LC_COLLATE, "")
    except locale.Error as e:
        get_logger().warning("locale not available, sorting text by code point: %s", e)


def _sign(value: float) -> int:
    return (value > 0) - (value < 0)


def _compare_text(a: str, b: str) -> int:
    return _sign(locale.strcoll(a, b))


def _compare_numbers(a: float, b: float) -> int:
    return _sign(a - b)


COMPARATORS: dict[str, Comparator] = {
    "title": lambda a, b: _compare_text(a.title, b.title),
    "state": lambda a, b: _compare_numbers(
        a.state.order if a.state else 0, b.state.order if b.state else 0
    ),
    "priority": lambda a, b: _compare_numbers(
        a.priority.order if a.priority else 0, b.priority.order if b.priority else 0
    ),
    "project": lambda a, b: _compare_text(
        a.project.name if a.project else "", b.project.name if b.project else ""
    ),
    "created_at": lambda a, b: _compare_numbers(a.created_at, b.created_at),
    "updated_at": lambda a, b: _compare_numbers(a.updated_at, b.updated_at),
}


def parse_sort_key(value: str) -> SortKey:
    """Parse ``column[:asc|desc]`` as used on the command line."""
    column, _, direction = value.partition(":")
    column = column.strip()
    if column not in SORTABLE_COLUMNS:
        raise ValueError(
            f"Unknown sort column '{column}'. Choose from: {', '.join(SORTABLE_COLUMNS)}"
        )
    return SortKey(column=column, direction=direction.strip() or "asc")


def validate_sort_keys(sort_keys: Sequence[SortKey]) -> list[SortKey]:
    """Reject sort key lists that use a column more than once."""
    seen = set()
    for key in sort_keys:
        if key.column in seen:
            raise ValueError(f"Sort column '{key.column}' used more than once")
        seen.add(key.column)
    return list(sort_keys)


def matches_search(task: TaskDetail, needle: str) -> bool:
    """Case-insensitive substring match against the task's display fields.

    ``needle`` must already be lower-cased.
    """
    haystack = [task.title]
    if task.state:
        haystack.append(task.state.name)
    if task.priority:
        haystack.append(task.priority.name)
    if task.project:
        haystack.append(task.project.name)
    haystack.extend(user.name or user.email for user in task.assignee_users)
    haystack.extend(tag.name for tag in task.tag_list)
    return any(needle in field.lower() for field in haystack)


def search_tasks(tasks: Sequence[TaskDetail], search_text: str | None) -> list[TaskDetail]:
    needle = (search_text or "").strip().lower()
    if not needle:
        return list(tasks)
    return [task for task in tasks if matches_search(task, needle)]


def sort_tasks(tasks: Sequence[TaskDetail], sort_keys: Sequence[SortKey]) -> list[TaskDetail]:
    """Stable multi-key sort; the first non-zero comparison decides."""
    keys = validate_sort_keys(sort_keys)
    if not keys:
        return list(tasks)

    def compare(a: TaskDetail, b: TaskDetail) -> int:
        for key in keys:
            result = COMPARATORS[key.column](a, b)
            if key.direction == "desc":
                result = -result
            if result:
                return result
        return 0

    return sorted(tasks, key=cmp_to_key(compare))


def apply_sort_and_search(
    tasks: Sequence[TaskDetail], sort_keys: Sequence[SortKey], search_text: str | None = None
) -> list[TaskDetail]:
    """Filter by ``search_text`` first, then sort by ``sort_keys``."""
    return sort_tasks(search_tasks(tasks, search_text), sort_keys)
