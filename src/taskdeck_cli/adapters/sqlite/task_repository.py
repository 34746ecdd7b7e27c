"""SQLite implementation of TaskRepository."""

from __future__ import annotations

from typing import Any

from taskdeck_cli.adapters.sqlite.base import SqliteRepository
from taskdeck_cli.adapters.sqlite.utils import generate_uuid, placeholders, row_to_dict
from taskdeck_cli.models import Task, TaskCreate, TaskFilters
from taskdeck_cli.models.exceptions import NotFoundError
from taskdeck_cli.repositories import TaskRepository

REFERENCE_COLUMNS = ("state_id", "priority_id")


def _scalar_dimension(
    column: str, include: list[str], exclude: list[str], nullable: bool = False
) -> tuple[list[str], list[Any]]:
    conditions: list[str] = []
    params: list[Any] = []
    if include:
        # NULL never satisfies IN, so a task without a value is never included
        conditions.append(f"t.{column} IN ({placeholders(include)})")
        params.extend(include)
    if exclude:
        clause = f"t.{column} NOT IN ({placeholders(exclude)})"
        if nullable:
            clause = f"(t.{column} IS NULL OR {clause})"
        conditions.append(clause)
        params.extend(exclude)
    return conditions, params


def _set_dimension(
    table: str, column: str, include: list[str], exclude: list[str]
) -> tuple[list[str], list[Any]]:
    conditions: list[str] = []
    params: list[Any] = []
    subquery = f"SELECT 1 FROM {table} j WHERE j.task_id = t.id AND j.{column} IN ({{}})"
    if include:
        conditions.append(f"EXISTS ({subquery.format(placeholders(include))})")
        params.extend(include)
    if exclude:
        conditions.append(f"NOT EXISTS ({subquery.format(placeholders(exclude))})")
        params.extend(exclude)
    return conditions, params


def build_task_filter(filters: TaskFilters) -> tuple[str, list[Any]]:
    """Translate TaskFilters into a WHERE clause over ``tasks t``.

    Dimensions are AND-ed; within a dimension both the inclusion and the
    exclusion predicate must hold.
    """
    conditions = ["t.archived = ?"]
    params: list[Any] = [int(filters.archived)]

    parts = [
        _scalar_dimension("state_id", filters.state_ids, filters.exclude_state_ids),
        _scalar_dimension("priority_id", filters.priority_ids, filters.exclude_priority_ids),
        _scalar_dimension(
            "project_id", filters.project_ids, filters.exclude_project_ids, nullable=True
        ),
        _set_dimension(
            "task_assignees", "user_id", filters.assignee_ids, filters.exclude_assignee_ids
        ),
        _set_dimension("task_tags", "tag_id", filters.tag_ids, filters.exclude_tag_ids),
    ]
    for dimension_conditions, dimension_params in parts:
        conditions.extend(dimension_conditions)
        params.extend(dimension_params)

    return " AND ".join(conditions), params


class SqliteTaskRepository(SqliteRepository, TaskRepository):
    """SQLite implementation of task repository.

    Assignees and tags live in the ``task_assignees`` and ``task_tags``
    junction tables; their ``position`` column preserves insertion order.
    """

    def _load_links(self, table: str, column: str, task_ids: list[str]) -> dict[str, list[str]]:
        links: dict[str, list[str]] = {task_id: [] for task_id in task_ids}
        if not task_ids:
            return links
        cursor = self._execute(
            f"SELECT task_id, {column} FROM {table} "
            f"WHERE task_id IN ({placeholders(task_ids)}) ORDER BY task_id, position",
            task_ids,
        )
        for row in cursor.fetchall():
            links[row["task_id"]].append(row[column])
        return links

    def _rows_to_tasks(self, rows: list) -> list[Task]:
        task_ids = [row["id"] for row in rows]
        assignees = self._load_links("task_assignees", "user_id", task_ids)
        tags = self._load_links("task_tags", "tag_id", task_ids)

        tasks = []
        for row in rows:
            data = row_to_dict(row)
            data["archived"] = bool(data["archived"])
            data["assignees"] = assignees[data["id"]]
            data["tag_ids"] = tags[data["id"]]
            tasks.append(Task(**data))
        return tasks

    def _replace_links(self, table: str, column: str, task_id: str, values: list[str]) -> None:
        self._execute(f"DELETE FROM {table} WHERE task_id = ?", (task_id,))
        for position, value in enumerate(values):
            self._execute(
                f"INSERT INTO {table} (task_id, {column}, position) VALUES (?, ?, ?)",
                (task_id, value, position),
            )

    async def query(self, filters: TaskFilters) -> tuple[list[Task], int]:
        """Run the filtered query: newest first, capped at ``filters.limit``."""
        where_clause, params = build_task_filter(filters)

        total = self._execute(
            f"SELECT COUNT(*) FROM tasks t WHERE {where_clause}", params
        ).fetchone()[0]

        # rowid breaks created_at ties by insertion order
        rows = self._execute(
            f"SELECT t.* FROM tasks t WHERE {where_clause} "
            "ORDER BY t.created_at DESC, t.rowid DESC LIMIT ?",
            [*params, filters.limit],
        ).fetchall()

        return self._rows_to_tasks(rows), total

    async def get(self, task_id: str) -> Task:
        """Get a specific task by ID."""
        row = self._execute("SELECT * FROM tasks WHERE id = ?", (task_id,)).fetchone()
        if not row:
            raise NotFoundError(f"Task not found: {task_id}")
        return self._rows_to_tasks([row])[0]

    async def add(self, task_data: TaskCreate, creator_id: str, now: int) -> Task:
        """Create a new task."""
        task_id = generate_uuid()

        self._execute(
            """INSERT INTO tasks (id, title, description, state_id, priority_id,
                   project_id, creator_id, archived, archived_at, created_at, updated_at)
               VALUES (?, ?, ?, ?, ?, ?, ?, 0, NULL, ?, ?)""",
            (
                task_id,
                task_data.title,
                task_data.description,
                task_data.state_id,
                task_data.priority_id,
                task_data.project_id,
                creator_id,
                now,
                now,
            ),
        )
        self._replace_links("task_assignees", "user_id", task_id, task_data.assignees)
        self._replace_links("task_tags", "tag_id", task_id, task_data.tag_ids)
        self.connection.commit()

        return await self.get(task_id)

    async def update(self, task_id: str, fields: dict[str, Any], now: int) -> Task:
        """Patch scalar columns and replace assignee/tag lists when supplied."""
        columns = {k: v for k, v in fields.items() if k not in ("assignees", "tag_ids")}
        columns["updated_at"] = now

        if self._patch_row("tasks", task_id, columns) == 0:
            raise NotFoundError(f"Task not found: {task_id}")

        if "assignees" in fields:
            self._replace_links("task_assignees", "user_id", task_id, fields["assignees"])
        if "tag_ids" in fields:
            self._replace_links("task_tags", "tag_id", task_id, fields["tag_ids"])
        self.connection.commit()

        return await self.get(task_id)

    async def set_archived(self, task_id: str, archived: bool, now: int) -> Task:
        columns = {
            "archived": int(archived),
            "archived_at": now if archived else None,
            "updated_at": now,
        }
        if self._patch_row("tasks", task_id, columns) == 0:
            raise NotFoundError(f"Task not found: {task_id}")
        self.connection.commit()
        return await self.get(task_id)

    async def delete(self, task_id: str) -> None:
        self._execute("DELETE FROM task_assignees WHERE task_id = ?", (task_id,))
        self._execute("DELETE FROM task_tags WHERE task_id = ?", (task_id,))
        self._execute("DELETE FROM tasks WHERE id = ?", (task_id,))
        self.connection.commit()

    async def count_referencing(self, column: str, entity_id: str) -> int:
        if column not in REFERENCE_COLUMNS:
            raise ValueError(f"Unsupported reference column: {column}")
        cursor = self._execute(
            f"SELECT COUNT(*) FROM tasks WHERE {column} = ?", (entity_id,)
        )
        return cursor.fetchone()[0]

    async def strip_tag(self, tag_id: str, now: int) -> int:
        """Remove a tag from every task, refreshing those tasks' updated_at."""
        task_ids = [
            row["task_id"]
            for row in self._execute(
                "SELECT task_id FROM task_tags WHERE tag_id = ?", (tag_id,)
            ).fetchall()
        ]
        if not task_ids:
            return 0

        self._execute("DELETE FROM task_tags WHERE tag_id = ?", (tag_id,))
        self._execute(
            f"UPDATE tasks SET updated_at = ? WHERE id IN ({placeholders(task_ids)})",
            [now, *task_ids],
        )
        self.connection.commit()
        return len(task_ids)

    async def list_stale(self, state_ids: list[str], cutoff: int) -> list[Task]:
        if not state_ids:
            return []
        rows = self._execute(
            f"""SELECT * FROM tasks
                WHERE archived = 0
                  AND state_id IN ({placeholders(state_ids)})
                  AND updated_at <= ?
                ORDER BY created_at""",
            [*state_ids, cutoff],
        ).fetchall()
        return self._rows_to_tasks(rows)
