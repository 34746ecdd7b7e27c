"""SQLite implementation of ProjectRepository."""

from __future__ import annotations

from typing import Any

from taskdeck_cli.adapters.sqlite.base import SqliteRepository
from taskdeck_cli.adapters.sqlite.utils import generate_uuid, row_to_dict
from taskdeck_cli.models import Project, ProjectCreate
from taskdeck_cli.models.exceptions import NotFoundError
from taskdeck_cli.repositories import ProjectRepository


def _to_project(row) -> Project:
    data = row_to_dict(row)
    data["archived"] = bool(data["archived"])
    return Project(**data)


class SqliteProjectRepository(SqliteRepository, ProjectRepository):
    """SQLite implementation of project repository."""

    async def list_all(self, include_archived: bool = False) -> list[Project]:
        """List projects by creation time, hiding archived ones unless asked."""
        query = "SELECT * FROM projects"
        if not include_archived:
            query += " WHERE archived = 0"
        rows = self._execute(query + " ORDER BY created_at, rowid").fetchall()
        return [_to_project(row) for row in rows]

    async def get(self, project_id: str) -> Project:
        row = self._execute("SELECT * FROM projects WHERE id = ?", (project_id,)).fetchone()
        if not row:
            raise NotFoundError(f"Project not found: {project_id}")
        return _to_project(row)

    async def add(self, data: ProjectCreate, created_by: str, now: int) -> Project:
        project_id = generate_uuid()
        self._execute(
            """INSERT INTO projects (id, name, description, archived, created_by,
                   created_at, updated_at)
               VALUES (?, ?, ?, 0, ?, ?, ?)""",
            (project_id, data.name, data.description, created_by, now, now),
        )
        self.connection.commit()
        return await self.get(project_id)

    async def update(self, project_id: str, fields: dict[str, Any], now: int) -> Project:
        """Patch fields; ``archived`` is accepted so archive/unarchive share this path."""
        if "archived" in fields:
            fields = {**fields, "archived": int(fields["archived"])}
        if self._patch_row("projects", project_id, {**fields, "updated_at": now}) == 0:
            raise NotFoundError(f"Project not found: {project_id}")
        self.connection.commit()
        return await self.get(project_id)
