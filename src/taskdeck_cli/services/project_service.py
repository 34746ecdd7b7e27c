"""Project service - Business logic for project operations."""

from __future__ import annotations

from taskdeck_cli.models import AuditAction, EntityType, Project, ProjectCreate, ProjectUpdate
from taskdeck_cli.repositories import ProjectRepository
from taskdeck_cli.services.audit_service import AuditService, compute_changes
from taskdeck_cli.services.authz_service import AuthorizationGate
from taskdeck_cli.utils.clock import Clock, now_ms


class ProjectService:
    """Service for project business logic.

    Projects cannot be deleted. Archiving and unarchiving are idempotent:
    repeating either one is a silent no-op.
    """

    def __init__(
        self,
        project_repository: ProjectRepository,
        audit: AuditService,
        gate: AuthorizationGate,
        clock: Clock = now_ms,
    ):
        self.repository = project_repository
        self.audit = audit
        self.gate = gate
        self.clock = clock

    async def list_projects(self, include_archived: bool = False) -> list[Project]:
        """List projects, hiding archived ones unless ``include_archived``."""
        if await self.gate.resolve_authorized_user() is None:
            return []
        return await self.repository.list_all(include_archived=include_archived)

    async def create_project(self, name: str, description: str | None = None) -> str:
        user_id = await self.gate.require_authorized_user()
        project = await self.repository.add(
            ProjectCreate(name=name, description=description),
            created_by=user_id,
            now=self.clock(),
        )
        await self.audit.record(
            user_id, AuditAction.CREATE, EntityType.PROJECT, project.id, metadata={"name": project.name}
        )
        return project.id

    async def update_project(self, project_id: str, data: ProjectUpdate) -> None:
        user_id = await self.gate.require_authorized_user()
        current = await self.repository.get(project_id)
        supplied = data.model_dump(exclude_unset=True)
        changes = compute_changes(current.model_dump(), supplied)

        updated = await self.repository.update(project_id, supplied, now=self.clock())
        if changes:
            await self.audit.record(
                user_id,
                AuditAction.UPDATE,
                EntityType.PROJECT,
                project_id,
                changes=changes,
                metadata={"name": updated.name},
            )

    async def _set_archived(self, project_id: str, archived: bool) -> None:
        user_id = await self.gate.require_authorized_user()
        project = await self.repository.get(project_id)
        if project.archived == archived:
            return

        await self.repository.update(project_id, {"archived": archived}, now=self.clock())
        await self.audit.record(
            user_id,
            AuditAction.ARCHIVE if archived else AuditAction.UNARCHIVE,
            EntityType.PROJECT,
            project_id,
            metadata={"name": project.name},
        )

    async def archive_project(self, project_id: str) -> None:
        await self._set_archived(project_id, True)

    async def unarchive_project(self, project_id: str) -> None:
        await self._set_archived(project_id, False)


def get_project_service() -> ProjectService:
    """Factory function to get a ProjectService instance."""
    from taskdeck_cli.services.audit_service import get_audit_service
    from taskdeck_cli.services.authz_service import get_authorization_gate
    from taskdeck_cli.services.config_service import get_storage_strategy_context

    context = get_storage_strategy_context()
    return ProjectService(context.project_repository, get_audit_service(), get_authorization_gate())
