"""Tag service - Business logic for tag operations."""

from __future__ import annotations

from taskdeck_cli.models import AuditAction, EntityType, Tag, TagCreate, TagUpdate
from taskdeck_cli.repositories import TagRepository, TaskRepository
from taskdeck_cli.services.audit_service import AuditService, compute_changes
from taskdeck_cli.services.authz_service import AuthorizationGate
from taskdeck_cli.utils.clock import Clock, now_ms
from taskdeck_cli.utils.logger import get_logger


class TagService:
    """Service for tag business logic."""

    def __init__(
        self,
        tag_repository: TagRepository,
        task_repository: TaskRepository,
        audit: AuditService,
        gate: AuthorizationGate,
        clock: Clock = now_ms,
    ):
        self.repository = tag_repository
        self.tasks = task_repository
        self.audit = audit
        self.gate = gate
        self.clock = clock

    async def list_tags(self) -> list[Tag]:
        if await self.gate.resolve_authorized_user() is None:
            return []
        return await self.repository.list_all()

    async def create_tag(self, name: str, color: str) -> str:
        """Create a new tag.

        Args:
            name: Tag name
            color: Hex color code (e.g. "#3b82f6")

        Returns:
            The new tag's id
        """
        user_id = await self.gate.require_authorized_user()
        tag = await self.repository.add(TagCreate(name=name, color=color), now=self.clock())
        await self.audit.record(
            user_id, AuditAction.CREATE, EntityType.TAG, tag.id, metadata={"name": tag.name}
        )
        return tag.id

    async def update_tag(self, tag_id: str, data: TagUpdate) -> None:
        user_id = await self.gate.require_authorized_user()
        current = await self.repository.get(tag_id)
        supplied = data.model_dump(exclude_unset=True)
        changes = compute_changes(current.model_dump(), supplied)

        updated = await self.repository.update(tag_id, supplied, now=self.clock())
        if changes:
            await self.audit.record(
                user_id,
                AuditAction.UPDATE,
                EntityType.TAG,
                tag_id,
                changes=changes,
                metadata={"name": updated.name},
            )

    async def remove_tag(self, tag_id: str) -> None:
        """Delete a tag, first stripping it from every task that carries it.

        The affected tasks get a fresh ``updated_at`` but no audit entries
        of their own; the tag deletion is the audited action.
        """
        user_id = await self.gate.require_authorized_user()
        tag = await self.repository.get(tag_id)

        stripped = await self.tasks.strip_tag(tag_id, now=self.clock())
        await self.repository.delete(tag_id)
        get_logger().info("tag %s deleted, removed from %d task(s)", tag_id, stripped)

        await self.audit.record(
            user_id, AuditAction.DELETE, EntityType.TAG, tag_id, metadata={"name": tag.name}
        )


def get_tag_service() -> TagService:
    """Factory function to get a TagService instance."""
    from taskdeck_cli.services.audit_service import get_audit_service
    from taskdeck_cli.services.authz_service import get_authorization_gate
    from taskdeck_cli.services.config_service import get_storage_strategy_context

    context = get_storage_strategy_context()
    return TagService(
        context.tag_repository, context.task_repository, get_audit_service(), get_authorization_gate()
    )
