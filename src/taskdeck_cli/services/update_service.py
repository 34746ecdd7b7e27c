"""Status update service - comments attached to tasks."""

from __future__ import annotations

from taskdeck_cli.models import AuditAction, EntityType, StatusUpdateDetail
from taskdeck_cli.repositories import StatusUpdateRepository, TaskRepository, UserRepository
from taskdeck_cli.services.audit_service import AuditService
from taskdeck_cli.services.authz_service import AuthorizationGate
from taskdeck_cli.utils.clock import Clock, now_ms


class UpdateService:
    """Service for task comments.

    Comment actions are audited against the task they belong to, with the
    comment body in the entry's metadata.
    """

    def __init__(
        self,
        update_repository: StatusUpdateRepository,
        task_repository: TaskRepository,
        user_repository: UserRepository,
        audit: AuditService,
        gate: AuthorizationGate,
        clock: Clock = now_ms,
    ):
        self.repository = update_repository
        self.tasks = task_repository
        self.users = user_repository
        self.audit = audit
        self.gate = gate
        self.clock = clock

    async def list_updates(self, task_id: str) -> list[StatusUpdateDetail]:
        """List a task's updates oldest first, each with its author."""
        if await self.gate.resolve_authorized_user() is None:
            return []
        updates = await self.repository.list_for_task(task_id)
        authors = {}
        for user_id in {u.user_id for u in updates}:
            authors[user_id] = await self.users.get(user_id)
        return [
            StatusUpdateDetail(**u.model_dump(), user=authors.get(u.user_id)) for u in updates
        ]

    async def create_update(self, task_id: str, body: str) -> str:
        """Attach a comment to a task and return its id.

        Raises:
            NotFoundError: If the task does not exist
            ValueError: If the body is blank
        """
        user_id = await self.gate.require_authorized_user()
        body = body.strip()
        if not body:
            raise ValueError("Update body must not be empty")
        task = await self.tasks.get(task_id)

        update = await self.repository.add(task_id, user_id, body, now=self.clock())
        await self.audit.record(
            user_id,
            AuditAction.ADD_UPDATE,
            EntityType.TASK,
            task_id,
            metadata={"name": task.title, "body": body},
        )
        return update.id

    async def remove_update(self, update_id: str) -> None:
        """Delete a comment. Raises NotFoundError if it does not exist."""
        user_id = await self.gate.require_authorized_user()
        update = await self.repository.get(update_id)

        await self.repository.delete(update_id)
        await self.audit.record(
            user_id,
            AuditAction.REMOVE_UPDATE,
            EntityType.TASK,
            update.task_id,
            metadata={"body": update.body},
        )


def get_update_service() -> UpdateService:
    """Factory function to get an UpdateService instance."""
    from taskdeck_cli.services.audit_service import get_audit_service
    from taskdeck_cli.services.authz_service import get_authorization_gate
    from taskdeck_cli.services.config_service import get_storage_strategy_context

    context = get_storage_strategy_context()
    return UpdateService(
        context.update_repository,
        context.task_repository,
        context.user_repository,
        get_audit_service(),
        get_authorization_gate(),
    )
