"""Task service - filtered queries and task mutations."""

from __future__ import annotations

from taskdeck_cli.models import (
    AuditAction,
    EntityType,
    Task,
    TaskCreate,
    TaskDetail,
    TaskFilters,
    TaskPage,
    TaskUpdate,
)
from taskdeck_cli.models.exceptions import NotFoundError
from taskdeck_cli.repositories import (
    LookupRepository,
    ProjectRepository,
    StatusUpdateRepository,
    TagRepository,
    TaskRepository,
    UserRepository,
)
from taskdeck_cli.services.audit_service import AuditService, compute_changes
from taskdeck_cli.services.authz_service import AuthorizationGate
from taskdeck_cli.utils.clock import Clock, now_ms


class TaskService:
    """Service for task business logic.

    Reads degrade to empty results when the caller is not allow-listed;
    writes raise. Every successful write that changes something is audited.
    """

    def __init__(
        self,
        task_repository: TaskRepository,
        state_repository: LookupRepository,
        priority_repository: LookupRepository,
        project_repository: ProjectRepository,
        tag_repository: TagRepository,
        user_repository: UserRepository,
        update_repository: StatusUpdateRepository,
        audit: AuditService,
        gate: AuthorizationGate,
        clock: Clock = now_ms,
    ):
        self.repository = task_repository
        self.states = state_repository
        self.priorities = priority_repository
        self.projects = project_repository
        self.tags = tag_repository
        self.users = user_repository
        self.updates = update_repository
        self.audit = audit
        self.gate = gate
        self.clock = clock

    async def _denormalize(self, tasks: list[Task]) -> list[TaskDetail]:
        """Embed referenced entities; missing ones become None or are dropped."""
        if not tasks:
            return []

        states = {s.id: s for s in await self.states.list_all()}
        priorities = {p.id: p for p in await self.priorities.list_all()}
        projects = {p.id: p for p in await self.projects.list_all(include_archived=True)}
        tags = {t.id: t for t in await self.tags.list_all()}
        users = {u.id: u for u in await self.users.list_all()}

        return [
            TaskDetail(
                **task.model_dump(),
                state=states.get(task.state_id),
                priority=priorities.get(task.priority_id),
                project=projects.get(task.project_id) if task.project_id else None,
                assignee_users=[users[u] for u in task.assignees if u in users],
                tag_list=[tags[t] for t in task.tag_ids if t in tags],
            )
            for task in tasks
        ]

    async def list_tasks(self, filters: TaskFilters | None = None) -> TaskPage:
        """Run the filtered query.

        Args:
            filters: Partition, per-dimension include/exclude lists and limit

        Returns:
            TaskPage with up to ``filters.limit`` tasks (newest first) and the
            total number of matches; empty for unauthorized callers
        """
        if await self.gate.resolve_authorized_user() is None:
            return TaskPage()

        tasks, total_count = await self.repository.query(filters or TaskFilters())
        return TaskPage(tasks=await self._denormalize(tasks), total_count=total_count)

    async def get_task(self, task_id: str) -> TaskDetail | None:
        """Get one denormalized task, or None if missing or unauthorized."""
        if await self.gate.resolve_authorized_user() is None:
            return None
        try:
            task = await self.repository.get(task_id)
        except NotFoundError:
            return None
        return (await self._denormalize([task]))[0]

    async def create_task(self, task_data: TaskCreate) -> str:
        """Create a task and return its id.

        Referenced state, priority, project, users and tags are not checked
        for existence; dangling references simply resolve to nothing on read.
        """
        user_id = await self.gate.require_authorized_user()
        task = await self.repository.add(task_data, creator_id=user_id, now=self.clock())
        await self.audit.record(
            user_id, AuditAction.CREATE, EntityType.TASK, task.id, metadata={"name": task.title}
        )
        return task.id

    async def update_task(self, task_id: str, task_data: TaskUpdate) -> None:
        """Patch the supplied fields.

        ``updated_at`` is always refreshed. An audit entry is written only
        when at least one supplied field actually changed.
        """
        user_id = await self.gate.require_authorized_user()
        current = await self.repository.get(task_id)
        supplied = task_data.supplied_fields()
        changes = compute_changes(current.model_dump(), supplied)

        updated = await self.repository.update(task_id, supplied, now=self.clock())

        if changes:
            await self.audit.record(
                user_id,
                AuditAction.UPDATE,
                EntityType.TASK,
                task_id,
                changes=changes,
                metadata={"name": updated.title},
            )

    async def _set_archived(self, task_id: str, archived: bool) -> None:
        user_id = await self.gate.require_authorized_user()
        task = await self.repository.get(task_id)
        if task.archived == archived:
            return

        await self.repository.set_archived(task_id, archived, now=self.clock())
        await self.audit.record(
            user_id,
            AuditAction.ARCHIVE if archived else AuditAction.UNARCHIVE,
            EntityType.TASK,
            task_id,
            metadata={"name": task.title},
        )

    async def archive_task(self, task_id: str) -> None:
        """Archive a task. Raises NotFoundError if it does not exist."""
        await self._set_archived(task_id, True)

    async def unarchive_task(self, task_id: str) -> None:
        """Unarchive a task. Raises NotFoundError if it does not exist."""
        await self._set_archived(task_id, False)

    async def remove_task(self, task_id: str) -> None:
        """Delete a task and its status updates.

        Updates go first, then the task. The two steps are separate writes;
        running the removal again completes an interrupted cleanup.
        """
        user_id = await self.gate.require_authorized_user()
        try:
            task = await self.repository.get(task_id)
        except NotFoundError:
            task = None

        await self.updates.delete_for_task(task_id)
        await self.repository.delete(task_id)

        if task is not None:
            await self.audit.record(
                user_id, AuditAction.DELETE, EntityType.TASK, task_id, metadata={"name": task.title}
            )


def get_task_service() -> TaskService:
    """Factory function to get a TaskService instance."""
    from taskdeck_cli.services.audit_service import get_audit_service
    from taskdeck_cli.services.authz_service import get_authorization_gate
    from taskdeck_cli.services.config_service import get_storage_strategy_context

    context = get_storage_strategy_context()
    return TaskService(
        context.task_repository,
        context.state_repository,
        context.priority_repository,
        context.project_repository,
        context.tag_repository,
        context.user_repository,
        context.update_repository,
        get_audit_service(),
        get_authorization_gate(),
    )
