"""Auto-archive sweep for tasks that have sat in a "Done" state for a week."""

from __future__ import annotations

from taskdeck_cli.repositories import LookupRepository, TaskRepository
from taskdeck_cli.utils.clock import MS_PER_DAY, Clock, now_ms
from taskdeck_cli.utils.logger import get_logger

DONE_STATE_NAME = "done"
ARCHIVE_AFTER_MS = 7 * MS_PER_DAY


class AutoArchiveService:
    """Archives tasks whose state is named "Done" (any case) and that have
    not been updated for at least seven days.

    This is a system job: it is not gated and has no acting user.
    """

    def __init__(
        self,
        task_repository: TaskRepository,
        state_repository: LookupRepository,
        clock: Clock = now_ms,
    ):
        self.tasks = task_repository
        self.states = state_repository
        self.clock = clock

    async def archive_done(self, now: int | None = None) -> int:
        """Run one sweep and return the number of tasks archived.

        Re-running finds nothing new, since archived tasks are skipped.
        """
        now = self.clock() if now is None else now
        done_state_ids = [
            state.id
            for state in await self.states.list_all()
            if state.name.strip().lower() == DONE_STATE_NAME
        ]
        if not done_state_ids:
            get_logger().info("auto-archive: no 'Done' state, nothing to do")
            return 0

        stale = await self.tasks.list_stale(done_state_ids, cutoff=now - ARCHIVE_AFTER_MS)
        for task in stale:
            await self.tasks.set_archived(task.id, True, now=now)

        # Sweep archives write no audit entries, unlike manual archives.
        get_logger().info("auto-archive: archived %d task(s) without audit entries", len(stale))
        return len(stale)


def get_auto_archive_service() -> AutoArchiveService:
    """Factory function to get an AutoArchiveService instance."""
    from taskdeck_cli.services.config_service import get_storage_strategy_context

    context = get_storage_strategy_context()
    return AutoArchiveService(context.task_repository, context.state_repository)
