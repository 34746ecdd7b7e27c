"""Seeds the default task states and priorities into an empty store."""

from __future__ import annotations

from taskdeck_cli.models import LookupCreate
from taskdeck_cli.repositories import LookupRepository
from taskdeck_cli.services.authz_service import AuthorizationGate
from taskdeck_cli.utils.clock import Clock, now_ms
from taskdeck_cli.utils.logger import get_logger

DEFAULT_STATES = [
    ("To Do", "#6b7280"),
    ("In Progress", "#3b82f6"),
    ("Done", "#22c55e"),
    ("Stuck", "#ef4444"),
]

DEFAULT_PRIORITIES = [
    ("Urgent", "#ef4444"),
    ("High", "#f97316"),
    ("Medium", "#eab308"),
    ("Low", "#6b7280"),
]


class SeedService:
    """Inserts the defaults into each collection that is still empty.

    Seeding writes no audit entries.
    """

    def __init__(
        self,
        state_repository: LookupRepository,
        priority_repository: LookupRepository,
        gate: AuthorizationGate,
        clock: Clock = now_ms,
    ):
        self.states = state_repository
        self.priorities = priority_repository
        self.gate = gate
        self.clock = clock

    async def _seed(self, repository: LookupRepository, defaults: list[tuple[str, str]]) -> int:
        if await repository.list_all():
            return 0
        now = self.clock()
        for order, (name, color) in enumerate(defaults):
            await repository.add(LookupCreate(name=name, color=color), order=order, now=now)
        return len(defaults)

    async def seed_defaults(self) -> dict[str, int]:
        """Seed states and priorities.

        Returns:
            Number of entries inserted per collection
        """
        await self.gate.require_authorized_user()
        result = {
            "states": await self._seed(self.states, DEFAULT_STATES),
            "priorities": await self._seed(self.priorities, DEFAULT_PRIORITIES),
        }
        get_logger().info("seeded defaults: %s", result)
        return result


def get_seed_service() -> SeedService:
    """Factory function to get a SeedService instance."""
    from taskdeck_cli.services.authz_service import get_authorization_gate
    from taskdeck_cli.services.config_service import get_storage_strategy_context

    context = get_storage_strategy_context()
    return SeedService(context.state_repository, context.priority_repository, get_authorization_gate())
