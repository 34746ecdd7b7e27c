"""User service - read access to registered users."""

from __future__ import annotations

from taskdeck_cli.models import User
from taskdeck_cli.repositories import UserRepository
from taskdeck_cli.services.authz_service import AuthorizationGate


class UserService:
    def __init__(self, user_repository: UserRepository, gate: AuthorizationGate):
        self.repository = user_repository
        self.gate = gate

    async def list_users(self) -> list[User]:
        """List every registered user; empty for unauthorized callers."""
        if await self.gate.resolve_authorized_user() is None:
            return []
        return await self.repository.list_all()


def get_user_service() -> UserService:
    """Factory function to get a UserService instance."""
    from taskdeck_cli.services.authz_service import get_authorization_gate
    from taskdeck_cli.services.config_service import get_storage_strategy_context

    return UserService(get_storage_strategy_context().user_repository, get_authorization_gate())
