"""Service for handling sign-in, sign-out and the current identity.

Signing in stands in for the external identity provider's callback: it
registers the user on first sight and stores the session locally. It does
not check the allow-list; the authorization gate does that on every call.
"""

from __future__ import annotations

from taskdeck_cli.models import AuditAction, EntityType, User
from taskdeck_cli.repositories import UserRepository
from taskdeck_cli.services.audit_service import AuditService
from taskdeck_cli.services.authz_service import AuthorizationGate, normalize_email
from taskdeck_cli.services.config_service import ConfigService
from taskdeck_cli.utils.clock import Clock, now_ms
from taskdeck_cli.utils.logger import get_logger


class AuthService:
    """Service for handling authentication-related operations."""

    def __init__(
        self,
        config_service: ConfigService,
        user_repository: UserRepository,
        audit: AuditService,
        gate: AuthorizationGate,
        clock: Clock = now_ms,
    ):
        self.config_service = config_service
        self.users = user_repository
        self.audit = audit
        self.gate = gate
        self.clock = clock

    async def sign_in(self, email: str, name: str | None = None) -> User:
        """Get or create the user for ``email`` and make them the session identity.

        A ``signup`` audit entry is written only when the user is new.
        """
        normalized = normalize_email(email)
        if normalized is None:
            raise ValueError("Email must not be empty")

        user = await self.users.get_by_email(normalized)
        if user is None:
            user = await self.users.add(normalized, name, now=self.clock())
            await self.audit.record(
                user.id,
                AuditAction.SIGNUP,
                EntityType.USER,
                user.id,
                metadata={"name": user.display_name},
            )
            get_logger().info("registered new user %s", user.id)

        self.config_service.save_session(user.id, user.email)
        return user

    def sign_out(self) -> None:
        self.config_service.clear_session()

    async def current_user(self) -> User | None:
        """The signed-in user, allow-listed or not."""
        user_id = self.config_service.current_user_id()
        if user_id is None:
            return None
        return await self.users.get(user_id)

    async def is_current_user_allowed(self) -> bool:
        return await self.gate.is_current_user_allowed()


def get_auth_service() -> AuthService:
    """Factory function to get an AuthService instance."""
    from taskdeck_cli.services.audit_service import get_audit_service
    from taskdeck_cli.services.authz_service import get_authorization_gate
    from taskdeck_cli.services.config_service import get_config_service

    config_service = get_config_service()
    return AuthService(
        config_service,
        config_service.storage_strategy_context.user_repository,
        get_audit_service(),
        get_authorization_gate(),
    )
