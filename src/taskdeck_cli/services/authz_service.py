"""Authorization gate: only signed-in users on the email allow-list get through."""

from __future__ import annotations

import re
from collections.abc import Callable

from taskdeck_cli.models.exceptions import (
    ConfigurationError,
    UnauthenticatedError,
    UnauthorizedError,
)
from taskdeck_cli.repositories import UserRepository
from taskdeck_cli.utils.logger import get_logger

_SEPARATORS = re.compile(r"[,\n]")


def normalize_email(email: str | None) -> str | None:
    """Trim and lower-case an email; blank values normalize to ``None``."""
    if not isinstance(email, str):
        return None
    normalized = email.strip().lower()
    return normalized or None


def parse_allowed_emails(raw_value: str | None) -> frozenset[str]:
    """Parse a comma/newline separated allow-list into normalized emails."""
    if not isinstance(raw_value, str):
        return frozenset()
    emails = (normalize_email(part) for part in _SEPARATORS.split(raw_value))
    return frozenset(email for email in emails if email is not None)


class AuthorizationGate:
    """Resolves the acting user and checks them against the allow-list.

    The allow-list is parsed once, when the gate is built. An empty allow-list
    is not an error until someone signed in is checked against it; then it
    raises ConfigurationError, which callers must never swallow.

    Args:
        allowed_emails: Raw allow-list string
        identity: Callable returning the signed-in user id, or None
        users: Repository used to look up the user's email
    """

    def __init__(
        self,
        allowed_emails: str | None,
        identity: Callable[[], str | None],
        users: UserRepository,
    ):
        self.allowed_emails = parse_allowed_emails(allowed_emails)
        self.identity = identity
        self.users = users

    def ensure_configured(self) -> None:
        """Raise ConfigurationError if the allow-list is empty."""
        if not self.allowed_emails:
            raise ConfigurationError()

    def is_email_allowed(self, email: str | None) -> bool:
        normalized = normalize_email(email)
        if normalized is None:
            return False
        self.ensure_configured()
        return normalized in self.allowed_emails

    async def resolve_authorized_user(self) -> str | None:
        """Return the signed-in user id if allow-listed, else ``None``."""
        user_id = self.identity()
        if user_id is None:
            return None

        user = await self.users.get(user_id)
        if not self.is_email_allowed(user.email if user else None):
            return None
        return user_id

    async def require_authorized_user(self) -> str:
        """Return the allow-listed user id or raise.

        Raises:
            UnauthenticatedError: Nobody is signed in
            UnauthorizedError: The signed-in email is not on the allow-list
            ConfigurationError: The allow-list is empty
        """
        user_id = await self.resolve_authorized_user()
        if user_id is not None:
            return user_id

        if self.identity() is None:
            get_logger().warning("access denied: not authenticated")
            raise UnauthenticatedError()
        get_logger().warning("access denied: user %s is not allow-listed", self.identity())
        raise UnauthorizedError()

    async def is_current_user_allowed(self) -> bool:
        return await self.resolve_authorized_user() is not None


def get_authorization_gate() -> AuthorizationGate:
    """Factory function to get an AuthorizationGate for the current configuration."""
    from taskdeck_cli.services.config_service import get_config_service

    config_service = get_config_service()
    return AuthorizationGate(
        config_service.allowed_emails,
        config_service.current_user_id,
        config_service.storage_strategy_context.user_repository,
    )
