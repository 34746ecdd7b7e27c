"""Domain error taxonomy.

Each error carries a machine-readable ``code`` (so callers can tell "not
signed in" from "signed in but not allowed") and the CLI exit code it maps to.
"""

from __future__ import annotations

from taskdeck_cli.utils import exit_codes


class TaskDeckError(Exception):
    """Base class for all TaskDeck domain errors."""

    code = "error"
    exit_code = exit_codes.ERROR_GENERAL


class UnauthenticatedError(TaskDeckError):
    """No signed-in identity."""

    code = "unauthenticated"
    exit_code = exit_codes.ERROR_AUTH_FAILURE

    def __init__(self, message: str = "Not authenticated"):
        super().__init__(message)


class UnauthorizedError(TaskDeckError):
    """Signed in, but the email is not on the allow-list."""

    code = "unauthorized"
    exit_code = exit_codes.ERROR_PERMISSION_DENIED

    def __init__(self, message: str = "Not authorized"):
        super().__init__(message)


class ConfigurationError(TaskDeckError):
    """The allow-list is unset or empty. Fatal; never degraded to an empty result."""

    code = "missing_allowlist"
    exit_code = exit_codes.ERROR_CONFIGURATION

    def __init__(self, message: str = "ALLOWED_EMAILS is not configured"):
        super().__init__(message)


class InUseError(TaskDeckError):
    """A delete was blocked because tasks still reference the entity."""

    code = "in_use"
    exit_code = exit_codes.ERROR_CONFLICT


class NotFoundError(TaskDeckError):
    """The targeted entity does not exist."""

    code = "not_found"
    exit_code = exit_codes.ERROR_NOT_FOUND
