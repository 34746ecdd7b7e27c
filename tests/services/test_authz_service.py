"""Tests for the authorization gate."""

from __future__ import annotations

import pytest

from taskdeck_cli.models.exceptions import (
    ConfigurationError,
    UnauthenticatedError,
    UnauthorizedError,
)
from taskdeck_cli.services.authz_service import (
    AuthorizationGate,
    normalize_email,
    parse_allowed_emails,
)


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


def test_parse_allowed_emails_handles_commas_newlines_and_case():
    parsed = parse_allowed_emails(" Alice@Example.com,\nbob@example.com ,, \n")
    assert parsed == frozenset({"alice@example.com", "bob@example.com"})


@pytest.mark.parametrize("raw", [None, "", " , \n "])
def test_parse_allowed_emails_empty(raw):
    assert parse_allowed_emails(raw) == frozenset()


@pytest.mark.parametrize("value", [None, "", "   "])
def test_normalize_email_blank_is_none(value):
    assert normalize_email(value) is None


# ---------------------------------------------------------------------------
# Gate
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_resolve_returns_allow_listed_user(gate, alice):
    assert await gate.resolve_authorized_user() == alice.id
    assert await gate.require_authorized_user() == alice.id


@pytest.mark.asyncio
async def test_not_signed_in(gate):
    assert await gate.resolve_authorized_user() is None
    with pytest.raises(UnauthenticatedError) as exc_info:
        await gate.require_authorized_user()
    assert exc_info.value.code == "unauthenticated"


@pytest.mark.asyncio
async def test_signed_in_but_not_allowed(gate, identity, mallory):
    identity.user_id = mallory.id

    assert await gate.resolve_authorized_user() is None
    with pytest.raises(UnauthorizedError) as exc_info:
        await gate.require_authorized_user()
    assert exc_info.value.code == "unauthorized"


@pytest.mark.asyncio
async def test_session_for_unknown_user_is_unauthorized(gate, identity):
    identity.user_id = "deleted-user"

    with pytest.raises(UnauthorizedError):
        await gate.require_authorized_user()


@pytest.mark.asyncio
async def test_empty_allow_list_is_fatal_for_reads_and_writes(context, identity, alice):
    gate = AuthorizationGate("", identity, context.user_repository)

    with pytest.raises(ConfigurationError):
        await gate.resolve_authorized_user()
    with pytest.raises(ConfigurationError):
        await gate.require_authorized_user()
    with pytest.raises(ConfigurationError):
        gate.ensure_configured()


@pytest.mark.asyncio
async def test_empty_allow_list_without_identity_is_unauthenticated(context, identity):
    gate = AuthorizationGate("", identity, context.user_repository)

    assert await gate.resolve_authorized_user() is None
    with pytest.raises(UnauthenticatedError):
        await gate.require_authorized_user()


@pytest.mark.asyncio
async def test_is_current_user_allowed(gate, identity, alice, mallory):
    assert await gate.is_current_user_allowed() is True
    identity.user_id = mallory.id
    assert await gate.is_current_user_allowed() is False
