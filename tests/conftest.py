"""Shared test fixtures and configuration.

Provides infrastructure to isolate tests from real filesystem state: an
in-memory database with the full schema, a storage context over it, and an
authorization gate whose signed-in identity the test controls.
"""

from __future__ import annotations

import sqlite3
from unittest.mock import patch

import pytest
import pytest_asyncio

from taskdeck_cli.adapters.sqlite.connection import configure_connection
from taskdeck_cli.models.storage_strategy import LocalStorageStrategy, StorageStrategyContext
from taskdeck_cli.services.audit_service import AuditService
from taskdeck_cli.services.authz_service import AuthorizationGate

ALLOWED = "alice@example.com, bob@example.com"


class FakeClock:
    """Deterministic epoch-ms clock that ticks 1ms per reading."""

    def __init__(self, start: int = 1_700_000_000_000):
        self.now = start

    def __call__(self) -> int:
        self.now += 1
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


class Identity:
    """Mutable stand-in for the signed-in session."""

    def __init__(self):
        self.user_id: str | None = None

    def __call__(self) -> str | None:
        return self.user_id


# ---------------------------------------------------------------------------
# Logging isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def isolated_log_dir(tmp_path):
    """Keep log files inside tmp_path and rebuild the logger per test."""
    import logging

    import taskdeck_cli.utils.logger as logger_mod

    logger_mod._logger = None
    logging.getLogger("taskdeck_cli").handlers.clear()
    with patch("taskdeck_cli.utils.logger.user_log_dir", return_value=str(tmp_path / "logs")):
        yield
    logger_mod._logger = None
    logging.getLogger("taskdeck_cli").handlers.clear()


# ---------------------------------------------------------------------------
# Storage
# ---------------------------------------------------------------------------


@pytest.fixture()
def connection():
    """Fresh in-memory database with all migrations applied."""
    conn = configure_connection(sqlite3.connect(":memory:", check_same_thread=False))
    yield conn
    conn.close()


@pytest.fixture()
def context(connection):
    return StorageStrategyContext(LocalStorageStrategy(connection=connection))


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def identity():
    return Identity()


@pytest.fixture()
def gate(context, identity):
    return AuthorizationGate(ALLOWED, identity, context.user_repository)


@pytest.fixture()
def audit(context, gate, clock):
    return AuditService(context.audit_repository, context.user_repository, gate, clock)


@pytest_asyncio.fixture
async def alice(context, identity, clock):
    """Allow-listed user, signed in."""
    user = await context.user_repository.add("alice@example.com", "Alice", now=clock())
    identity.user_id = user.id
    return user


@pytest_asyncio.fixture
async def mallory(context, clock):
    """Registered user who is not on the allow-list."""
    return await context.user_repository.add("mallory@example.com", "Mallory", now=clock())


# ---------------------------------------------------------------------------
# Config isolation
# ---------------------------------------------------------------------------


@pytest.fixture()
def tmp_config(tmp_path, monkeypatch):
    """Provide a real ConfigService backed by a temporary directory.

    Patches platform dirs so config/data files land in *tmp_path* only.
    Also clears the lru_cache so each test gets a fresh service instance.
    """
    from taskdeck_cli.services.config_service import (
        ALLOWED_EMAILS_ENV,
        DB_PATH_ENV,
        ConfigService,
        get_config_service,
    )

    monkeypatch.delenv(ALLOWED_EMAILS_ENV, raising=False)
    monkeypatch.delenv(DB_PATH_ENV, raising=False)
    tmpdir = str(tmp_path)
    get_config_service.cache_clear()
    with patch("taskdeck_cli.services.config_service.user_config_dir", return_value=tmpdir):
        with patch("taskdeck_cli.services.config_service.user_data_dir", return_value=tmpdir):
            svc = ConfigService()
            svc.load_config()
            yield svc
    get_config_service.cache_clear()
