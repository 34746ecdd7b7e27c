"""Storage backends.

A ``StorageStrategy`` knows how to build the full set of repositories for
one backend. ``StorageStrategyContext`` wraps the strategy chosen at startup
and is what the service factories read repositories from.
"""

from __future__ import annotations

import sqlite3
from abc import ABC, abstractmethod
from dataclasses import dataclass

from taskdeck_cli.repositories import (
    AuditLogRepository,
    FilterPresetRepository,
    LookupRepository,
    ProjectRepository,
    StatusUpdateRepository,
    TagRepository,
    TaskRepository,
    UserRepository,
)


@dataclass(frozen=True)
class RepositorySet:
    task_repository: TaskRepository
    state_repository: LookupRepository
    priority_repository: LookupRepository
    tag_repository: TagRepository
    project_repository: ProjectRepository
    user_repository: UserRepository
    update_repository: StatusUpdateRepository
    preset_repository: FilterPresetRepository
    audit_repository: AuditLogRepository


class StorageStrategy(ABC):
    name: str

    @abstractmethod
    def build(self) -> RepositorySet:
        """Create one repository of each kind, all backed by the same store."""


class LocalStorageStrategy(StorageStrategy):
    """Everything in one SQLite database.

    ``connection`` takes precedence over ``db_path``; tests pass an
    in-memory connection here.
    """

    name = "local"

    def __init__(self, db_path: str | None = None, connection: sqlite3.Connection | None = None):
        self.db_path = db_path
        self.connection = connection

    def build(self) -> RepositorySet:
        # adapters import the repository ABCs, which import models
        from taskdeck_cli.adapters.sqlite import (
            SqliteAuditLogRepository,
            SqliteFilterPresetRepository,
            SqlitePriorityRepository,
            SqliteProjectRepository,
            SqliteStatusUpdateRepository,
            SqliteTagRepository,
            SqliteTaskRepository,
            SqliteTaskStateRepository,
            SqliteUserRepository,
        )

        source = {"db_path": self.db_path, "connection": self.connection}
        return RepositorySet(
            task_repository=SqliteTaskRepository(**source),
            state_repository=SqliteTaskStateRepository(**source),
            priority_repository=SqlitePriorityRepository(**source),
            tag_repository=SqliteTagRepository(**source),
            project_repository=SqliteProjectRepository(**source),
            user_repository=SqliteUserRepository(**source),
            update_repository=SqliteStatusUpdateRepository(**source),
            preset_repository=SqliteFilterPresetRepository(**source),
            audit_repository=SqliteAuditLogRepository(**source),
        )


class StorageStrategyContext:
    """Repository access for the whole application.

    The strategy's repositories are built once, on first access.

    Usage:
        context = StorageStrategyContext(LocalStorageStrategy(db_path="tasks.db"))
        tasks, total = await context.task_repository.query(filters)
    """

    def __init__(self, strategy: StorageStrategy):
        self.strategy = strategy
        self._repositories: RepositorySet | None = None

    @property
    def repositories(self) -> RepositorySet:
        if self._repositories is None:
            self._repositories = self.strategy.build()
        return self._repositories

    @property
    def storage_type(self) -> str:
        return self.strategy.name

    @property
    def task_repository(self) -> TaskRepository:
        return self.repositories.task_repository

    @property
    def state_repository(self) -> LookupRepository:
        return self.repositories.state_repository

    @property
    def priority_repository(self) -> LookupRepository:
        return self.repositories.priority_repository

    @property
    def tag_repository(self) -> TagRepository:
        return self.repositories.tag_repository

    @property
    def project_repository(self) -> ProjectRepository:
        return self.repositories.project_repository

    @property
    def user_repository(self) -> UserRepository:
        return self.repositories.user_repository

    @property
    def update_repository(self) -> StatusUpdateRepository:
        return self.repositories.update_repository

    @property
    def preset_repository(self) -> FilterPresetRepository:
        return self.repositories.preset_repository

    @property
    def audit_repository(self) -> AuditLogRepository:
        return self.repositories.audit_repository
