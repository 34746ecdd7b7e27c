"""SQLite adapter module - Local database storage implementation."""

from taskdeck_cli.adapters.sqlite.audit_repository import SqliteAuditLogRepository
from taskdeck_cli.adapters.sqlite.lookup_repository import (
    SqlitePriorityRepository,
    SqliteTaskStateRepository,
)
from taskdeck_cli.adapters.sqlite.preset_repository import SqliteFilterPresetRepository
from taskdeck_cli.adapters.sqlite.project_repository import SqliteProjectRepository
from taskdeck_cli.adapters.sqlite.tag_repository import SqliteTagRepository
from taskdeck_cli.adapters.sqlite.task_repository import SqliteTaskRepository
from taskdeck_cli.adapters.sqlite.update_repository import SqliteStatusUpdateRepository
from taskdeck_cli.adapters.sqlite.user_repository import SqliteUserRepository

__all__ = [
    "SqliteTaskRepository",
    "SqliteTaskStateRepository",
    "SqlitePriorityRepository",
    "SqliteTagRepository",
    "SqliteProjectRepository",
    "SqliteUserRepository",
    "SqliteStatusUpdateRepository",
    "SqliteFilterPresetRepository",
    "SqliteAuditLogRepository",
]
