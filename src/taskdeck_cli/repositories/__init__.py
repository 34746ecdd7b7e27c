"""Repository interfaces for the TaskDeck CLI.

This package contains abstract base classes (ABCs) that define the contracts
for data persistence operations. These are the "Ports" in the Hexagonal Architecture.

Implementations (Adapters) are in:
- taskdeck_cli.adapters.sqlite (local storage)
"""

from .repository import (
    AuditLogRepository,
    FilterPresetRepository,
    LookupRepository,
    ProjectRepository,
    StatusUpdateRepository,
    TagRepository,
    TaskRepository,
    UserRepository,
)

__all__ = [
    "TaskRepository",
    "LookupRepository",
    "TagRepository",
    "ProjectRepository",
    "UserRepository",
    "StatusUpdateRepository",
    "FilterPresetRepository",
    "AuditLogRepository",
]
