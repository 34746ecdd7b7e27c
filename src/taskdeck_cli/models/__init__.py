"""TaskDeck domain models.

This package contains Pydantic models for the core entities (tasks, states,
priorities, tags, projects, users, status updates, presets), the task query
filters and the audit log.
"""

from .audit import AuditAction, AuditEntry, AuditEntryDetail, EntityType, FieldChange
from .config_models import AppConfig
from .core import (
    FilterPreset,
    LookupCreate,
    LookupUpdate,
    OrderedEntry,
    Priority,
    Project,
    ProjectCreate,
    ProjectUpdate,
    StatusUpdate,
    StatusUpdateDetail,
    Tag,
    TagCreate,
    TagUpdate,
    Task,
    TaskCreate,
    TaskDetail,
    TaskPage,
    TaskState,
    TaskUpdate,
    User,
)
from .filters import SORTABLE_COLUMNS, SortKey, TaskFilters

__all__ = [
    # Task models
    "Task",
    "TaskCreate",
    "TaskUpdate",
    "TaskDetail",
    "TaskPage",
    "TaskFilters",
    "SortKey",
    "SORTABLE_COLUMNS",
    # Lookup models
    "OrderedEntry",
    "TaskState",
    "Priority",
    "LookupCreate",
    "LookupUpdate",
    # Tag models
    "Tag",
    "TagCreate",
    "TagUpdate",
    # Project models
    "Project",
    "ProjectCreate",
    "ProjectUpdate",
    # Comments and presets
    "StatusUpdate",
    "StatusUpdateDetail",
    "FilterPreset",
    # Users
    "User",
    # Audit
    "AuditAction",
    "AuditEntry",
    "AuditEntryDetail",
    "EntityType",
    "FieldChange",
    # Config
    "AppConfig",
]
