"""Audit log models."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel

from .core import User


class AuditAction(str, Enum):
    """Closed set of auditable actions.

    Extending auditing means adding a member here, not reusing one loosely.
    """

    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    ARCHIVE = "archive"
    UNARCHIVE = "unarchive"
    REORDER = "reorder"
    SIGNUP = "signup"
    ADD_UPDATE = "add_update"
    REMOVE_UPDATE = "remove_update"


class EntityType(str, Enum):
    TASK = "task"
    PROJECT = "project"
    TASK_STATE = "task_state"
    PRIORITY = "priority"
    TAG = "tag"
    USER = "user"
    FILTER_PRESET = "filter_preset"


class FieldChange(BaseModel):
    old: Any = None
    new: Any = None


class AuditEntry(BaseModel):
    """One immutable record of a state-changing action.

    Attributes:
        id: Unique identifier
        user_id: Acting user
        action: What happened
        entity_type: Kind of entity affected
        entity_id: Identifier of the entity affected
        changes: Field-level before/after values (updates and reorders only)
        metadata: Display-only extras such as the entity name or comment body
        timestamp: When the entry was written
    """

    id: str
    user_id: str
    action: AuditAction
    entity_type: EntityType
    entity_id: str
    changes: dict[str, FieldChange] | None = None
    metadata: dict[str, Any] | None = None
    timestamp: int


class AuditEntryDetail(AuditEntry):
    user: User | None = None
