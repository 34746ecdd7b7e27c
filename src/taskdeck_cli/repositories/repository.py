"""Persistence ports.

One abstract repository per entity. Adapters (currently only SQLite)
implement them; services depend on nothing else. Repositories do no
authorization checks and write no audit entries.

Timestamps for writes are passed in by the caller so a whole operation
shares a single clock reading.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from taskdeck_cli.models import (
    AuditEntry,
    FilterPreset,
    LookupCreate,
    OrderedEntry,
    Project,
    ProjectCreate,
    StatusUpdate,
    Tag,
    TagCreate,
    Task,
    TaskCreate,
    TaskFilters,
    User,
)


class TaskRepository(ABC):
    """Abstract base class for task persistence operations."""

    @abstractmethod
    async def query(self, filters: TaskFilters) -> tuple[list[Task], int]:
        """Run the filtered task query.

        Args:
            filters: TaskFilters object specifying filter criteria

        Returns:
            Tuple of (tasks ordered newest first and capped at
            ``filters.limit``, number of matching tasks before the cap)
        """
        raise NotImplementedError("TaskRepository.query() must be implemented by adapter")

    @abstractmethod
    async def get(self, task_id: str) -> Task:
        """Get a specific task by ID.

        Raises:
            NotFoundError: If task does not exist
        """
        raise NotImplementedError("TaskRepository.get() must be implemented by adapter")

    @abstractmethod
    async def add(self, task_data: TaskCreate, creator_id: str, now: int) -> Task:
        """Create a new, active task."""
        raise NotImplementedError("TaskRepository.add() must be implemented by adapter")

    @abstractmethod
    async def update(self, task_id: str, fields: dict[str, Any], now: int) -> Task:
        """Patch the given fields and set ``updated_at`` to ``now``.

        Raises:
            NotFoundError: If task does not exist
        """
        raise NotImplementedError("TaskRepository.update() must be implemented by adapter")

    @abstractmethod
    async def set_archived(self, task_id: str, archived: bool, now: int) -> Task:
        """Move a task into or out of the archived partition.

        Raises:
            NotFoundError: If task does not exist
        """
        raise NotImplementedError(
            "TaskRepository.set_archived() must be implemented by adapter"
        )

    @abstractmethod
    async def delete(self, task_id: str) -> None:
        """Delete a task. Deleting a missing task is a no-op."""
        raise NotImplementedError("TaskRepository.delete() must be implemented by adapter")

    @abstractmethod
    async def count_referencing(self, column: str, entity_id: str) -> int:
        """Count tasks whose ``state_id`` or ``priority_id`` equals ``entity_id``."""
        raise NotImplementedError(
            "TaskRepository.count_referencing() must be implemented by adapter"
        )

    @abstractmethod
    async def strip_tag(self, tag_id: str, now: int) -> int:
        """Remove a tag from every task carrying it.

        Returns:
            Number of tasks that were modified
        """
        raise NotImplementedError("TaskRepository.strip_tag() must be implemented by adapter")

    @abstractmethod
    async def list_stale(self, state_ids: list[str], cutoff: int) -> list[Task]:
        """List active tasks in one of ``state_ids`` last updated at or before ``cutoff``."""
        raise NotImplementedError("TaskRepository.list_stale() must be implemented by adapter")


class LookupRepository(ABC):
    """Persistence for an ordered lookup collection (task states or priorities)."""

    @abstractmethod
    async def list_all(self) -> list[OrderedEntry]:
        """List every entry by ascending order."""
        raise NotImplementedError("LookupRepository.list_all() must be implemented by adapter")

    @abstractmethod
    async def get(self, entry_id: str) -> OrderedEntry:
        """Get one entry. Raises NotFoundError if missing."""
        raise NotImplementedError("LookupRepository.get() must be implemented by adapter")

    @abstractmethod
    async def add(self, data: LookupCreate, order: int, now: int) -> OrderedEntry:
        raise NotImplementedError("LookupRepository.add() must be implemented by adapter")

    @abstractmethod
    async def update(self, entry_id: str, fields: dict[str, Any], now: int) -> OrderedEntry:
        raise NotImplementedError("LookupRepository.update() must be implemented by adapter")

    @abstractmethod
    async def set_orders(self, orders: dict[str, int], now: int) -> None:
        """Write new ``order`` values for the given ids."""
        raise NotImplementedError(
            "LookupRepository.set_orders() must be implemented by adapter"
        )

    @abstractmethod
    async def delete(self, entry_id: str) -> None:
        raise NotImplementedError("LookupRepository.delete() must be implemented by adapter")


class TagRepository(ABC):
    """Abstract base class for tag persistence operations."""

    @abstractmethod
    async def list_all(self) -> list[Tag]:
        raise NotImplementedError("TagRepository.list_all() must be implemented by adapter")

    @abstractmethod
    async def get(self, tag_id: str) -> Tag:
        raise NotImplementedError("TagRepository.get() must be implemented by adapter")

    @abstractmethod
    async def add(self, data: TagCreate, now: int) -> Tag:
        raise NotImplementedError("TagRepository.add() must be implemented by adapter")

    @abstractmethod
    async def update(self, tag_id: str, fields: dict[str, Any], now: int) -> Tag:
        raise NotImplementedError("TagRepository.update() must be implemented by adapter")

    @abstractmethod
    async def delete(self, tag_id: str) -> None:
        raise NotImplementedError("TagRepository.delete() must be implemented by adapter")


class ProjectRepository(ABC):
    """Abstract base class for project persistence operations.

    Projects are never deleted; there is intentionally no ``delete`` here.
    """

    @abstractmethod
    async def list_all(self, include_archived: bool = False) -> list[Project]:
        raise NotImplementedError("ProjectRepository.list_all() must be implemented by adapter")

    @abstractmethod
    async def get(self, project_id: str) -> Project:
        raise NotImplementedError("ProjectRepository.get() must be implemented by adapter")

    @abstractmethod
    async def add(self, data: ProjectCreate, created_by: str, now: int) -> Project:
        raise NotImplementedError("ProjectRepository.add() must be implemented by adapter")

    @abstractmethod
    async def update(self, project_id: str, fields: dict[str, Any], now: int) -> Project:
        raise NotImplementedError("ProjectRepository.update() must be implemented by adapter")


class UserRepository(ABC):
    """Abstract base class for user persistence operations."""

    @abstractmethod
    async def list_all(self) -> list[User]:
        raise NotImplementedError("UserRepository.list_all() must be implemented by adapter")

    @abstractmethod
    async def get(self, user_id: str) -> User | None:
        """Get a user by ID, or ``None`` if the user does not exist."""
        raise NotImplementedError("UserRepository.get() must be implemented by adapter")

    @abstractmethod
    async def get_by_email(self, email: str) -> User | None:
        raise NotImplementedError(
            "UserRepository.get_by_email() must be implemented by adapter"
        )

    @abstractmethod
    async def add(self, email: str, name: str | None, now: int) -> User:
        raise NotImplementedError("UserRepository.add() must be implemented by adapter")


class StatusUpdateRepository(ABC):
    """Abstract base class for task comment persistence."""

    @abstractmethod
    async def list_for_task(self, task_id: str) -> list[StatusUpdate]:
        """List a task's updates oldest first."""
        raise NotImplementedError(
            "StatusUpdateRepository.list_for_task() must be implemented by adapter"
        )

    @abstractmethod
    async def get(self, update_id: str) -> StatusUpdate:
        raise NotImplementedError("StatusUpdateRepository.get() must be implemented by adapter")

    @abstractmethod
    async def add(self, task_id: str, user_id: str, body: str, now: int) -> StatusUpdate:
        raise NotImplementedError("StatusUpdateRepository.add() must be implemented by adapter")

    @abstractmethod
    async def delete(self, update_id: str) -> None:
        raise NotImplementedError(
            "StatusUpdateRepository.delete() must be implemented by adapter"
        )

    @abstractmethod
    async def delete_for_task(self, task_id: str) -> int:
        """Delete every update attached to a task and return how many were removed."""
        raise NotImplementedError(
            "StatusUpdateRepository.delete_for_task() must be implemented by adapter"
        )


class FilterPresetRepository(ABC):
    """Abstract base class for saved filter presets."""

    @abstractmethod
    async def list_all(self) -> list[FilterPreset]:
        raise NotImplementedError(
            "FilterPresetRepository.list_all() must be implemented by adapter"
        )

    @abstractmethod
    async def get(self, preset_id: str) -> FilterPreset:
        raise NotImplementedError("FilterPresetRepository.get() must be implemented by adapter")

    @abstractmethod
    async def get_by_name(self, name: str) -> FilterPreset | None:
        raise NotImplementedError(
            "FilterPresetRepository.get_by_name() must be implemented by adapter"
        )

    @abstractmethod
    async def add(
        self, name: str, filters: str, sort_keys: str, created_by: str, now: int
    ) -> FilterPreset:
        raise NotImplementedError("FilterPresetRepository.add() must be implemented by adapter")

    @abstractmethod
    async def update(self, preset_id: str, fields: dict[str, Any], now: int) -> FilterPreset:
        raise NotImplementedError(
            "FilterPresetRepository.update() must be implemented by adapter"
        )

    @abstractmethod
    async def delete(self, preset_id: str) -> None:
        raise NotImplementedError(
            "FilterPresetRepository.delete() must be implemented by adapter"
        )


class AuditLogRepository(ABC):
    """Append-only store of audit entries."""

    @abstractmethod
    async def append(self, entry: AuditEntry) -> None:
        raise NotImplementedError("AuditLogRepository.append() must be implemented by adapter")

    @abstractmethod
    async def list_all(self, entity_type: str | None = None) -> list[AuditEntry]:
        """List entries newest first, optionally for one entity type."""
        raise NotImplementedError(
            "AuditLogRepository.list_all() must be implemented by adapter"
        )

    @abstractmethod
    async def list_for_entity(self, entity_type: str, entity_id: str) -> list[AuditEntry]:
        """List entries for a single entity, newest first."""
        raise NotImplementedError(
            "AuditLogRepository.list_for_entity() must be implemented by adapter"
        )
