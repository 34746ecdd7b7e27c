"""Core domain models.

All identifiers are store-assigned UUID strings and all timestamps are
integer epoch milliseconds.
"""

from __future__ import annotations

from pydantic import BaseModel, EmailStr, Field, field_validator, model_validator

HEX_COLOR_PATTERN = r"^#(?:[0-9a-fA-F]{3}){1,2}$"


def _dedupe(ids: list[str]) -> list[str]:
    """Drop repeated ids while keeping first-seen order."""
    seen: set[str] = set()
    result = []
    for item in ids:
        if item not in seen:
            seen.add(item)
            result.append(item)
    return result


def _require_text(value: str | None, field: str) -> str | None:
    """Strip surrounding whitespace; blank text is rejected."""
    if value is None:
        return None
    stripped = value.strip()
    if not stripped:
        raise ValueError(f"{field} must not be empty")
    return stripped


def _require_title(value: str | None) -> str | None:
    return _require_text(value, "title")


def _require_name(value: str | None) -> str | None:
    return _require_text(value, "name")


def _reject_cleared(model: BaseModel, fields: tuple[str, ...]) -> None:
    """Explicitly passed None is only allowed for nullable columns."""
    for name in fields:
        if name in model.model_fields_set and getattr(model, name) is None:
            raise ValueError(f"{name} cannot be cleared")


class User(BaseModel):
    """User model.

    Users come from the external identity provider; this application only
    registers them on first sign-in and reads them afterwards.
    """

    id: str
    email: EmailStr
    name: str | None = None
    created_at: int

    @property
    def display_name(self) -> str:
        return self.name or self.email


class OrderedEntry(BaseModel):
    """Shared shape of task states and priorities.

    Attributes:
        id: Unique identifier
        name: Display name (e.g. "In Progress", "Urgent")
        color: Optional hex colour for display
        order: Dense zero-based position used for manual sorting
        created_at: Creation timestamp
        updated_at: Last update timestamp
    """

    id: str
    name: str
    color: str | None = None
    order: int = Field(ge=0)
    created_at: int
    updated_at: int


class TaskState(OrderedEntry):
    """A workflow stage such as "To Do" or "Done"."""


class Priority(OrderedEntry):
    """An urgency level such as "Urgent" or "Low"."""


class LookupCreate(BaseModel):
    """Model for creating a task state or priority."""

    name: str
    color: str | None = Field(default=None, pattern=HEX_COLOR_PATTERN)

    normalize_name = field_validator("name")(_require_name)


class LookupUpdate(BaseModel):
    """Model for patching a task state or priority.

    Only fields that were explicitly set are applied.
    """

    name: str | None = None
    color: str | None = Field(default=None, pattern=HEX_COLOR_PATTERN)

    normalize_name = field_validator("name")(_require_name)

    @model_validator(mode="after")
    def check_cleared(self) -> LookupUpdate:
        _reject_cleared(self, ("name",))
        return self


class Tag(BaseModel):
    """Tag model. Tags are many-to-many with tasks."""

    id: str
    name: str
    color: str
    created_at: int
    updated_at: int


class TagCreate(BaseModel):
    name: str
    color: str = Field(pattern=HEX_COLOR_PATTERN)

    normalize_name = field_validator("name")(_require_name)


class TagUpdate(BaseModel):
    name: str | None = None
    color: str | None = Field(default=None, pattern=HEX_COLOR_PATTERN)

    normalize_name = field_validator("name")(_require_name)

    @model_validator(mode="after")
    def check_cleared(self) -> TagUpdate:
        _reject_cleared(self, ("name", "color"))
        return self


class Project(BaseModel):
    """Project model. Projects are never deleted, only archived.

    Attributes:
        id: Unique identifier
        name: Project name
        description: Optional longer description
        archived: Whether the project is archived
        created_by: User who created the project
        created_at: Creation timestamp
        updated_at: Last update timestamp
    """

    id: str
    name: str
    description: str | None = None
    archived: bool = False
    created_by: str
    created_at: int
    updated_at: int


class ProjectCreate(BaseModel):
    name: str
    description: str | None = None

    normalize_name = field_validator("name")(_require_name)


class ProjectUpdate(BaseModel):
    """Patch for a project; ``description`` may be cleared with None."""

    name: str | None = None
    description: str | None = None

    normalize_name = field_validator("name")(_require_name)

    @model_validator(mode="after")
    def check_cleared(self) -> ProjectUpdate:
        _reject_cleared(self, ("name",))
        return self


class Task(BaseModel):
    """Task model representing a complete task entity.

    Attributes:
        id: Unique identifier for the task
        title: Short task title (never empty)
        description: Optional detailed description
        state_id: Reference to the task's TaskState
        priority_id: Reference to the task's Priority
        project_id: Optional reference to the parent project
        assignees: User ids, in the order they were assigned
        tag_ids: Tag ids, in the order they were added
        creator_id: User who created the task (immutable)
        archived: Whether the task sits in the archived partition
        archived_at: When the task was archived (set iff archived)
        created_at: Creation timestamp
        updated_at: Last update timestamp
    """

    id: str
    title: str
    description: str | None = None
    state_id: str
    priority_id: str
    project_id: str | None = None
    assignees: list[str] = Field(default_factory=list)
    tag_ids: list[str] = Field(default_factory=list)
    creator_id: str
    archived: bool = False
    archived_at: int | None = None
    created_at: int
    updated_at: int

    @model_validator(mode="after")
    def check_archived_at(self) -> Task:
        if self.archived != (self.archived_at is not None):
            raise ValueError("archived_at must be set if and only if archived is true")
        return self


class TaskCreate(BaseModel):
    """Model for creating a new task."""

    title: str
    description: str | None = None
    state_id: str
    priority_id: str
    project_id: str | None = None
    assignees: list[str] = Field(default_factory=list)
    tag_ids: list[str] = Field(default_factory=list)

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        return _require_title(v)

    @field_validator("assignees", "tag_ids")
    @classmethod
    def validate_ids(cls, v: list[str]) -> list[str]:
        return _dedupe(v)


class TaskUpdate(BaseModel):
    """Model for patching an existing task.

    Only fields that were explicitly set are applied (``exclude_unset``).
    ``description`` and ``project_id`` may be set to ``None`` to clear them;
    the required references cannot be cleared.
    """

    title: str | None = None
    description: str | None = None
    state_id: str | None = None
    priority_id: str | None = None
    project_id: str | None = None
    assignees: list[str] | None = None
    tag_ids: list[str] | None = None

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str | None) -> str | None:
        return _require_title(v)

    @field_validator("assignees", "tag_ids")
    @classmethod
    def validate_ids(cls, v: list[str] | None) -> list[str] | None:
        return _dedupe(v) if v is not None else None

    @model_validator(mode="after")
    def check_required_refs(self) -> TaskUpdate:
        _reject_cleared(self, ("title", "state_id", "priority_id", "assignees", "tag_ids"))
        return self

    def supplied_fields(self) -> dict:
        """Return only the fields the caller actually supplied."""
        return self.model_dump(exclude_unset=True)


class TaskDetail(Task):
    """A task with its related entities embedded.

    Missing references resolve to ``None`` (state, priority, project) or are
    dropped (assignee_users, tag_list).
    """

    state: TaskState | None = None
    priority: Priority | None = None
    project: Project | None = None
    assignee_users: list[User] = Field(default_factory=list)
    tag_list: list[Tag] = Field(default_factory=list)


class TaskPage(BaseModel):
    """One page of the task query plus the size of the full filtered set."""

    tasks: list[TaskDetail] = Field(default_factory=list)
    total_count: int = 0


class StatusUpdate(BaseModel):
    """A timestamped free-text comment attached to one task."""

    id: str
    task_id: str
    user_id: str
    body: str
    created_at: int


class StatusUpdateDetail(StatusUpdate):
    user: User | None = None


class FilterPreset(BaseModel):
    """A named, saved set of filters plus sort keys.

    ``filters`` and ``sort_keys`` hold serialized JSON; use
    ``PresetService.load_preset`` to get models back.
    """

    id: str
    name: str
    filters: str
    sort_keys: str
    created_by: str
    created_at: int
    updated_at: int
