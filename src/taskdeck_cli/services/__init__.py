"""Services module for TaskDeck CLI - Business logic layer."""

from .archive_service import AutoArchiveService
from .audit_service import AuditService
from .auth_service import AuthService
from .authz_service import AuthorizationGate
from .lookup_service import LookupService
from .preset_service import PresetService
from .project_service import ProjectService
from .seed_service import SeedService
from .tag_service import TagService
from .task_service import TaskService
from .update_service import UpdateService
from .user_service import UserService

__all__ = [
    "AuditService",
    "AuthService",
    "AuthorizationGate",
    "AutoArchiveService",
    "LookupService",
    "PresetService",
    "ProjectService",
    "SeedService",
    "TagService",
    "TaskService",
    "UpdateService",
    "UserService",
]
