# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .flash_service import FlashService
from .project_service import ProjectService
from .resource_service import ResourceService
from .storage_service import StorageService
from .task_service import TaskService
from .user_service import UserService

__all__ = [
    "FlashService",
    "ProjectService",
    "ResourceService",
    "StorageService",
    "TaskService",
    "UserService",
]
