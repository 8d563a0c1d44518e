# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - common.py: Status enum, listing parameters, request context, uploads
# - pagination.py: Page of results and its link envelope
# - project.py / task.py / user.py: form and resource schemas per resource
#
# These models define the "contract" between API and clients.
# =============================================================================

from .common import (
    ImageUpload,
    ListQuery,
    RequestContext,
    SortDirection,
    Status,
)
from .pagination import Page, PageLink, page_window
from .project import (
    PROJECT_SORT_FIELDS,
    ProjectForm,
    ProjectResource,
    ProjectSummary,
)
from .task import (
    TASK_SORT_FIELDS,
    TaskForm,
    TaskResource,
)
from .user import (
    USER_SORT_FIELDS,
    UserCreateForm,
    UserResource,
    UserSummary,
    UserUpdateForm,
)

__all__ = [
    # Common
    "ImageUpload",
    "ListQuery",
    "RequestContext",
    "SortDirection",
    "Status",
    # Pagination
    "Page",
    "PageLink",
    "page_window",
    # Project
    "PROJECT_SORT_FIELDS",
    "ProjectForm",
    "ProjectResource",
    "ProjectSummary",
    # Task
    "TASK_SORT_FIELDS",
    "TaskForm",
    "TaskResource",
    # User
    "USER_SORT_FIELDS",
    "UserCreateForm",
    "UserResource",
    "UserSummary",
    "UserUpdateForm",
]
