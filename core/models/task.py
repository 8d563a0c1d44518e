# =============================================================================
# core/models/task.py - Task Schemas
# =============================================================================
# These models define the API contract for task operations:
# - TaskForm: validated fields of the create/edit form
# - TaskResource: a task as returned to clients, with its project and assignee
#
# A task belongs to exactly one project and may be assigned to one user.
# =============================================================================

from pydantic import BaseModel, Field

from .common import Status
from .project import ProjectForm, ProjectSummary
from .user import UserSummary

# Columns a task listing may be ordered by
TASK_SORT_FIELDS = (
    "id",
    "name",
    "status",
    "due_date",
    "created_at",
    "updated_at",
    "project_id",
    "assigned_user_id",
)


class TaskForm(ProjectForm):
    """
    Fields accepted when creating or updating a task.

    Existence of project_id and assigned_user_id is checked by TaskService.

    Example:
        {"name": "Write copy", "status": "in_progress", "project_id": 3, "assigned_user_id": 1}
    """

    project_id: int = Field(..., ge=1, description="Owning project")
    assigned_user_id: int | None = Field(default=None, ge=1, description="Assignee, if any")


class TaskResource(BaseModel):
    """A task as returned to clients."""
    id: int
    name: str
    description: str | None = None
    created_at: str | None = None
    due_date: str | None = None
    status: Status
    image_path: str | None = None
    project_id: int
    project: ProjectSummary | None = None
    assigned_user_id: int | None = None
    assigned_user: UserSummary | None = None
    created_by: UserSummary | None = None
    updated_by: UserSummary | None = None
