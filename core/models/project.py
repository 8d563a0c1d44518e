# =============================================================================
# core/models/project.py - Project Schemas
# =============================================================================
# These models define the API contract for project operations:
# - ProjectForm: validated fields of the create/edit form
# - ProjectResource: a project as returned to clients
# - ProjectSummary: the short form embedded in task resources
#
# A project owns many tasks and optionally one image.
# =============================================================================

from datetime import date
from typing import Any

from pydantic import BaseModel, Field, field_validator

from .common import Status
from .user import UserSummary

# Columns a project listing may be ordered by
PROJECT_SORT_FIELDS = ("id", "name", "status", "due_date", "created_at", "updated_at")


class ProjectForm(BaseModel):
    """
    Fields accepted when creating or updating a project.

    The image is uploaded separately as a multipart file.

    Example:
        {"name": "Launch", "status": "pending", "due_date": "2025-01-01"}
    """

    name: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Project name"
    )

    description: str | None = Field(
        default=None,
        description="Free-form description"
    )

    due_date: date | None = Field(
        default=None,
        description="Due date (YYYY-MM-DD)"
    )

    status: Status = Field(
        ...,
        description="pending, in_progress or completed"
    )

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("The name field is required.")
        return v.strip()

    def to_row(self) -> dict[str, Any]:
        """Column values ready for insert/update."""
        return self.model_dump(mode="json")


class ProjectSummary(BaseModel):
    """Minimal project reference embedded in other resources."""
    id: int
    name: str


class ProjectResource(BaseModel):
    """
    A project as returned to clients.

    Dates are rendered as YYYY-MM-DD and image_path as a public URL.
    """
    id: int
    name: str
    description: str | None = None
    created_at: str | None = None
    due_date: str | None = None
    status: Status
    image_path: str | None = None
    created_by: UserSummary | None = None
    updated_by: UserSummary | None = None
