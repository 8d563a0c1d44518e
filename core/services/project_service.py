# =============================================================================
# core/services/project_service.py - Project Business Logic
# =============================================================================
# Handles project listing, lookup and mutations.
# Separates HTTP concerns from database/business logic.
# =============================================================================

import logging
from typing import Any

from app.exceptions import ResourceNotFoundError
from core.models.common import ImageUpload, RequestContext, Status
from core.models.pagination import Page
from core.models.project import ProjectForm
from core.services.image_records import delete_with_image, insert_with_image, update_with_image
from core.services.listing import PROJECT_LISTING, TASK_LISTING, fetch_page
from core.services.storage_service import StorageService
from lib.supabase_client import SupabaseClient

logger = logging.getLogger(__name__)

TABLE = "projects"
IMAGE_ENTITY = "project"


class ProjectService:
    """
    Service for project management operations.

    Provides a clean interface between API routes and database.
    """

    @staticmethod
    def list_projects(ctx: RequestContext) -> Page:
        """Filter by name/status, sort and paginate all projects."""
        return fetch_page(PROJECT_LISTING, ctx.query)

    @staticmethod
    def get_project(project_id: int) -> dict[str, Any]:
        """
        Get a project by ID.

        Raises:
            ResourceNotFoundError: If the project doesn't exist
        """
        project = SupabaseClient.fetch_by_id(TABLE, project_id)
        if not project:
            raise ResourceNotFoundError("Project", project_id)
        return project

    @staticmethod
    def show_project(ctx: RequestContext, project_id: int) -> tuple[dict[str, Any], Page]:
        """
        Get a project together with one page of its tasks.

        The tasks page honours the same name/status/sort parameters as
        the task listing.
        """
        project = ProjectService.get_project(project_id)
        tasks = fetch_page(TASK_LISTING, ctx.query, base_filters={"project_id": project_id})
        return project, tasks

    @staticmethod
    def form_options() -> dict[str, Any]:
        """Choices the create/edit form needs."""
        return {
            "statuses": [{"value": s.value, "label": s.label} for s in Status],
        }

    @staticmethod
    def create_project(
        ctx: RequestContext,
        form: ProjectForm,
        image: ImageUpload | None = None,
    ) -> dict[str, Any]:
        """
        Create a project owned by the requesting user.

        Returns:
            Created project row
        """
        data = form.to_row()
        data["created_by"] = ctx.user_id
        data["updated_by"] = ctx.user_id

        project = insert_with_image(TABLE, IMAGE_ENTITY, data, image)
        logger.info(f"Created project: {project['id']} by user: {ctx.user_id}")
        return project

    @staticmethod
    def update_project(
        ctx: RequestContext,
        project_id: int,
        form: ProjectForm,
        image: ImageUpload | None = None,
    ) -> dict[str, Any]:
        """
        Update a project; a new image replaces the old image directory.

        Raises:
            ResourceNotFoundError: If the project doesn't exist
        """
        project = ProjectService.get_project(project_id)

        data = form.to_row()
        data["updated_by"] = ctx.user_id

        updated = update_with_image(TABLE, IMAGE_ENTITY, project, data, image)
        logger.info(f"Updated project: {project_id} by user: {ctx.user_id}")
        return updated

    @staticmethod
    def delete_project(ctx: RequestContext, project_id: int) -> str:
        """
        Delete a project, its tasks, and every image they own.

        Returns:
            Name of the deleted project

        Raises:
            ResourceNotFoundError: If the project doesn't exist
        """
        project = ProjectService.get_project(project_id)
        name = project["name"]

        tasks = SupabaseClient.fetch_where("tasks", "project_id", project_id, columns="id, image_path")
        SupabaseClient.delete_where("tasks", "project_id", project_id)
        for task in tasks:
            if task.get("image_path"):
                StorageService.delete_directory(task["image_path"])

        delete_with_image(TABLE, project)
        logger.info(
            f"Deleted project: {project_id} ({len(tasks)} tasks) by user: {ctx.user_id}"
        )
        return name
