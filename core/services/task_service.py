# =============================================================================
# core/services/task_service.py - Task Business Logic
# =============================================================================
# Handles task listing (all tasks and "my tasks"), lookup and mutations.
# =============================================================================

import logging
from typing import Any

from app.exceptions import FormValidationError, ResourceNotFoundError
from core.models.common import ImageUpload, RequestContext, Status
from core.models.pagination import Page
from core.models.task import TaskForm
from core.services.image_records import delete_with_image, insert_with_image, update_with_image
from core.services.listing import TASK_LISTING, fetch_page
from lib.supabase_client import SupabaseClient

logger = logging.getLogger(__name__)

TABLE = "tasks"
IMAGE_ENTITY = "task"


class TaskService:
    """Service for task management operations."""

    @staticmethod
    def list_tasks(ctx: RequestContext) -> Page:
        """Filter by name/status, sort and paginate all tasks."""
        return fetch_page(TASK_LISTING, ctx.query)

    @staticmethod
    def list_my_tasks(ctx: RequestContext) -> Page:
        """
        List the tasks assigned to the requesting user.

        The name and status filters apply independently, exactly as in
        list_tasks(); the assignee filter is always applied.
        """
        return fetch_page(
            TASK_LISTING,
            ctx.query,
            base_filters={"assigned_user_id": ctx.user_id},
        )

    @staticmethod
    def get_task(task_id: int) -> dict[str, Any]:
        """
        Get a task by ID.

        Raises:
            ResourceNotFoundError: If the task doesn't exist
        """
        task = SupabaseClient.fetch_by_id(TABLE, task_id)
        if not task:
            raise ResourceNotFoundError("Task", task_id)
        return task

    @staticmethod
    def form_options() -> dict[str, Any]:
        """
        Choices the create/edit form needs.

        Projects and users are ordered by name, ascending.
        """
        return {
            "statuses": [{"value": s.value, "label": s.label} for s in Status],
            "projects": SupabaseClient.fetch_all_ordered("projects", columns="id, name"),
            "users": SupabaseClient.fetch_all_ordered("users", columns="id, name, email"),
        }

    @staticmethod
    def _check_references(form: TaskForm) -> None:
        errors: dict[str, list[str]] = {}
        if not SupabaseClient.fetch_by_id("projects", form.project_id, columns="id"):
            errors["project_id"] = ["The selected project id is invalid."]
        if form.assigned_user_id is not None and not SupabaseClient.fetch_by_id(
            "users", form.assigned_user_id, columns="id"
        ):
            errors["assigned_user_id"] = ["The selected assigned user id is invalid."]
        if errors:
            raise FormValidationError(errors)

    @staticmethod
    def create_task(
        ctx: RequestContext,
        form: TaskForm,
        image: ImageUpload | None = None,
    ) -> dict[str, Any]:
        """
        Create a task owned by the requesting user.

        Raises:
            FormValidationError: If the project or assignee doesn't exist
        """
        TaskService._check_references(form)

        data = form.to_row()
        data["created_by"] = ctx.user_id
        data["updated_by"] = ctx.user_id

        task = insert_with_image(TABLE, IMAGE_ENTITY, data, image)
        logger.info(f"Created task: {task['id']} in project: {task['project_id']} by user: {ctx.user_id}")
        return task

    @staticmethod
    def update_task(
        ctx: RequestContext,
        task_id: int,
        form: TaskForm,
        image: ImageUpload | None = None,
    ) -> dict[str, Any]:
        """
        Update a task; a new image replaces the old image directory.

        Raises:
            ResourceNotFoundError: If the task doesn't exist
            FormValidationError: If the project or assignee doesn't exist
        """
        task = TaskService.get_task(task_id)
        TaskService._check_references(form)

        data = form.to_row()
        data["updated_by"] = ctx.user_id

        updated = update_with_image(TABLE, IMAGE_ENTITY, task, data, image)
        logger.info(f"Updated task: {task_id} by user: {ctx.user_id}")
        return updated

    @staticmethod
    def delete_task(ctx: RequestContext, task_id: int) -> str:
        """
        Delete a task and its image directory.

        Returns:
            Name of the deleted task
        """
        task = TaskService.get_task(task_id)
        name = task["name"]

        delete_with_image(TABLE, task)
        logger.info(f"Deleted task: {task_id} by user: {ctx.user_id}")
        return name
