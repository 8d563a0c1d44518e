# =============================================================================
# app/routers/tasks.py - Task CRUD Endpoints
# =============================================================================
# Listing (all tasks and the caller's assigned tasks), form data and
# create/show/update/delete for tasks.
# All endpoints require authentication.
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, File, Form, Path, Request, UploadFile

from app.config import settings
from app.dependencies import ContextDep, echoed_params, parse_form, read_image
from core.models.task import TaskForm
from core.services.flash_service import FlashService
from core.services.resource_service import ResourceService
from core.services.task_service import TaskService

router = APIRouter()

TaskId = Annotated[int, Path(ge=1, description="Task ID")]

MY_TASKS_PARAMS = ("name", "status", "sort_field", "sort_direction")


def _task_form(
    name: str | None,
    description: str | None,
    due_date: str | None,
    status: str | None,
    project_id: str | None,
    assigned_user_id: str | None,
) -> TaskForm:
    return parse_form(TaskForm, {
        "name": name,
        "description": description,
        "due_date": due_date,
        "status": status,
        "project_id": project_id,
        "assigned_user_id": assigned_user_id,
    })


@router.get("")
async def list_tasks(request: Request, ctx: ContextDep):
    """
    List tasks.

    Filters: `name` (contains), `status` (exact). Sorting: `sort_field`
    (default created_at) and `sort_direction` (default desc). 10 per page.
    """
    page = TaskService.list_tasks(ctx)
    params = echoed_params(request)

    return {
        "tasks": page.to_envelope(
            ResourceService.tasks(page.items),
            request.url.path,
            params,
            settings.PAGE_ON_EACH_SIDE,
        ),
        "query_params": params,
        "success": FlashService.pop(ctx.user_id),
    }


@router.get("/my-tasks")
async def list_my_tasks(request: Request, ctx: ContextDep):
    """
    List tasks assigned to the authenticated user.

    Accepts the same filters and sorting as GET /tasks.
    """
    page = TaskService.list_my_tasks(ctx)
    params = echoed_params(request, only=MY_TASKS_PARAMS)

    return {
        "tasks": page.to_envelope(
            ResourceService.tasks(page.items),
            request.url.path,
            params,
            settings.PAGE_ON_EACH_SIDE,
        ),
        "query_params": params or {},
        "success": FlashService.pop(ctx.user_id),
    }


@router.get("/create")
async def create_task_form(ctx: ContextDep):
    """Data for an empty task form: statuses, projects and users by name."""
    return TaskService.form_options()


@router.post("", status_code=201)
async def store_task(
    ctx: ContextDep,
    name: Annotated[str | None, Form()] = None,
    description: Annotated[str | None, Form()] = None,
    due_date: Annotated[str | None, Form()] = None,
    status: Annotated[str | None, Form()] = None,
    project_id: Annotated[str | None, Form()] = None,
    assigned_user_id: Annotated[str | None, Form()] = None,
    image: Annotated[UploadFile | None, File(description="Optional task image")] = None,
):
    """
    Create a task.

    Accepts multipart form data with an optional `image` file.
    """
    form = _task_form(name, description, due_date, status, project_id, assigned_user_id)
    upload = await read_image(image)

    task = TaskService.create_task(ctx, form, upload)
    message = "Task was created"
    FlashService.push(ctx.user_id, message)

    return {"message": message, "task": ResourceService.task(task)}


@router.get("/{task_id}")
async def show_task(task_id: TaskId, ctx: ContextDep):
    """Get one task with its project and assignee."""
    return {"task": ResourceService.task(TaskService.get_task(task_id))}


@router.get("/{task_id}/edit")
async def edit_task_form(task_id: TaskId, ctx: ContextDep):
    """Data for the edit form of one task."""
    task = TaskService.get_task(task_id)
    return {"task": ResourceService.task(task), **TaskService.form_options()}


@router.put("/{task_id}")
async def update_task(
    task_id: TaskId,
    ctx: ContextDep,
    name: Annotated[str | None, Form()] = None,
    description: Annotated[str | None, Form()] = None,
    due_date: Annotated[str | None, Form()] = None,
    status: Annotated[str | None, Form()] = None,
    project_id: Annotated[str | None, Form()] = None,
    assigned_user_id: Annotated[str | None, Form()] = None,
    image: Annotated[UploadFile | None, File(description="Replacement task image")] = None,
):
    """
    Update a task.

    A new `image` replaces the old one; omitting it keeps the current image.
    """
    form = _task_form(name, description, due_date, status, project_id, assigned_user_id)
    upload = await read_image(image)

    task = TaskService.update_task(ctx, task_id, form, upload)
    message = f'Task "{task["name"]}" was updated'
    FlashService.push(ctx.user_id, message)

    return {"message": message, "task": ResourceService.task(task)}


@router.delete("/{task_id}")
async def delete_task(task_id: TaskId, ctx: ContextDep):
    """Delete a task and its image."""
    name = TaskService.delete_task(ctx, task_id)
    message = f'Task "{name}" was deleted'
    FlashService.push(ctx.user_id, message)

    return {"message": message}
