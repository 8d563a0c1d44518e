# =============================================================================
# app/routers/projects.py - Project CRUD Endpoints
# =============================================================================
# Listing, form data, create/show/update/delete for projects.
# All endpoints require authentication.
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, File, Form, Path, Request, UploadFile

from app.config import settings
from app.dependencies import ContextDep, echoed_params, parse_form, read_image
from core.models.project import ProjectForm
from core.services.flash_service import FlashService
from core.services.project_service import ProjectService
from core.services.resource_service import ResourceService

router = APIRouter()

ProjectId = Annotated[int, Path(ge=1, description="Project ID")]


@router.get("")
async def list_projects(request: Request, ctx: ContextDep):
    """
    List projects.

    Filters: `name` (contains), `status` (exact). Sorting: `sort_field`
    (default created_at) and `sort_direction` (default desc). 10 per page.
    """
    page = ProjectService.list_projects(ctx)
    params = echoed_params(request)

    return {
        "projects": page.to_envelope(
            ResourceService.projects(page.items),
            request.url.path,
            params,
            settings.PAGE_ON_EACH_SIDE,
        ),
        "query_params": params,
        "success": FlashService.pop(ctx.user_id),
    }


@router.get("/create")
async def create_project_form(ctx: ContextDep):
    """Data for an empty project form."""
    return ProjectService.form_options()


@router.post("", status_code=201)
async def store_project(
    ctx: ContextDep,
    name: Annotated[str | None, Form()] = None,
    description: Annotated[str | None, Form()] = None,
    due_date: Annotated[str | None, Form()] = None,
    status: Annotated[str | None, Form()] = None,
    image: Annotated[UploadFile | None, File(description="Optional project image")] = None,
):
    """
    Create a project.

    Accepts multipart form data with an optional `image` file.
    """
    form = parse_form(ProjectForm, {
        "name": name,
        "description": description,
        "due_date": due_date,
        "status": status,
    })
    upload = await read_image(image)

    project = ProjectService.create_project(ctx, form, upload)
    message = "Project was created"
    FlashService.push(ctx.user_id, message)

    return {"message": message, "project": ResourceService.project(project)}


@router.get("/{project_id}")
async def show_project(request: Request, project_id: ProjectId, ctx: ContextDep):
    """
    Get a project with one page of its tasks.

    The task page accepts the same filter/sort/page parameters as /tasks.
    """
    project, tasks = ProjectService.show_project(ctx, project_id)
    params = echoed_params(request)

    return {
        "project": ResourceService.project(project),
        "tasks": tasks.to_envelope(
            ResourceService.tasks(tasks.items),
            request.url.path,
            params,
            settings.PAGE_ON_EACH_SIDE,
        ),
        "query_params": params,
        "success": FlashService.pop(ctx.user_id),
    }


@router.get("/{project_id}/edit")
async def edit_project_form(project_id: ProjectId, ctx: ContextDep):
    """Data for the edit form of one project."""
    project = ProjectService.get_project(project_id)
    return {"project": ResourceService.project(project), **ProjectService.form_options()}


@router.put("/{project_id}")
async def update_project(
    project_id: ProjectId,
    ctx: ContextDep,
    name: Annotated[str | None, Form()] = None,
    description: Annotated[str | None, Form()] = None,
    due_date: Annotated[str | None, Form()] = None,
    status: Annotated[str | None, Form()] = None,
    image: Annotated[UploadFile | None, File(description="Replacement project image")] = None,
):
    """
    Update a project.

    A new `image` replaces the old one; omitting it keeps the current image.
    """
    form = parse_form(ProjectForm, {
        "name": name,
        "description": description,
        "due_date": due_date,
        "status": status,
    })
    upload = await read_image(image)

    project = ProjectService.update_project(ctx, project_id, form, upload)
    message = f'Project "{project["name"]}" was updated'
    FlashService.push(ctx.user_id, message)

    return {"message": message, "project": ResourceService.project(project)}


@router.delete("/{project_id}")
async def delete_project(project_id: ProjectId, ctx: ContextDep):
    """Delete a project together with its tasks and images."""
    name = ProjectService.delete_project(ctx, project_id)
    message = f'Project "{name}" was deleted'
    FlashService.push(ctx.user_id, message)

    return {"message": message}
