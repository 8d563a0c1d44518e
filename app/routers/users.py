# =============================================================================
# app/routers/users.py - User CRUD Endpoints
# =============================================================================
# Listing, form data and create/update/delete for users.
# All endpoints require authentication.
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Form, Path, Request

from app.config import settings
from app.dependencies import ContextDep, echoed_params, parse_form
from core.models.user import UserCreateForm, UserUpdateForm
from core.services.flash_service import FlashService
from core.services.resource_service import ResourceService
from core.services.user_service import UserService

router = APIRouter()

UserId = Annotated[int, Path(ge=1, description="User ID")]


@router.get("")
async def list_users(request: Request, ctx: ContextDep):
    """
    List users.

    Filters: `name` and `email` (contains). Sorting: `sort_field`
    (default created_at) and `sort_direction` (default desc). 10 per page.
    """
    page = UserService.list_users(ctx)
    params = echoed_params(request)

    return {
        "users": page.to_envelope(
            ResourceService.users(page.items),
            request.url.path,
            params,
            settings.PAGE_ON_EACH_SIDE,
        ),
        "query_params": params,
        "success": FlashService.pop(ctx.user_id),
    }


@router.get("/create")
async def create_user_form(ctx: ContextDep):
    """Data for an empty user form."""
    return {}


@router.post("", status_code=201)
async def store_user(
    ctx: ContextDep,
    name: Annotated[str | None, Form()] = None,
    email: Annotated[str | None, Form()] = None,
    password: Annotated[str | None, Form()] = None,
    password_confirmation: Annotated[str | None, Form()] = None,
):
    """Create a user. The email counts as verified immediately."""
    form = parse_form(UserCreateForm, {
        "name": name,
        "email": email,
        "password": password,
        "password_confirmation": password_confirmation,
    })

    user = UserService.create_user(ctx, form)
    message = "User was created"
    FlashService.push(ctx.user_id, message)

    return {"message": message, "user": ResourceService.user(user)}


@router.get("/{user_id}/edit")
async def edit_user_form(user_id: UserId, ctx: ContextDep):
    """Data for the edit form of one user."""
    return {"user": ResourceService.user(UserService.get_user(user_id))}


@router.put("/{user_id}")
async def update_user(
    user_id: UserId,
    ctx: ContextDep,
    name: Annotated[str | None, Form()] = None,
    email: Annotated[str | None, Form()] = None,
    password: Annotated[str | None, Form()] = None,
    password_confirmation: Annotated[str | None, Form()] = None,
):
    """
    Update a user.

    Leave `password` empty to keep the current password.
    """
    form = parse_form(UserUpdateForm, {
        "name": name,
        "email": email,
        "password": password,
        "password_confirmation": password_confirmation,
    })

    user = UserService.update_user(ctx, user_id, form)
    message = f'User "{user["name"]}" was updated'
    FlashService.push(ctx.user_id, message)

    return {"message": message, "user": ResourceService.user(user)}


@router.delete("/{user_id}")
async def delete_user(user_id: UserId, ctx: ContextDep):
    """Delete a user."""
    name = UserService.delete_user(ctx, user_id)
    message = f'User "{name}" was deleted'
    FlashService.push(ctx.user_id, message)

    return {"message": message}
