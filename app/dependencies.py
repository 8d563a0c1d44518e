# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared request state.
# These are injected into route handlers using Depends():
# - ListQuery from the listing query string
# - RequestContext pairing the authenticated user with that ListQuery
# - Form parsing and image upload validation helpers
# =============================================================================

import logging
from typing import Annotated, Any, TypeVar

from fastapi import Depends, Query, Request, UploadFile
from pydantic import BaseModel, ValidationError

from app.auth import AuthUser, get_current_user
from app.config import settings
from app.exceptions import FileTooLargeError, FormValidationError, InvalidImageError
from core.models.common import ImageUpload, ListQuery, RequestContext
from lib.utils import drop_blank

logger = logging.getLogger(__name__)

FormT = TypeVar("FormT", bound=BaseModel)


def get_list_query(
    name: Annotated[str | None, Query(description="Name contains (case-insensitive)")] = None,
    status: Annotated[str | None, Query(description="Exact status: pending, in_progress, completed")] = None,
    email: Annotated[str | None, Query(description="Email contains (users only)")] = None,
    sort_field: Annotated[str | None, Query(description="Column to sort by (default created_at)")] = None,
    sort_direction: Annotated[str | None, Query(description="asc or desc (default desc)")] = None,
    page: Annotated[int, Query(ge=1, description="Page number")] = 1,
) -> ListQuery:
    """Collect listing parameters; blank values count as absent."""
    return ListQuery(
        name=name,
        status=status,
        email=email,
        sort_field=sort_field,
        sort_direction=sort_direction,
        page=page,
    )


def get_request_context(
    user: AuthUser = Depends(get_current_user),
    query: ListQuery = Depends(get_list_query),
) -> RequestContext:
    """Bundle the caller and their listing parameters for the service layer."""
    return RequestContext(user_id=user.id, query=query)


# Type alias for dependency injection
ContextDep = Annotated[RequestContext, Depends(get_request_context)]


def echoed_params(request: Request, only: tuple[str, ...] | None = None) -> dict[str, str] | None:
    """
    The query parameters to hand back to the client, or None when empty.

    Clients use them to keep filter inputs and sort headers in sync.
    """
    params = dict(request.query_params)
    if only is not None:
        params = {key: value for key, value in params.items() if key in only}
    return params or None


def parse_form(model: type[FormT], values: dict[str, Any]) -> FormT:
    """
    Validate submitted form values against a pydantic model.

    Blank inputs are treated as not submitted, so optional fields become
    None and required ones report "Field required".

    Raises:
        FormValidationError: With per-field messages
    """
    try:
        return model(**drop_blank(values))
    except ValidationError as e:
        raise FormValidationError.from_pydantic(e)


async def read_image(upload: UploadFile | None) -> ImageUpload | None:
    """
    Validate and read an optional image upload.

    An empty file input (no filename) counts as no upload.

    Raises:
        InvalidImageError: Not an image, or extension not allowed
        FileTooLargeError: Over MAX_UPLOAD_SIZE_MB
    """
    if upload is None or not upload.filename:
        return None

    filename = upload.filename
    content_type = upload.content_type or ""
    extension = "." + filename.rsplit(".", 1)[-1].lower() if "." in filename else ""

    if not content_type.startswith("image/") or extension not in settings.allowed_image_extensions_list:
        raise InvalidImageError(filename, settings.allowed_image_extensions_list)

    content = await upload.read()
    if len(content) > settings.max_upload_size_bytes:
        raise FileTooLargeError(len(content) / (1024 * 1024), settings.MAX_UPLOAD_SIZE_MB)

    logger.debug(f"Received image upload: {filename} ({len(content)} bytes)")
    return ImageUpload(filename=filename, content_type=content_type, content=content)
