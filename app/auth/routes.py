# =============================================================================
# app/auth/routes.py - Authentication Routes
# =============================================================================
# Login and "who am I" endpoints.
# =============================================================================

import logging
from fastapi import APIRouter, Depends

from app.auth.dependencies import create_access_token, get_current_user
from app.auth.models import AuthUser, LoginRequest, TokenResponse
from app.exceptions import InvalidCredentialsError
from core.services.resource_service import ResourceService
from core.services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/login", response_model=TokenResponse)
async def login(request: LoginRequest) -> TokenResponse:
    """
    Exchange email and password for a bearer token.

    Raises:
        401: If the credentials don't match
    """
    user = UserService.authenticate(request.email, request.password)
    if user is None:
        raise InvalidCredentialsError()

    token, expires_in = create_access_token(user)
    logger.info(f"User {user['id']} logged in")
    return TokenResponse(access_token=token, expires_in=expires_in)


@router.get("/me")
async def get_current_user_info(
    user: AuthUser = Depends(get_current_user)
) -> dict:
    """
    Get the current authenticated user's profile.

    Raises:
        401: If not authenticated
        404: If the user was deleted after the token was issued
    """
    return {"user": ResourceService.user(UserService.get_user(user.id))}
