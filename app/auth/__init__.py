# =============================================================================
# app/auth/__init__.py - Authentication Module
# =============================================================================
# Provides JWT-based authentication for every resource endpoint.
#
# Usage:
#   from app.auth import get_current_user, AuthUser
#
#   @router.get("/protected")
#   async def protected(user: AuthUser = Depends(get_current_user)):
#       return {"user_id": user.id}
# =============================================================================

from app.auth.dependencies import create_access_token, get_current_user
from app.auth.models import AuthUser, LoginRequest, TokenResponse

__all__ = [
    "create_access_token",
    "get_current_user",
    "AuthUser",
    "LoginRequest",
    "TokenResponse",
]
