# =============================================================================
# app/auth/dependencies.py - FastAPI Auth Dependencies
# =============================================================================
# Issues and verifies HS256 access tokens signed with SECRET_KEY.
#
# Usage:
#   from app.auth import get_current_user, AuthUser
#
#   @router.get("/protected")
#   async def protected(user: AuthUser = Depends(get_current_user)):
#       return {"user_id": user.id}
# =============================================================================

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import jwt, JWTError, ExpiredSignatureError

from app.config import settings
from app.auth.models import AuthUser
from lib.supabase_client import SupabaseClient

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"

# HTTP Bearer token extractor; a missing header is reported by get_current_user
security = HTTPBearer(auto_error=False)


def create_access_token(user: dict[str, Any], expires_minutes: int | None = None) -> tuple[str, int]:
    """
    Sign an access token for a user row.

    Returns:
        Tuple of (token, lifetime in seconds)
    """
    lifetime = timedelta(minutes=expires_minutes or settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(user["id"]),
        "email": user.get("email"),
        "iat": int(now.timestamp()),
        "exp": int((now + lifetime).timestamp()),
    }
    token = jwt.encode(payload, settings.SECRET_KEY, algorithm=ALGORITHM)
    return token, int(lifetime.total_seconds())


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> AuthUser:
    """
    Extract and validate user from the bearer token.

    This dependency:
    1. Extracts the Bearer token from the Authorization header
    2. Verifies the JWT signature and expiry
    3. Checks the user still exists
    4. Returns an AuthUser with the user's ID and email

    Raises:
        HTTPException: 401 if the token is missing, invalid or expired, or
            its user was deleted
    """
    if credentials is None:
        raise _unauthorized("Not authenticated")

    token = credentials.credentials

    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[ALGORITHM])

    except ExpiredSignatureError:
        logger.warning("Access token has expired")
        raise _unauthorized("Token has expired")

    except JWTError as e:
        logger.warning(f"Token validation failed: {e}")
        raise _unauthorized(f"Invalid token: {str(e)}")

    user_id = payload.get("sub")
    if not user_id:
        logger.warning("Token missing 'sub' claim")
        raise _unauthorized("Invalid token: missing user ID")

    try:
        user_pk = int(user_id)
    except ValueError:
        logger.warning(f"Invalid user id in token: {user_id}")
        raise _unauthorized("Invalid token: malformed user ID")

    user = SupabaseClient.fetch_by_id("users", user_pk, columns="id, email")
    if user is None:
        logger.warning(f"Token for deleted user: {user_pk}")
        raise _unauthorized("User no longer exists")

    logger.debug(f"Authenticated user: {user_pk}")
    return AuthUser(id=user_pk, email=user.get("email"))

