# =============================================================================
# app/auth/models.py - Authentication Models
# =============================================================================
# Pydantic models for authentication data.
# =============================================================================

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional


class AuthUser(BaseModel):
    """
    Authenticated user extracted from the access token.

    This is the minimal user info available from the token itself,
    without querying the database.
    """
    model_config = ConfigDict(frozen=True)

    id: int
    email: Optional[str] = None


class LoginRequest(BaseModel):
    """Credentials posted to /auth/login."""
    email: str = Field(..., min_length=1, examples=["ada@example.com"])
    password: str = Field(..., min_length=1)


class TokenResponse(BaseModel):
    """Issued bearer token."""
    access_token: str
    token_type: str = "bearer"
    expires_in: int

