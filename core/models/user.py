# =============================================================================
# core/models/user.py - User Schemas
# =============================================================================
# These models define the API contract for user operations:
# - UserCreateForm / UserUpdateForm: validated fields of the user forms
# - UserResource: a user as returned to clients (never the password hash)
# - UserSummary: the short form embedded as creator/updater/assignee
# =============================================================================

import re

from pydantic import BaseModel, Field, ValidationInfo, field_validator

# Columns a user listing may be ordered by
USER_SORT_FIELDS = ("id", "name", "email", "created_at", "updated_at")

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
LETTER_PATTERN = re.compile(r"[A-Za-z]")
SYMBOL_PATTERN = re.compile(r"[^A-Za-z0-9\s]")
MIN_PASSWORD_LENGTH = 8


def _check_password(password: str) -> str:
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValueError(f"The password field must be at least {MIN_PASSWORD_LENGTH} characters.")
    if not LETTER_PATTERN.search(password):
        raise ValueError("The password field must contain at least one letter.")
    if not SYMBOL_PATTERN.search(password):
        raise ValueError("The password field must contain at least one symbol.")
    return password


class UserCreateForm(BaseModel):
    """
    Fields accepted when creating a user.

    Example:
        {
            "name": "Ada Lovelace",
            "email": "ada@example.com",
            "password": "engine#1843",
            "password_confirmation": "engine#1843"
        }
    """

    name: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., max_length=255)
    password: str = Field(...)
    password_confirmation: str | None = Field(default=None, validate_default=True)

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("The name field is required.")
        return v.strip()

    @field_validator("email")
    @classmethod
    def email_is_valid(cls, v: str) -> str:
        v = v.strip()
        if not EMAIL_PATTERN.match(v):
            raise ValueError("The email field must be a valid email address.")
        return v

    @field_validator("password")
    @classmethod
    def password_is_strong(cls, v: str) -> str:
        return _check_password(v)

    @field_validator("password_confirmation")
    @classmethod
    def password_confirmed(cls, v: str | None, info: ValidationInfo) -> str | None:
        password = info.data.get("password")
        if password is not None and v != password:
            raise ValueError("The password field confirmation does not match.")
        return v

    def to_row(self) -> dict:
        return self.model_dump(exclude={"password_confirmation"})


class UserUpdateForm(UserCreateForm):
    """
    Fields accepted when updating a user.

    Same rules as creation, except the password may be left empty to keep
    the current one.
    """

    password: str | None = Field(default=None)

    @field_validator("password")
    @classmethod
    def password_is_strong(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return _check_password(v)


class UserSummary(BaseModel):
    """Minimal user reference embedded in other resources."""
    id: int
    name: str
    email: str


class UserResource(BaseModel):
    """A user as returned to clients."""
    id: int
    name: str
    email: str
    email_verified_at: str | None = None
    created_at: str | None = None
