# =============================================================================
# core/services/user_service.py - User Business Logic
# =============================================================================
# Handles user listing, mutations and password checks.
#
# Passwords are stored as werkzeug hashes. Email addresses are marked as
# verified whenever a user is created or updated through the admin panel.
# =============================================================================

import logging
from typing import Any

from werkzeug.security import check_password_hash, generate_password_hash

from app.exceptions import FormValidationError, ResourceNotFoundError
from core.models.common import RequestContext
from core.models.pagination import Page
from core.models.user import UserCreateForm, UserUpdateForm
from core.services.listing import USER_LISTING, fetch_page
from lib.supabase_client import SupabaseClient
from lib.utils import utc_now_iso

logger = logging.getLogger(__name__)

TABLE = "users"


def hash_password(password: str) -> str:
    return generate_password_hash(password)


class UserService:
    """Service for user management operations."""

    @staticmethod
    def list_users(ctx: RequestContext) -> Page:
        """Filter by name/email, sort and paginate all users."""
        return fetch_page(USER_LISTING, ctx.query)

    @staticmethod
    def get_user(user_id: int) -> dict[str, Any]:
        """
        Get a user by ID.

        Raises:
            ResourceNotFoundError: If the user doesn't exist
        """
        user = SupabaseClient.fetch_by_id(TABLE, user_id)
        if not user:
            raise ResourceNotFoundError("User", user_id)
        return user

    @staticmethod
    def _check_email_free(email: str, user_id: int | None = None) -> None:
        existing = SupabaseClient.fetch_one_by(TABLE, "email", email, columns="id")
        if existing and existing["id"] != user_id:
            raise FormValidationError({"email": ["The email has already been taken."]})

    @staticmethod
    def create_user(ctx: RequestContext, form: UserCreateForm) -> dict[str, Any]:
        """
        Create a user with a hashed password and a verified email.

        Raises:
            FormValidationError: If the email is already taken
        """
        UserService._check_email_free(form.email)

        data = form.to_row()
        data["password"] = hash_password(form.password)
        data["email_verified_at"] = utc_now_iso()

        user = SupabaseClient.insert(TABLE, data)
        logger.info(f"Created user: {user['id']} by user: {ctx.user_id}")
        return user

    @staticmethod
    def update_user(ctx: RequestContext, user_id: int, form: UserUpdateForm) -> dict[str, Any]:
        """
        Update a user.

        An empty password leaves the stored hash untouched: the key is
        removed from the update, not written as an empty value.

        Raises:
            ResourceNotFoundError: If the user doesn't exist
            FormValidationError: If the email belongs to another user
        """
        UserService.get_user(user_id)
        UserService._check_email_free(form.email, user_id=user_id)

        data = form.to_row()
        data["email_verified_at"] = utc_now_iso()

        if form.password:
            data["password"] = hash_password(form.password)
        else:
            data.pop("password", None)

        user = SupabaseClient.update(TABLE, user_id, data)
        logger.info(f"Updated user: {user_id} by user: {ctx.user_id}")
        return user

    @staticmethod
    def delete_user(ctx: RequestContext, user_id: int) -> str:
        """
        Delete a user.

        Returns:
            Name of the deleted user
        """
        user = UserService.get_user(user_id)
        name = user["name"]

        SupabaseClient.delete(TABLE, user_id)
        logger.info(f"Deleted user: {user_id} by user: {ctx.user_id}")
        return name

    @staticmethod
    def authenticate(email: str, password: str) -> dict[str, Any] | None:
        """
        Check a login attempt.

        Returns:
            The user row when the password matches, otherwise None
        """
        user = SupabaseClient.fetch_one_by(TABLE, "email", email.strip())
        if not user or not check_password_hash(user["password"], password):
            logger.info(f"Failed login attempt for {email}")
            return None
        return user
