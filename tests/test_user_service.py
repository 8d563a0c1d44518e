# =============================================================================
# tests/test_user_service.py - User Service Tests
# =============================================================================
# Tests for UserService:
# - Passwords are stored hashed
# - An empty password on update keeps the stored hash
# - Email uniqueness and login checks
# =============================================================================

import pytest
from werkzeug.security import check_password_hash

from app.exceptions import FormValidationError, ResourceNotFoundError
from core.models.user import UserCreateForm, UserUpdateForm
from core.services.resource_service import ResourceService
from core.services.user_service import UserService


def _create_form(**overrides) -> UserCreateForm:
    data = {
        "name": "Grace Hopper",
        "email": "grace@example.com",
        "password": "cobol#1959",
        "password_confirmation": "cobol#1959",
    }
    data.update(overrides)
    return UserCreateForm(**data)


class TestCreateUser:
    """Tests for UserService.create_user()."""

    def test_password_is_hashed(self, fake_db, ctx):
        created = UserService.create_user(ctx, _create_form())

        stored = fake_db.row("users", created["id"])
        assert stored["password"] != "cobol#1959"
        assert check_password_hash(stored["password"], "cobol#1959")

    def test_email_verified_immediately(self, fake_db, ctx):
        created = UserService.create_user(ctx, _create_form())

        assert fake_db.row("users", created["id"])["email_verified_at"] is not None

    def test_email_taken(self, fake_db, ctx, user):
        with pytest.raises(FormValidationError) as exc_info:
            UserService.create_user(ctx, _create_form(email=user["email"]))

        assert exc_info.value.errors == {"email": ["The email has already been taken."]}

    def test_resource_hides_password(self, fake_db, ctx):
        created = UserService.create_user(ctx, _create_form())

        resource = ResourceService.user(created)

        assert "password" not in resource
        assert resource["email"] == "grace@example.com"


class TestUpdateUser:
    """Tests for UserService.update_user()."""

    def test_empty_password_keeps_hash(self, fake_db, ctx, user):
        before = fake_db.row("users", user["id"])["password"]

        UserService.update_user(ctx, user["id"], UserUpdateForm(name="Ada King", email=user["email"]))

        stored = fake_db.row("users", user["id"])
        assert stored["name"] == "Ada King"
        assert stored["password"] == before

    def test_new_password_rehashed(self, fake_db, ctx, user):
        before = fake_db.row("users", user["id"])["password"]

        UserService.update_user(ctx, user["id"], UserUpdateForm(
            name=user["name"],
            email=user["email"],
            password="analytical#1843",
            password_confirmation="analytical#1843",
        ))

        stored = fake_db.row("users", user["id"])
        assert stored["password"] != before
        assert check_password_hash(stored["password"], "analytical#1843")

    def test_keeping_own_email_allowed(self, fake_db, ctx, user):
        updated = UserService.update_user(ctx, user["id"], UserUpdateForm(name="Ada", email=user["email"]))

        assert updated["email"] == user["email"]

    def test_taking_another_users_email_rejected(self, fake_db, ctx, user, other_user):
        with pytest.raises(FormValidationError):
            UserService.update_user(ctx, user["id"], UserUpdateForm(name="Ada", email=other_user["email"]))

    def test_update_marks_email_verified(self, fake_db, ctx, other_user):
        UserService.update_user(ctx, other_user["id"], UserUpdateForm(name="C", email=other_user["email"]))

        assert fake_db.row("users", other_user["id"])["email_verified_at"] is not None

    def test_missing_user(self, fake_db, ctx):
        with pytest.raises(ResourceNotFoundError):
            UserService.update_user(ctx, 999, UserUpdateForm(name="Nobody", email="nobody@example.com"))


class TestDeleteUser:
    def test_returns_name(self, fake_db, ctx, other_user):
        assert UserService.delete_user(ctx, other_user["id"]) == "Charles Babbage"
        assert fake_db.row("users", other_user["id"]) is None


class TestAuthenticate:
    """Tests for UserService.authenticate()."""

    def test_correct_password(self, fake_db, user):
        assert UserService.authenticate("ada@example.com", "secret#pass1")["id"] == user["id"]

    def test_wrong_password(self, fake_db, user):
        assert UserService.authenticate("ada@example.com", "wrong#pass1") is None

    def test_unknown_email(self, fake_db, user):
        assert UserService.authenticate("nobody@example.com", "secret#pass1") is None
