# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - Swaps the Supabase client for the in-memory FakeSupabase
# - Provides a signed-in user, a RequestContext and API auth headers
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-signing-tokens")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

from unittest.mock import patch

import pytest

from core.models.common import ImageUpload, ListQuery, RequestContext
from core.services.flash_service import FlashService
from core.services.user_service import hash_password
from lib.supabase_client import SupabaseClient
from tests.fakes import FakeSupabase

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture(autouse=True)
def clear_flash():
    """Pending success notices never leak between tests."""
    FlashService.clear()
    yield
    FlashService.clear()


@pytest.fixture
def fake_db():
    """Route every SupabaseClient call to a fresh in-memory database."""
    fake = FakeSupabase()
    with patch.object(SupabaseClient, "get_client", return_value=fake):
        yield fake


@pytest.fixture
def user(fake_db):
    """A stored user whose password is "secret#pass1"."""
    return fake_db._insert("users", {
        "name": "Ada Lovelace",
        "email": "ada@example.com",
        "password": hash_password("secret#pass1"),
        "email_verified_at": "2024-01-01T00:00:00+00:00",
    })[0]


@pytest.fixture
def other_user(fake_db):
    return fake_db._insert("users", {
        "name": "Charles Babbage",
        "email": "charles@example.com",
        "password": hash_password("engine#1822"),
        "email_verified_at": None,
    })[0]


@pytest.fixture
def ctx(user):
    """RequestContext of `user` with default listing parameters."""
    return RequestContext(user_id=user["id"])


@pytest.fixture
def make_ctx(user):
    """Build a RequestContext of `user` with custom listing parameters."""
    def _make(**params):
        return RequestContext(user_id=user["id"], query=ListQuery(**params))
    return _make


@pytest.fixture
def image():
    return ImageUpload(filename="cover.png", content_type="image/png", content=PNG_BYTES)


@pytest.fixture
def project_row(fake_db, user):
    """Insert a project row directly and return it."""
    def _insert(**overrides):
        data = {
            "name": "Launch",
            "description": None,
            "due_date": "2025-01-01",
            "status": "pending",
            "image_path": None,
            "created_by": user["id"],
            "updated_by": user["id"],
        }
        data.update(overrides)
        return fake_db._insert("projects", data)[0]
    return _insert


@pytest.fixture
def task_row(fake_db, user):
    """Insert a task row directly and return it."""
    def _insert(project_id, **overrides):
        data = {
            "name": "Write copy",
            "description": None,
            "due_date": None,
            "status": "pending",
            "image_path": None,
            "project_id": project_id,
            "assigned_user_id": None,
            "created_by": user["id"],
            "updated_by": user["id"],
        }
        data.update(overrides)
        return fake_db._insert("tasks", data)[0]
    return _insert
