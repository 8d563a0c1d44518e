# =============================================================================
# tests/test_project_service.py - Project Service Tests
# =============================================================================
# Tests for ProjectService:
# - Creator/updater stamping
# - Image lifecycle on create, update and delete
# - Cleanup when the row write fails
# - Deleting a project removes its tasks and their images
# =============================================================================

import pytest

from app.exceptions import ResourceNotFoundError
from core.models.common import ImageUpload, RequestContext
from core.models.project import ProjectForm
from core.services.project_service import ProjectService
from core.services.resource_service import ResourceService
from core.services.storage_service import StorageService
from lib.supabase_client import SupabaseClientError


def _form(**overrides) -> ProjectForm:
    data = {"name": "Launch", "status": "pending", "due_date": "2025-01-01"}
    data.update(overrides)
    return ProjectForm(**data)


# =============================================================================
# Create
# =============================================================================

class TestCreateProject:
    """Tests for ProjectService.create_project()."""

    def test_without_image(self, fake_db, ctx):
        project = ProjectService.create_project(ctx, _form())

        stored = fake_db.row("projects", project["id"])
        assert stored["name"] == "Launch"
        assert stored["status"] == "pending"
        assert stored["due_date"] == "2025-01-01"
        assert stored.get("image_path") is None
        assert stored["created_by"] == ctx.user_id
        assert stored["updated_by"] == ctx.user_id
        assert fake_db.storage.files == {}

    def test_with_image(self, fake_db, ctx, image):
        project = ProjectService.create_project(ctx, _form(), image)

        path = fake_db.row("projects", project["id"])["image_path"]
        assert path.startswith("project/")
        assert path.endswith("/cover.png")
        assert fake_db.storage.files[path] == image.content

    def test_images_get_separate_directories(self, fake_db, ctx, image):
        first = ProjectService.create_project(ctx, _form(), image)
        second = ProjectService.create_project(ctx, _form(), image)

        first_dir = first["image_path"].rsplit("/", 1)[0]
        second_dir = second["image_path"].rsplit("/", 1)[0]
        assert first_dir != second_dir

    def test_failed_insert_removes_uploaded_image(self, fake_db, ctx, image):
        fake_db.fail_on = ("projects", "insert")

        with pytest.raises(SupabaseClientError):
            ProjectService.create_project(ctx, _form(), image)

        assert fake_db.storage.files == {}
        assert fake_db.rows("projects") == []

    def test_resource_shape(self, fake_db, ctx, user, image):
        project = ProjectService.create_project(ctx, _form(description="Go live"), image)

        resource = ResourceService.project(project)

        assert resource["name"] == "Launch"
        assert resource["description"] == "Go live"
        assert resource["due_date"] == "2025-01-01"
        assert resource["created_at"] == project["created_at"][:10]
        assert resource["status"] == "pending"
        assert resource["image_path"] == StorageService.get_public_url(project["image_path"])
        assert resource["created_by"] == {"id": user["id"], "name": user["name"], "email": user["email"]}
        assert resource["updated_by"]["id"] == user["id"]


# =============================================================================
# Update
# =============================================================================

class TestUpdateProject:
    """Tests for ProjectService.update_project()."""

    def test_stamps_updater_only(self, fake_db, ctx, other_user):
        project = ProjectService.create_project(ctx, _form())
        editor = RequestContext(user_id=other_user["id"])

        ProjectService.update_project(editor, project["id"], _form(name="Relaunch", status="completed"))

        stored = fake_db.row("projects", project["id"])
        assert stored["name"] == "Relaunch"
        assert stored["status"] == "completed"
        assert stored["created_by"] == ctx.user_id
        assert stored["updated_by"] == other_user["id"]

    def test_without_image_keeps_current_image(self, fake_db, ctx, image):
        project = ProjectService.create_project(ctx, _form(), image)

        ProjectService.update_project(ctx, project["id"], _form(name="Relaunch"))

        stored = fake_db.row("projects", project["id"])
        assert stored["image_path"] == project["image_path"]
        assert project["image_path"] in fake_db.storage.files

    def test_new_image_replaces_old_directory(self, fake_db, ctx, image):
        project = ProjectService.create_project(ctx, _form(), image)
        old_path = project["image_path"]
        old_dir = old_path.rsplit("/", 1)[0]
        fake_db.storage.files[f"{old_dir}/probe.txt"] = b"probe"

        replacement = ImageUpload(filename="new.jpg", content_type="image/jpeg", content=b"jpeg-bytes")
        updated = ProjectService.update_project(ctx, project["id"], _form(), replacement)

        assert updated["image_path"] != old_path
        assert updated["image_path"].endswith("/new.jpg")
        assert fake_db.storage.files[updated["image_path"]] == b"jpeg-bytes"
        assert fake_db.storage.directory_of(old_path) == []

    def test_failed_update_keeps_old_image(self, fake_db, ctx, image):
        project = ProjectService.create_project(ctx, _form(), image)
        fake_db.fail_on = ("projects", "update")

        with pytest.raises(SupabaseClientError):
            ProjectService.update_project(ctx, project["id"], _form(), image)

        assert list(fake_db.storage.files) == [project["image_path"]]
        assert fake_db.row("projects", project["id"])["image_path"] == project["image_path"]

    def test_missing_project(self, fake_db, ctx):
        with pytest.raises(ResourceNotFoundError):
            ProjectService.update_project(ctx, 999, _form())


# =============================================================================
# Delete
# =============================================================================

class TestDeleteProject:
    """Tests for ProjectService.delete_project()."""

    def test_removes_row_and_image_directory(self, fake_db, ctx, image):
        project = ProjectService.create_project(ctx, _form(), image)

        name = ProjectService.delete_project(ctx, project["id"])

        assert name == "Launch"
        assert fake_db.row("projects", project["id"]) is None
        assert fake_db.storage.files == {}

    def test_without_image(self, fake_db, ctx):
        project = ProjectService.create_project(ctx, _form())

        ProjectService.delete_project(ctx, project["id"])

        assert fake_db.rows("projects") == []

    def test_removes_tasks_and_their_images(self, fake_db, ctx, image, task_row):
        project = ProjectService.create_project(ctx, _form())
        other = ProjectService.create_project(ctx, _form(name="Other"))
        task_image = StorageService.store_image("task", image)
        task_row(project["id"], image_path=task_image)
        task_row(project["id"])
        survivor = task_row(other["id"])

        ProjectService.delete_project(ctx, project["id"])

        assert [task["id"] for task in fake_db.rows("tasks")] == [survivor["id"]]
        assert task_image not in fake_db.storage.files

    def test_missing_project(self, fake_db, ctx):
        with pytest.raises(ResourceNotFoundError):
            ProjectService.delete_project(ctx, 999)


# =============================================================================
# Show
# =============================================================================

class TestShowProject:
    def test_tasks_page_is_scoped_and_filtered(self, fake_db, make_ctx, project_row, task_row):
        project = project_row()
        other = project_row(name="Other")
        task_row(project["id"], name="Design logo", status="completed")
        task_row(project["id"], name="Design site", status="pending")
        task_row(other["id"], name="Design other", status="completed")

        shown, tasks = ProjectService.show_project(make_ctx(name="design", status="completed"), project["id"])

        assert shown["id"] == project["id"]
        assert [task["name"] for task in tasks.items] == ["Design logo"]

    def test_form_options(self):
        options = ProjectService.form_options()

        assert [s["value"] for s in options["statuses"]] == ["pending", "in_progress", "completed"]
