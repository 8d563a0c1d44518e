# =============================================================================
# core/services/resource_service.py - Row -> Resource Serialization
# =============================================================================
# Turns raw rows into the dicts clients receive. Related users and projects
# are fetched in one batch per page rather than one query per row.
# =============================================================================

from typing import Any, Iterable

from core.models.project import ProjectResource, ProjectSummary
from core.models.task import TaskResource
from core.models.user import UserResource, UserSummary
from core.services.storage_service import StorageService
from lib.supabase_client import SupabaseClient
from lib.utils import to_date_string

USER_SUMMARY_COLUMNS = "id, name, email"


def _users_for(rows: Iterable[dict[str, Any]], *columns: str) -> dict[int, dict[str, Any]]:
    ids = {row.get(column) for row in rows for column in columns}
    return SupabaseClient.fetch_many("users", ids, columns=USER_SUMMARY_COLUMNS)


def _summary(users: dict[int, dict[str, Any]], user_id: int | None) -> UserSummary | None:
    user = users.get(user_id) if user_id is not None else None
    return UserSummary(**user) if user else None


def _image_url(image_path: str | None) -> str | None:
    return StorageService.get_public_url(image_path) if image_path else None


class ResourceService:
    """Serializers for projects, tasks and users."""

    @staticmethod
    def projects(rows: list[dict[str, Any]]) -> list[dict[str, Any]]:
        users = _users_for(rows, "created_by", "updated_by")
        return [
            ProjectResource(
                id=row["id"],
                name=row["name"],
                description=row.get("description"),
                created_at=to_date_string(row.get("created_at")),
                due_date=to_date_string(row.get("due_date")),
                status=row["status"],
                image_path=_image_url(row.get("image_path")),
                created_by=_summary(users, row.get("created_by")),
                updated_by=_summary(users, row.get("updated_by")),
            ).model_dump(mode="json")
            for row in rows
        ]

    @staticmethod
    def project(row: dict[str, Any]) -> dict[str, Any]:
        return ResourceService.projects([row])[0]

    @staticmethod
    def tasks(rows: list[dict[str, Any]]) -> list[dict[str, Any]]:
        users = _users_for(rows, "created_by", "updated_by", "assigned_user_id")
        projects = SupabaseClient.fetch_many(
            "projects", {row.get("project_id") for row in rows}, columns="id, name"
        )
        resources = []
        for row in rows:
            project = projects.get(row.get("project_id"))
            resources.append(TaskResource(
                id=row["id"],
                name=row["name"],
                description=row.get("description"),
                created_at=to_date_string(row.get("created_at")),
                due_date=to_date_string(row.get("due_date")),
                status=row["status"],
                image_path=_image_url(row.get("image_path")),
                project_id=row["project_id"],
                project=ProjectSummary(**project) if project else None,
                assigned_user_id=row.get("assigned_user_id"),
                assigned_user=_summary(users, row.get("assigned_user_id")),
                created_by=_summary(users, row.get("created_by")),
                updated_by=_summary(users, row.get("updated_by")),
            ).model_dump(mode="json"))
        return resources

    @staticmethod
    def task(row: dict[str, Any]) -> dict[str, Any]:
        return ResourceService.tasks([row])[0]

    @staticmethod
    def users(rows: list[dict[str, Any]]) -> list[dict[str, Any]]:
        return [
            UserResource(
                id=row["id"],
                name=row["name"],
                email=row["email"],
                email_verified_at=row.get("email_verified_at"),
                created_at=to_date_string(row.get("created_at")),
            ).model_dump(mode="json")
            for row in rows
        ]

    @staticmethod
    def user(row: dict[str, Any]) -> dict[str, Any]:
        return ResourceService.users([row])[0]
