# =============================================================================
# core/services/image_records.py - Row + Image Write Sequences
# =============================================================================
# Projects and tasks own at most one image. Database rows and storage
# objects cannot change in one transaction, so every write follows the same
# order:
#
#   create: store image -> insert row     (insert fails: remove new image)
#   update: store image -> update row     (update fails: remove new image)
#           -> remove the old image directory
#   delete: delete row -> remove the image directory
#
# A crash between the steps can leave an unreferenced directory behind, but
# a row never points at an image that was not stored.
# =============================================================================

import logging
from typing import Any

from core.models.common import ImageUpload
from core.services.storage_service import StorageService
from lib.supabase_client import SupabaseClient

logger = logging.getLogger(__name__)


def insert_with_image(
    table: str,
    entity: str,
    data: dict[str, Any],
    image: ImageUpload | None,
) -> dict[str, Any]:
    """Insert a row, storing its image first when one was uploaded."""
    new_path = None
    if image is not None:
        new_path = StorageService.store_image(entity, image)
        data["image_path"] = new_path

    try:
        return SupabaseClient.insert(table, data)
    except Exception:
        if new_path:
            StorageService.discard_directory(new_path)
        raise


def update_with_image(
    table: str,
    entity: str,
    record: dict[str, Any],
    data: dict[str, Any],
    image: ImageUpload | None,
) -> dict[str, Any]:
    """
    Update a row; a new image replaces the old one.

    The old image's whole directory is removed once the row points at the
    new image. Without a new upload the stored image is left alone.
    """
    old_path = record.get("image_path")
    new_path = None
    if image is not None:
        new_path = StorageService.store_image(entity, image)
        data["image_path"] = new_path

    try:
        updated = SupabaseClient.update(table, record["id"], data)
    except Exception:
        if new_path:
            StorageService.discard_directory(new_path)
        raise

    if new_path and old_path:
        StorageService.delete_directory(old_path)

    return updated


def delete_with_image(table: str, record: dict[str, Any]) -> None:
    """Delete a row, then its image directory if it had one."""
    SupabaseClient.delete(table, record["id"])

    if record.get("image_path"):
        StorageService.delete_directory(record["image_path"])
