# =============================================================================
# core/services/storage_service.py - Supabase Storage Operations
# =============================================================================
# Handles image upload and removal in Supabase Storage.
#
# Every stored image lives in a directory of its own:
#   {entity}/{uuid-hex}/{filename}
# The directory belongs to exactly one record, so removing the record's
# image removes the whole directory.
# =============================================================================

import logging
import posixpath
from uuid import uuid4

from werkzeug.utils import secure_filename

from lib.supabase_client import SupabaseClient
from app.config import settings
from app.exceptions import StorageUploadError, StorageDeleteError
from core.models.common import ImageUpload

logger = logging.getLogger(__name__)

# Entries requested per storage list() call
LIST_PAGE_SIZE = 100


class StorageService:
    """
    Service for Supabase Storage operations.

    Stores images under fresh per-record directories and deletes those
    directories again.
    """

    @staticmethod
    def _bucket():
        client = SupabaseClient.get_client()
        return client.storage.from_(settings.STORAGE_BUCKET)

    @staticmethod
    def build_path(entity: str, filename: str) -> str:
        """
        Build a storage key under a fresh random directory.

        The original filename is kept when it survives sanitising,
        otherwise a random one with the original extension is generated.

        Example:
            build_path("project", "Cover Photo.png")
            # "project/3f2a.../Cover_Photo.png"
        """
        safe_name = secure_filename(filename or "")
        if not safe_name or safe_name.startswith("."):
            extension = posixpath.splitext(filename or "")[1].lower()
            safe_name = f"{uuid4().hex}{extension}"
        return f"{entity}/{uuid4().hex}/{safe_name}"

    @staticmethod
    def store_image(entity: str, image: ImageUpload) -> str:
        """
        Upload an image under a new directory for `entity`.

        Args:
            entity: Key prefix, "project" or "task"
            image: The validated upload

        Returns:
            Storage path of the new object

        Raises:
            StorageUploadError: If upload fails
        """
        path = StorageService.build_path(entity, image.filename)

        try:
            StorageService._bucket().upload(
                path=path,
                file=image.content,
                file_options={"content-type": image.content_type, "upsert": "false"},
            )
        except Exception as e:
            logger.error(f"Storage upload failed: {e}")
            raise StorageUploadError(path, str(e))

        logger.info(f"Uploaded image to storage: {path}")
        return path

    @staticmethod
    def list_files(directory: str) -> list[str]:
        """
        Every object key under `directory`, subfolders included.

        Storage lists one folder level at a time, a page at a time; folder
        entries come back without an `id`.
        """
        bucket = StorageService._bucket()
        keys: list[str] = []
        pending = [directory]

        while pending:
            folder = pending.pop()
            offset = 0
            while True:
                entries = bucket.list(folder, {"limit": LIST_PAGE_SIZE, "offset": offset}) or []
                for entry in entries:
                    key = f"{folder}/{entry['name']}"
                    if entry.get("id") is None:
                        pending.append(key)
                    else:
                        keys.append(key)
                if len(entries) < LIST_PAGE_SIZE:
                    break
                offset += LIST_PAGE_SIZE

        return keys

    @staticmethod
    def delete_directory(image_path: str) -> list[str]:
        """
        Delete the directory holding `image_path` with everything in it,
        including other files and nested folders.

        Returns:
            Storage paths that were removed

        Raises:
            StorageDeleteError: If listing or removal fails
        """
        directory = posixpath.dirname(image_path)
        if not directory:
            # A bare key has no directory of its own; remove just the object
            paths = [image_path]
        else:
            try:
                paths = StorageService.list_files(directory)
            except Exception as e:
                logger.error(f"Failed to list {directory}: {e}")
                raise StorageDeleteError(directory, str(e))

        if not paths:
            return []

        try:
            StorageService._bucket().remove(paths)
        except Exception as e:
            logger.error(f"Failed to delete {directory or image_path}: {e}")
            raise StorageDeleteError(directory or image_path, str(e))

        logger.info(f"Deleted {len(paths)} file(s) from storage: {directory or image_path}")
        return paths

    @staticmethod
    def discard_directory(image_path: str) -> None:
        """
        Best-effort delete used while undoing a failed write.

        Errors are logged; the caller is already re-raising the original one.
        """
        try:
            StorageService.delete_directory(image_path)
        except StorageDeleteError as e:
            logger.error(f"Could not clean up orphaned image {image_path}: {e.message}")

    @staticmethod
    def get_public_url(storage_path: str) -> str:
        """
        Get a public URL for a storage file.

        Args:
            storage_path: Path in storage bucket

        Returns:
            Public URL string
        """
        return StorageService._bucket().get_public_url(storage_path)
