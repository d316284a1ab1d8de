"""Object storage for profile photos."""
import asyncio
import logging
import time
from typing import Protocol

from supabase import Client, create_client

from core.config import Settings
from services.exceptions import PhotoUploadError

logger = logging.getLogger(__name__)


def build_photo_name(original_filename: str, now: float | None = None) -> str:
    """Object name for an upload: ``profile_<epoch millis>_<original filename>``."""
    timestamp_ms = int((time.time() if now is None else now) * 1000)
    return f"profile_{timestamp_ms}_{original_filename}"


class PhotoStorage(Protocol):
    """Uploads a photo and returns its public URL."""

    async def upload(self, name: str, content: bytes, content_type: str) -> str: ...


class SupabasePhotoStorage:
    """Profile photos in a Supabase Storage bucket."""

    def __init__(self, client: Client, bucket: str) -> None:
        self._client = client
        self._bucket = bucket

    @classmethod
    def from_settings(cls, settings: Settings) -> "SupabasePhotoStorage":
        client = create_client(settings.supabase_url, settings.supabase_key)
        return cls(client, settings.supabase_bucket)

    def _upload_sync(self, name: str, content: bytes, content_type: str) -> str:
        bucket = self._client.storage.from_(self._bucket)
        bucket.upload(
            path=name,
            file=content,
            file_options={"content-type": content_type},
        )
        return bucket.get_public_url(name)

    async def upload(self, name: str, content: bytes, content_type: str) -> str:
        """
        Upload ``content`` as ``name`` and return the public URL.

        Raises:
            PhotoUploadError: If Supabase rejects the upload or is unreachable.
        """
        try:
            # supabase-py's storage client is synchronous
            url = await asyncio.to_thread(self._upload_sync, name, content, content_type)
        except Exception as e:
            logger.exception("photo_upload_failed bucket=%s name=%s", self._bucket, name)
            raise PhotoUploadError(f"Supabase upload failed: {e}") from e
        logger.info("photo_uploaded bucket=%s name=%s", self._bucket, name)
        return url


class InMemoryPhotoStorage:
    """Keeps uploads in a dict. For local development and tests."""

    def __init__(self, bucket: str = "avatars") -> None:
        self._bucket = bucket
        self.objects: dict[str, tuple[bytes, str]] = {}

    async def upload(self, name: str, content: bytes, content_type: str) -> str:
        self.objects[name] = (content, content_type)
        return f"memory://{self._bucket}/{name}"


def create_photo_storage(settings: Settings) -> PhotoStorage:
    """Build the photo storage selected by ``STORAGE_DRIVER``."""
    if settings.storage_driver == "memory":
        return InMemoryPhotoStorage(bucket=settings.supabase_bucket or "avatars")
    return SupabasePhotoStorage.from_settings(settings)
