"""Tests for profile photo storage."""
from unittest.mock import MagicMock

import pytest

from core.config import Settings
from core.storage import (
    InMemoryPhotoStorage,
    SupabasePhotoStorage,
    build_photo_name,
    create_photo_storage,
)
from services.exceptions import PhotoUploadError


class TestBuildPhotoName:
    """Object naming."""

    def test__name_uses_millisecond_timestamp(self) -> None:
        assert build_photo_name("me.png", now=1700000000.5) == "profile_1700000000500_me.png"

    def test__name_defaults_to_current_time(self) -> None:
        name = build_photo_name("me.png")
        prefix, timestamp, original = name.split("_", 2)
        assert prefix == "profile"
        assert timestamp.isdigit()
        assert original == "me.png"


class TestSupabasePhotoStorage:
    """Supabase upload with a mocked client."""

    async def test__upload__returns_public_url(self) -> None:
        client = MagicMock()
        bucket = client.storage.from_.return_value
        bucket.get_public_url.return_value = "https://cdn.example.com/avatars/p.png"
        storage = SupabasePhotoStorage(client, "avatars")

        url = await storage.upload("p.png", b"\x89PNG", "image/png")

        assert url == "https://cdn.example.com/avatars/p.png"
        client.storage.from_.assert_called_with("avatars")
        bucket.upload.assert_called_once_with(
            path="p.png",
            file=b"\x89PNG",
            file_options={"content-type": "image/png"},
        )

    async def test__upload__wraps_failures(self) -> None:
        client = MagicMock()
        client.storage.from_.return_value.upload.side_effect = RuntimeError("bucket not found")
        storage = SupabasePhotoStorage(client, "avatars")

        with pytest.raises(PhotoUploadError) as exc_info:
            await storage.upload("p.png", b"data", "image/png")

        assert exc_info.value.message == "Erro ao fazer upload da imagem"
        assert "bucket not found" in exc_info.value.detail


class TestInMemoryPhotoStorage:
    async def test__upload__keeps_object(self) -> None:
        storage = InMemoryPhotoStorage(bucket="avatars")

        url = await storage.upload("p.png", b"data", "image/png")

        assert url == "memory://avatars/p.png"
        assert storage.objects["p.png"] == (b"data", "image/png")


class TestCreatePhotoStorage:
    def test__memory_driver(self, settings: Settings) -> None:
        assert isinstance(create_photo_storage(settings), InMemoryPhotoStorage)
