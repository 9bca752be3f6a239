"""Tests for the file upload endpoint."""

from collections.abc import Callable
from pathlib import Path

import pytest
from httpx import AsyncClient

from label_cms.main import app
from label_cms.models.user import User
from label_cms.services.storage import LocalFileStorage, get_file_storage

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


@pytest.fixture
def storage(tmp_path: Path) -> LocalFileStorage:
    """Upload storage rooted in a temp dir with small limits."""
    local = LocalFileStorage(
        root=tmp_path,
        url_prefix="/uploads",
        max_image_bytes=1024,
        max_audio_bytes=2048,
    )
    app.dependency_overrides[get_file_storage] = lambda: local
    return local


class TestUpload:
    """Tests for POST /api/upload."""

    async def test_upload_image(
        self,
        client: AsyncClient,
        storage: LocalFileStorage,
        admin_user: User,
        act_as: Callable,
        tmp_path: Path,
    ) -> None:
        act_as(admin_user)
        response = await client.post(
            "/api/upload",
            files={"file": ("cover.png", PNG_BYTES, "image/png")},
            data={"type": "image"},
        )

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["type"] == "image"
        assert data["filename"].endswith(".png")
        assert data["url"] == f"/uploads/images/{data['filename']}"
        assert (tmp_path / "images" / data["filename"]).read_bytes() == PNG_BYTES

    async def test_upload_too_large(
        self, client: AsyncClient, storage: LocalFileStorage, admin_user: User, act_as: Callable
    ) -> None:
        act_as(admin_user)
        response = await client.post(
            "/api/upload",
            files={"file": ("big.png", b"\x00" * 1025, "image/png")},
            data={"type": "image"},
        )

        assert response.status_code == 400
        assert response.json()["message"] == "File size exceeds maximum limit"

    async def test_upload_wrong_mime(
        self, client: AsyncClient, storage: LocalFileStorage, admin_user: User, act_as: Callable
    ) -> None:
        act_as(admin_user)
        response = await client.post(
            "/api/upload",
            files={"file": ("song.mp3", b"ID3", "audio/mpeg")},
            data={"type": "image"},
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid file type"

    async def test_upload_unknown_type(
        self, client: AsyncClient, storage: LocalFileStorage, admin_user: User, act_as: Callable
    ) -> None:
        act_as(admin_user)
        response = await client.post(
            "/api/upload",
            files={"file": ("clip.mp4", b"\x00", "video/mp4")},
            data={"type": "video"},
        )

        assert response.status_code == 400

    async def test_upload_missing_file(
        self, client: AsyncClient, storage: LocalFileStorage, admin_user: User, act_as: Callable
    ) -> None:
        act_as(admin_user)
        response = await client.post("/api/upload", data={"type": "audio"})

        assert response.status_code == 400
        assert response.json()["message"] == "No file provided"

    async def test_upload_requires_admin(
        self,
        client: AsyncClient,
        storage: LocalFileStorage,
        regular_user: User,
        act_as: Callable,
        tmp_path: Path,
    ) -> None:
        act_as(regular_user)
        response = await client.post(
            "/api/upload",
            files={"file": ("cover.png", PNG_BYTES, "image/png")},
            data={"type": "image"},
        )

        assert response.status_code == 403
        assert not (tmp_path / "images").exists()
