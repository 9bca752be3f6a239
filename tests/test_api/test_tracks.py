"""Tests for track API endpoints."""

from collections.abc import Callable
from typing import Any

import pytest
from httpx import AsyncClient

from label_cms.models.user import User


def track_payload(**overrides: Any) -> dict[str, Any]:
    """Build a valid track body."""
    return {
        "releaseId": 1,
        "trackNumber": 1,
        "artist": "DJ X",
        "title": "Intro",
        "length": "1:30",
        **overrides,
    }


async def create_track(client: AsyncClient, **overrides: Any) -> int:
    response = await client.post("/api/tracks", json=track_payload(**overrides))
    assert response.status_code == 201, response.text
    return response.json()["data"]["id"]


class TestListTracks:
    """Tests for track list and lookup selectors."""

    async def test_list_by_release_orders_by_track_number(
        self, client: AsyncClient, admin_user: User, act_as: Callable
    ) -> None:
        act_as(admin_user)
        await create_track(client, trackNumber=3, title="Outro")
        await create_track(client, trackNumber=1, title="Intro")
        await create_track(client, trackNumber=2, title="Middle")
        await create_track(client, releaseId=2, trackNumber=1, title="Elsewhere")

        act_as(None)
        response = await client.get(
            "/api/tracks", params={"action": "getByReleaseId", "releaseId": 1}
        )

        assert response.status_code == 200
        assert [t["title"] for t in response.json()["data"]] == ["Intro", "Middle", "Outro"]

    async def test_list_by_unknown_release_is_empty(self, client: AsyncClient) -> None:
        response = await client.get(
            "/api/tracks", params={"action": "getByReleaseId", "releaseId": 77}
        )

        assert response.status_code == 200
        assert response.json()["data"] == []

    async def test_list_by_release_requires_release_id(self, client: AsyncClient) -> None:
        response = await client.get("/api/tracks", params={"action": "getByReleaseId"})

        assert response.status_code == 400

    async def test_list_all_orders_by_release_then_number(
        self, client: AsyncClient, admin_user: User, act_as: Callable
    ) -> None:
        act_as(admin_user)
        await create_track(client, releaseId=2, trackNumber=1, title="B1")
        await create_track(client, releaseId=1, trackNumber=2, title="A2")
        await create_track(client, releaseId=1, trackNumber=1, title="A1")

        response = await client.get("/api/tracks")

        assert [t["title"] for t in response.json()["data"]] == ["A1", "A2", "B1"]

    async def test_get_by_id(self, client: AsyncClient, admin_user: User, act_as: Callable) -> None:
        act_as(admin_user)
        track_id = await create_track(client)

        response = await client.get("/api/tracks", params={"action": "getById", "id": track_id})

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["releaseId"] == 1
        assert data["trackNumber"] == 1
        assert data["length"] == "1:30"

    async def test_get_by_id_not_found(self, client: AsyncClient) -> None:
        response = await client.get("/api/tracks", params={"action": "getById", "id": 5})

        assert response.status_code == 404
        assert response.json()["message"] == "Track not found"


class TestCreateTrack:
    """Tests for adding tracks."""

    async def test_create_track_for_missing_release_is_accepted(
        self, client: AsyncClient, admin_user: User, act_as: Callable
    ) -> None:
        """Test that tracks may be added before their release exists."""
        act_as(admin_user)
        response = await client.post("/api/tracks", json=track_payload(releaseId=404))

        assert response.status_code == 201

    async def test_duplicate_track_numbers_are_accepted(
        self, client: AsyncClient, admin_user: User, act_as: Callable
    ) -> None:
        act_as(admin_user)
        first = await create_track(client)
        second = await create_track(client, title="Intro (Reprise)")

        assert first != second

    @pytest.mark.parametrize("length", ["90", "1:3", "1:60", "123:00", ""])
    async def test_create_track_invalid_length(
        self, client: AsyncClient, admin_user: User, act_as: Callable, length: str
    ) -> None:
        act_as(admin_user)
        response = await client.post("/api/tracks", json=track_payload(length=length))

        assert response.status_code == 400
        assert "length" in response.json()["message"]

    async def test_create_track_release_id_out_of_range(
        self, client: AsyncClient, admin_user: User, act_as: Callable
    ) -> None:
        act_as(admin_user)
        response = await client.post(
            "/api/tracks", json=track_payload(releaseId=99999999999999999999)
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid fields: releaseId"

    async def test_create_track_missing_fields(
        self, client: AsyncClient, admin_user: User, act_as: Callable
    ) -> None:
        act_as(admin_user)
        response = await client.post("/api/tracks", json={"title": "Lonely"})

        assert response.status_code == 400
        message = response.json()["message"]
        for field in ("releaseId", "trackNumber", "artist", "length"):
            assert field in message

    async def test_create_track_non_admin(
        self, client: AsyncClient, regular_user: User, act_as: Callable
    ) -> None:
        act_as(regular_user)
        response = await client.post("/api/tracks", json=track_payload())

        assert response.status_code == 403
        assert (await client.get("/api/tracks")).json()["data"] == []


class TestUpdateDeleteTrack:
    """Tests for updating and deleting tracks."""

    async def test_update_track(self, client: AsyncClient, admin_user: User, act_as: Callable) -> None:
        act_as(admin_user)
        track_id = await create_track(client)

        response = await client.put("/api/tracks", json={"id": track_id, "length": "10:05"})

        assert response.status_code == 200
        data = (
            await client.get("/api/tracks", params={"action": "getById", "id": track_id})
        ).json()["data"]
        assert data["length"] == "10:05"
        assert data["title"] == "Intro"

    async def test_update_track_not_found(
        self, client: AsyncClient, admin_user: User, act_as: Callable
    ) -> None:
        act_as(admin_user)
        response = await client.put("/api/tracks", json={"id": 9, "title": "Nope"})

        assert response.status_code == 404

    async def test_delete_track(self, client: AsyncClient, admin_user: User, act_as: Callable) -> None:
        act_as(admin_user)
        track_id = await create_track(client)

        response = await client.request("DELETE", "/api/tracks", json={"id": track_id})

        assert response.status_code == 200
        missing = await client.get("/api/tracks", params={"action": "getById", "id": track_id})
        assert missing.status_code == 404

    async def test_delete_track_anonymous(
        self, client: AsyncClient, admin_user: User, act_as: Callable
    ) -> None:
        act_as(admin_user)
        track_id = await create_track(client)

        act_as(None)
        response = await client.request("DELETE", "/api/tracks", json={"id": track_id})

        assert response.status_code == 401
        found = await client.get("/api/tracks", params={"action": "getById", "id": track_id})
        assert found.status_code == 200
