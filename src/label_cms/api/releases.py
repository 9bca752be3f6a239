"""Release API endpoints.

GET    /api/releases                            all releases, newest first
GET    /api/releases?action=latest&limit=5      latest releases
GET    /api/releases?action=getById&id=1        one release with its tracks
POST   /api/releases                            create (admin)
PUT    /api/releases    {"id": 1, ...}          partial update (admin)
DELETE /api/releases    {"id": 1}               delete with tracks (admin)
"""

from typing import Annotated, Any

from fastapi import APIRouter, Body, Query

from label_cms.api.dependencies import ReleaseRepo, parse_id, pop_id
from label_cms.exceptions import NotFoundError
from label_cms.models.release import Release
from label_cms.models.track import Track
from label_cms.repositories.base import DEFAULT_LIMIT
from label_cms.schemas.common import ApiResponse, EntityId
from label_cms.schemas.release import ReleaseResponse, ReleaseWithTracks
from label_cms.schemas.track import TrackResponse

router = APIRouter(prefix="/releases", tags=["releases"])


def release_to_response_with_tracks(release: Release, tracks: list[Track]) -> ReleaseWithTracks:
    """Convert a Release model and its tracks to the detail schema."""
    base = ReleaseResponse.model_validate(release)
    return ReleaseWithTracks(
        **base.model_dump(),
        tracks=[TrackResponse.model_validate(track) for track in tracks],
    )


@router.get("", response_model=None)
async def get_releases(
    repo: ReleaseRepo,
    action: str | None = Query(None, description="latest | getById; omit to list all"),
    limit: str | None = Query(None, description="Maximum results for action=latest"),
    id: str | None = Query(None, description="Release ID for action=getById"),
) -> ApiResponse:
    """List or look up releases.

    Public; no authentication required.
    """
    if action == "latest":
        releases = await repo.list_latest(limit if limit is not None else DEFAULT_LIMIT)
        return ApiResponse[list[ReleaseResponse]](
            success=True,
            message="Latest releases retrieved successfully",
            data=[ReleaseResponse.model_validate(r) for r in releases],
        )

    if action == "getById":
        release_id = parse_id(id, "ID parameter is required")
        found = await repo.get_with_tracks(release_id)
        if found is None:
            raise NotFoundError("Release not found")
        release, tracks = found
        return ApiResponse[ReleaseWithTracks](
            success=True,
            message="Release retrieved successfully",
            data=release_to_response_with_tracks(release, tracks),
        )

    releases = await repo.list_all()
    return ApiResponse[list[ReleaseResponse]](
        success=True,
        message="All releases retrieved successfully",
        data=[ReleaseResponse.model_validate(r) for r in releases],
    )


@router.post("", response_model=ApiResponse[EntityId], status_code=201)
async def create_release(
    payload: Annotated[dict[str, Any], Body()],
    repo: ReleaseRepo,
) -> ApiResponse[EntityId]:
    """Create a release.

    Requires title, artist, releaseDate and format. Admin only.
    """
    release_id = await repo.create(payload)
    return ApiResponse[EntityId](
        success=True,
        message="Release created successfully",
        data=EntityId(id=release_id),
    )


@router.put("", response_model=ApiResponse[EntityId])
async def update_release(
    payload: Annotated[dict[str, Any], Body()],
    repo: ReleaseRepo,
) -> ApiResponse[EntityId]:
    """Update the supplied fields of a release. Admin only."""
    repo.authorize_write()
    release_id = pop_id(payload, "update")
    await repo.update(release_id, payload)
    return ApiResponse[EntityId](
        success=True,
        message="Release updated successfully",
        data=EntityId(id=release_id),
    )


@router.delete("", response_model=ApiResponse[None])
async def delete_release(
    payload: Annotated[dict[str, Any], Body()],
    repo: ReleaseRepo,
) -> ApiResponse[None]:
    """Delete a release and all of its tracks. Admin only."""
    repo.authorize_write()
    release_id = pop_id(payload, "delete")
    await repo.delete(release_id)
    return ApiResponse[None](success=True, message="Release deleted successfully", data=None)
