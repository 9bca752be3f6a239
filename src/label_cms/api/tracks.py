"""Track API endpoints.

Tracks are listed per release by track number; writes are admin only.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Body, Query

from label_cms.api.dependencies import TrackRepo, parse_id, pop_id
from label_cms.exceptions import NotFoundError
from label_cms.schemas.common import ApiResponse, EntityId
from label_cms.schemas.track import TrackResponse

router = APIRouter(prefix="/tracks", tags=["tracks"])


@router.get("", response_model=None)
async def get_tracks(
    repo: TrackRepo,
    action: str | None = Query(None, description="getByReleaseId | getById; omit to list all"),
    release_id: str | None = Query(None, alias="releaseId", description="Release ID"),
    id: str | None = Query(None, description="Track ID for action=getById"),
) -> ApiResponse:
    """List or look up tracks."""
    if action == "getByReleaseId":
        parsed_release_id = parse_id(release_id, "Release ID parameter is required")
        tracks = await repo.list_by_release(parsed_release_id)
        return ApiResponse[list[TrackResponse]](
            success=True,
            message="Tracks retrieved successfully",
            data=[TrackResponse.model_validate(t) for t in tracks],
        )

    if action == "getById":
        track = await repo.get_by_id(parse_id(id, "ID parameter is required"))
        if track is None:
            raise NotFoundError("Track not found")
        return ApiResponse[TrackResponse](
            success=True,
            message="Track retrieved successfully",
            data=TrackResponse.model_validate(track),
        )

    tracks = await repo.list_all()
    return ApiResponse[list[TrackResponse]](
        success=True,
        message="All tracks retrieved successfully",
        data=[TrackResponse.model_validate(t) for t in tracks],
    )


@router.post("", response_model=ApiResponse[EntityId], status_code=201)
async def create_track(
    payload: Annotated[dict[str, Any], Body()],
    repo: TrackRepo,
) -> ApiResponse[EntityId]:
    """Add a track to a release.

    Requires releaseId, trackNumber, artist, title and length ("m:ss").
    """
    track_id = await repo.create(payload)
    return ApiResponse[EntityId](
        success=True,
        message="Track created successfully",
        data=EntityId(id=track_id),
    )


@router.put("", response_model=ApiResponse[EntityId])
async def update_track(
    payload: Annotated[dict[str, Any], Body()],
    repo: TrackRepo,
) -> ApiResponse[EntityId]:
    repo.authorize_write()
    track_id = pop_id(payload, "update")
    await repo.update(track_id, payload)
    return ApiResponse[EntityId](
        success=True,
        message="Track updated successfully",
        data=EntityId(id=track_id),
    )


@router.delete("", response_model=ApiResponse[None])
async def delete_track(
    payload: Annotated[dict[str, Any], Body()],
    repo: TrackRepo,
) -> ApiResponse[None]:
    repo.authorize_write()
    track_id = pop_id(payload, "delete")
    await repo.delete(track_id)
    return ApiResponse[None](success=True, message="Track deleted successfully", data=None)
