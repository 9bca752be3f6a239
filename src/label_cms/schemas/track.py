"""Pydantic schemas for track API endpoints."""

from datetime import datetime
from typing import Annotated, ClassVar

from pydantic import ConfigDict, Field, StringConstraints

from label_cms.schemas.common import MAX_SQL_INT, CamelModel, NonEmptyStr, PartialUpdate

# M:SS or MM:SS
TrackLength = Annotated[
    str, StringConstraints(strip_whitespace=True, pattern=r"^\d{1,2}:[0-5]\d$")
]


class TrackCreate(CamelModel):
    """Fields accepted when adding a track to a release."""

    release_id: int = Field(gt=0, le=MAX_SQL_INT, description="ID of the owning release")
    track_number: int = Field(gt=0, le=MAX_SQL_INT, description="Position within the release")
    artist: NonEmptyStr = Field(description="Performing artist")
    title: NonEmptyStr = Field(description="Track title")
    length: TrackLength = Field(description="Duration formatted M:SS or MM:SS")


class TrackUpdate(PartialUpdate):
    """Partial track update."""

    non_nullable: ClassVar[tuple[str, ...]] = (
        "release_id",
        "track_number",
        "artist",
        "title",
        "length",
    )

    release_id: int | None = Field(default=None, gt=0, le=MAX_SQL_INT)
    track_number: int | None = Field(default=None, gt=0, le=MAX_SQL_INT)
    artist: NonEmptyStr | None = None
    title: NonEmptyStr | None = None
    length: TrackLength | None = None


class TrackResponse(CamelModel):
    """Track as returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    id: int = Field(description="Track ID")
    release_id: int = Field(description="ID of the owning release")
    track_number: int = Field(description="Position within the release")
    artist: str = Field(description="Performing artist")
    title: str = Field(description="Track title")
    length: str = Field(description="Duration (M:SS)")
    created_at: datetime = Field(description="When the track was created")
