"""Pydantic schemas for release API endpoints."""

from datetime import date, datetime
from typing import ClassVar

from pydantic import ConfigDict, Field

from label_cms.models.release import ReleaseFormat
from label_cms.schemas.common import CamelModel, NonEmptyStr, PartialUpdate
from label_cms.schemas.track import TrackResponse


class ReleaseCreate(CamelModel):
    """Fields accepted when creating a release."""

    title: NonEmptyStr = Field(description="Release title")
    artist: NonEmptyStr = Field(description="Primary artist")
    release_date: date = Field(description="Release date (YYYY-MM-DD)")
    format: ReleaseFormat = Field(description="Release format")
    description: str | None = Field(default=None, description="Liner notes / description")
    image_url: str | None = Field(default=None, description="Cover art URL")
    audio_preview_url: str | None = Field(default=None, description="Audio preview URL")
    youtube_link: str | None = Field(default=None, description="YouTube link")
    spotify_link: str | None = Field(default=None, description="Spotify link")
    apple_music_link: str | None = Field(default=None, description="Apple Music link")
    store_link: str | None = Field(default=None, description="Store link")


class ReleaseUpdate(PartialUpdate):
    """Partial release update."""

    non_nullable: ClassVar[tuple[str, ...]] = ("title", "artist", "release_date", "format")

    title: NonEmptyStr | None = None
    artist: NonEmptyStr | None = None
    release_date: date | None = None
    format: ReleaseFormat | None = None
    description: str | None = None
    image_url: str | None = None
    audio_preview_url: str | None = None
    youtube_link: str | None = None
    spotify_link: str | None = None
    apple_music_link: str | None = None
    store_link: str | None = None


class ReleaseResponse(CamelModel):
    """Release as returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    id: int = Field(description="Release ID")
    title: str = Field(description="Release title")
    artist: str = Field(description="Primary artist")
    release_date: date = Field(description="Release date")
    format: ReleaseFormat = Field(description="Release format")
    description: str | None = Field(default=None, description="Liner notes / description")
    image_url: str | None = Field(default=None, description="Cover art URL")
    audio_preview_url: str | None = Field(default=None, description="Audio preview URL")
    youtube_link: str | None = Field(default=None, description="YouTube link")
    spotify_link: str | None = Field(default=None, description="Spotify link")
    apple_music_link: str | None = Field(default=None, description="Apple Music link")
    store_link: str | None = Field(default=None, description="Store link")
    created_at: datetime = Field(description="When the release was created")
    updated_at: datetime = Field(description="When the release was last updated")


class ReleaseWithTracks(ReleaseResponse):
    """Release with its tracks ordered by track number."""

    tracks: list[TrackResponse] = Field(default_factory=list, description="Release tracks")
