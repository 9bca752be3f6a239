"""Pydantic schemas for news API endpoints."""

from datetime import datetime
from typing import ClassVar

from pydantic import ConfigDict, Field, field_validator

from label_cms.schemas.common import CamelModel, NonEmptyStr, PartialUpdate
from label_cms.utils.timestamps import to_naive_utc


class NewsCreate(CamelModel):
    """Fields accepted when publishing a news article."""

    title: NonEmptyStr = Field(description="Headline")
    content: NonEmptyStr = Field(description="Article body")
    excerpt: str | None = Field(default=None, description="Short teaser text")
    image_url: str | None = Field(default=None, description="Header image URL")
    publish_date: datetime | None = Field(
        default=None, description="Publication time (defaults to now)"
    )

    @field_validator("publish_date")
    @classmethod
    def normalize_publish_date(cls, v: datetime | None) -> datetime | None:
        """Store publication times as naive UTC."""
        return to_naive_utc(v) if v is not None else None


class NewsUpdate(PartialUpdate):
    """Partial news update."""

    non_nullable: ClassVar[tuple[str, ...]] = ("title", "content", "publish_date")

    title: NonEmptyStr | None = None
    content: NonEmptyStr | None = None
    excerpt: str | None = None
    image_url: str | None = None
    publish_date: datetime | None = None

    @field_validator("publish_date")
    @classmethod
    def normalize_publish_date(cls, v: datetime | None) -> datetime | None:
        """Store publication times as naive UTC."""
        return to_naive_utc(v) if v is not None else None


class NewsResponse(CamelModel):
    """News article as returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    id: int = Field(description="Article ID")
    title: str = Field(description="Headline")
    excerpt: str | None = Field(default=None, description="Short teaser text")
    content: str = Field(description="Article body")
    image_url: str | None = Field(default=None, description="Header image URL")
    publish_date: datetime = Field(description="Publication time")
    created_at: datetime = Field(description="When the article was created")
    updated_at: datetime = Field(description="When the article was last updated")
