"""Pydantic schemas for request/response validation."""

from label_cms.schemas.common import ApiResponse, CamelModel, EntityId, PartialUpdate
from label_cms.schemas.external import OAuthToken, OAuthUserInfo
from label_cms.schemas.news import NewsCreate, NewsResponse, NewsUpdate
from label_cms.schemas.release import (
    ReleaseCreate,
    ReleaseResponse,
    ReleaseUpdate,
    ReleaseWithTracks,
)
from label_cms.schemas.track import TrackCreate, TrackResponse, TrackUpdate
from label_cms.schemas.upload import UploadResult
from label_cms.schemas.user import UserAttributes, UserResponse

__all__ = [
    # Envelope and shared bases
    "ApiResponse",
    "CamelModel",
    "EntityId",
    "PartialUpdate",
    # Identity provider schemas
    "OAuthToken",
    "OAuthUserInfo",
    # Release schemas
    "ReleaseCreate",
    "ReleaseUpdate",
    "ReleaseResponse",
    "ReleaseWithTracks",
    # Track schemas
    "TrackCreate",
    "TrackUpdate",
    "TrackResponse",
    # News schemas
    "NewsCreate",
    "NewsUpdate",
    "NewsResponse",
    # User schemas
    "UserAttributes",
    "UserResponse",
    # Upload schemas
    "UploadResult",
]
