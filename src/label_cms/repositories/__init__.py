"""Repositories translating entity operations into SQL."""

from label_cms.repositories.base import (
    DEFAULT_LIMIT,
    BaseRepository,
    CrudRepository,
    coerce_limit,
    validate_fields,
)
from label_cms.repositories.news import NewsRepository
from label_cms.repositories.release import ReleaseRepository
from label_cms.repositories.track import TrackRepository
from label_cms.repositories.user import UserRepository

__all__ = [
    "DEFAULT_LIMIT",
    "BaseRepository",
    "CrudRepository",
    "NewsRepository",
    "ReleaseRepository",
    "TrackRepository",
    "UserRepository",
    "coerce_limit",
    "validate_fields",
]
