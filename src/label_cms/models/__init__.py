"""SQLAlchemy ORM models."""

from label_cms.models.news import News
from label_cms.models.release import Release, ReleaseFormat
from label_cms.models.track import Track
from label_cms.models.user import User, UserRole

__all__ = [
    "News",
    "Release",
    "ReleaseFormat",
    "Track",
    "User",
    "UserRole",
]
