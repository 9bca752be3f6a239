"""Shared route dependencies and selector parsing."""

from typing import Annotated, Any

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from label_cms.database import get_db
from label_cms.exceptions import ValidationError
from label_cms.repositories import NewsRepository, ReleaseRepository, TrackRepository
from label_cms.schemas.common import MAX_SQL_INT
from label_cms.utils.security import CurrentPrincipal


async def get_release_repository(
    principal: CurrentPrincipal,
    db: AsyncSession = Depends(get_db),
) -> ReleaseRepository:
    """Release repository bound to the request session and caller."""
    return ReleaseRepository(db, principal)


async def get_track_repository(
    principal: CurrentPrincipal,
    db: AsyncSession = Depends(get_db),
) -> TrackRepository:
    """Track repository bound to the request session and caller."""
    return TrackRepository(db, principal)


async def get_news_repository(
    principal: CurrentPrincipal,
    db: AsyncSession = Depends(get_db),
) -> NewsRepository:
    """News repository bound to the request session and caller."""
    return NewsRepository(db, principal)


ReleaseRepo = Annotated[ReleaseRepository, Depends(get_release_repository)]
TrackRepo = Annotated[TrackRepository, Depends(get_track_repository)]
NewsRepo = Annotated[NewsRepository, Depends(get_news_repository)]


def parse_id(value: Any, required_message: str) -> int:
    """Parse an id selector from a query string or request body.

    Raises:
        ValidationError: If the value is missing or not a positive integer.
    """
    if value is None or value == "":
        raise ValidationError(required_message)
    if isinstance(value, bool):
        raise ValidationError("ID must be a positive integer")

    try:
        parsed = int(value)
    except (TypeError, ValueError, OverflowError):
        raise ValidationError("ID must be a positive integer") from None

    if isinstance(value, float) and value != parsed:
        raise ValidationError("ID must be a positive integer")
    if parsed < 1 or parsed > MAX_SQL_INT:
        raise ValidationError("ID must be a positive integer")
    return parsed


def pop_id(payload: dict[str, Any], action: str) -> int:
    """Remove and parse the ``id`` key of a write body."""
    return parse_id(payload.pop("id", None), f"ID is required for {action}")
