"""Track repository."""

import logging
from typing import Any

from sqlalchemy import delete, select

from label_cms.models.release import Release
from label_cms.models.track import Track
from label_cms.repositories.base import CrudRepository
from label_cms.schemas.track import TrackCreate, TrackUpdate

logger = logging.getLogger(__name__)


class TrackRepository(CrudRepository[Track]):
    """Tracks, always owned by a release."""

    model = Track
    create_schema = TrackCreate
    update_schema = TrackUpdate
    entity_name = "Track"

    def _ordering(self) -> tuple[Any, ...]:
        return (Track.release_id, Track.track_number, Track.id)

    def _extra_create_values(self, now: Any) -> dict[str, Any]:
        return {}

    async def list_by_release(self, release_id: int) -> list[Track]:
        """Return the tracks of one release by track number.

        An unknown release simply has no tracks.
        """
        stmt = (
            select(Track)
            .where(Track.release_id == release_id)
            .order_by(Track.track_number, Track.id)
        )
        return await self._fetch_all(stmt)

    async def _before_create(self, data: TrackCreate) -> None:
        # Release existence is advisory only; the insert goes ahead regardless
        if await self.session.get(Release, data.release_id) is None:
            logger.warning(
                "Adding track '%s' to release %s which does not exist (yet)",
                data.title,
                data.release_id,
            )

    async def delete_by_release(self, release_id: int) -> int:
        """Delete all tracks of a release inside the caller's transaction.

        Does not commit and is a no-op when the release has no tracks.
        Returns the number of tracks removed.
        """
        result = await self.session.execute(delete(Track).where(Track.release_id == release_id))
        return result.rowcount or 0
