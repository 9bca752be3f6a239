"""Release repository."""

import logging
from typing import Any

from sqlalchemy import select

from label_cms.models.release import Release
from label_cms.models.track import Track
from label_cms.repositories.base import DEFAULT_LIMIT, CrudRepository, coerce_limit
from label_cms.repositories.track import TrackRepository
from label_cms.schemas.release import ReleaseCreate, ReleaseUpdate

logger = logging.getLogger(__name__)


class ReleaseRepository(CrudRepository[Release]):
    """Releases and the cascade to their tracks."""

    model = Release
    create_schema = ReleaseCreate
    update_schema = ReleaseUpdate
    entity_name = "Release"

    def _ordering(self) -> tuple[Any, ...]:
        # Newest first
        return (Release.release_date.desc(), Release.id.desc())

    async def list_latest(self, limit: Any = DEFAULT_LIMIT) -> list[Release]:
        """Return the newest ``limit`` releases (default 5)."""
        stmt = select(Release).order_by(*self._ordering()).limit(coerce_limit(limit))
        return await self._fetch_all(stmt)

    async def get_with_tracks(self, release_id: int) -> tuple[Release, list[Track]] | None:
        """Return a release with its tracks ordered by track number, or None."""
        release = await self.get_by_id(release_id)
        if release is None:
            return None
        tracks = await TrackRepository(self.session, self.actor).list_by_release(release_id)
        return release, tracks

    async def delete(self, entity_id: int) -> None:
        """Delete a release together with all of its tracks.

        Tracks go first and both deletes share one transaction, so a failure
        leaves neither orphaned tracks nor a half-deleted release.
        """
        self.authorize_write()

        async with self._transaction():
            release = await self._get_for_write(entity_id)
            removed = await TrackRepository(self.session, self.actor).delete_by_release(entity_id)
            await self.session.delete(release)

        logger.info("Deleted release %s and %d track(s)", entity_id, removed)
