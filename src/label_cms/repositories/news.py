"""News repository."""

from typing import Any

from sqlalchemy import select

from label_cms.models.news import News
from label_cms.repositories.base import DEFAULT_LIMIT, CrudRepository, coerce_limit
from label_cms.schemas.news import NewsCreate, NewsUpdate


class NewsRepository(CrudRepository[News]):
    """News articles, newest publication first."""

    model = News
    create_schema = NewsCreate
    update_schema = NewsUpdate
    entity_name = "News article"

    def _ordering(self) -> tuple[Any, ...]:
        return (News.publish_date.desc(), News.id.desc())

    async def list_latest(self, limit: Any = DEFAULT_LIMIT) -> list[News]:
        """Return the ``limit`` most recently published articles (default 5)."""
        stmt = select(News).order_by(*self._ordering()).limit(coerce_limit(limit))
        return await self._fetch_all(stmt)
