"""News API endpoints."""

from typing import Annotated, Any

from fastapi import APIRouter, Body, Query

from label_cms.api.dependencies import NewsRepo, parse_id, pop_id
from label_cms.exceptions import NotFoundError
from label_cms.repositories.base import DEFAULT_LIMIT
from label_cms.schemas.common import ApiResponse, EntityId
from label_cms.schemas.news import NewsResponse

router = APIRouter(prefix="/news", tags=["news"])


@router.get("", response_model=None)
async def get_news(
    repo: NewsRepo,
    action: str | None = Query(None, description="latest | getById; omit to list all"),
    limit: str | None = Query(None, description="Maximum results for action=latest"),
    id: str | None = Query(None, description="Article ID for action=getById"),
) -> ApiResponse:
    """List or look up news articles, most recently published first."""
    if action == "latest":
        articles = await repo.list_latest(limit if limit is not None else DEFAULT_LIMIT)
        return ApiResponse[list[NewsResponse]](
            success=True,
            message="Latest news retrieved successfully",
            data=[NewsResponse.model_validate(a) for a in articles],
        )

    if action == "getById":
        article = await repo.get_by_id(parse_id(id, "ID parameter is required"))
        if article is None:
            raise NotFoundError("News article not found")
        return ApiResponse[NewsResponse](
            success=True,
            message="News article retrieved successfully",
            data=NewsResponse.model_validate(article),
        )

    articles = await repo.list_all()
    return ApiResponse[list[NewsResponse]](
        success=True,
        message="All news retrieved successfully",
        data=[NewsResponse.model_validate(a) for a in articles],
    )


@router.post("", response_model=ApiResponse[EntityId], status_code=201)
async def create_news(
    payload: Annotated[dict[str, Any], Body()],
    repo: NewsRepo,
) -> ApiResponse[EntityId]:
    """Publish a news article.

    Requires title and content; publishDate defaults to now.
    """
    article_id = await repo.create(payload)
    return ApiResponse[EntityId](
        success=True,
        message="News article created successfully",
        data=EntityId(id=article_id),
    )


@router.put("", response_model=ApiResponse[EntityId])
async def update_news(
    payload: Annotated[dict[str, Any], Body()],
    repo: NewsRepo,
) -> ApiResponse[EntityId]:
    """Update the supplied fields of a news article."""
    repo.authorize_write()
    article_id = pop_id(payload, "update")
    await repo.update(article_id, payload)
    return ApiResponse[EntityId](
        success=True,
        message="News article updated successfully",
        data=EntityId(id=article_id),
    )


@router.delete("", response_model=ApiResponse[None])
async def delete_news(
    payload: Annotated[dict[str, Any], Body()],
    repo: NewsRepo,
) -> ApiResponse[None]:
    repo.authorize_write()
    article_id = pop_id(payload, "delete")
    await repo.delete(article_id)
    return ApiResponse[None](success=True, message="News article deleted successfully", data=None)
