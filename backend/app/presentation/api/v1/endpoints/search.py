"""Public search endpoint."""

from fastapi import APIRouter, Depends, HTTPException, Query

from app.application.schemas import (
    PaginationSchema,
    PostResponse,
    SearchResponse,
    SearchResultSchema,
)
from app.application.services import PostQueryService
from app.application.services.content_text import highlight_search_term, truncate_content
from app.domain.entities import Post, PostSearchCriteria
from app.domain.exceptions import ValidationError
from app.infrastructure.dependencies import get_post_query_service

router = APIRouter(prefix="/search", tags=["Search"])

SNIPPET_LENGTH = 150


def _to_result(post: Post, query: str) -> SearchResultSchema:
    base = PostResponse.model_validate(post, from_attributes=True)
    snippet = truncate_content(post.excerpt or post.content, SNIPPET_LENGTH)
    return SearchResultSchema(
        **base.model_dump(),
        snippet=highlight_search_term(snippet, query),
        highlighted_title=highlight_search_term(post.title, query),
    )


@router.get("", response_model=SearchResponse)
async def search_posts(
    q: str | None = None,
    category: str | None = None,
    author: str | None = None,
    date_from: str | None = Query(None, alias="dateFrom"),
    date_to: str | None = Query(None, alias="dateTo"),
    page: str | None = None,
    limit: str | None = None,
    service: PostQueryService = Depends(get_post_query_service),
) -> SearchResponse:
    """Search public posts by text, category slug, author name and date range."""
    criteria = PostSearchCriteria(
        query=q, category=category, author=author, date_from=date_from, date_to=date_to
    )
    try:
        result = await service.search_posts(criteria, page=page, limit=limit)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    query = (q or "").strip()
    return SearchResponse(
        items=[_to_result(post, query) for post in result.items],
        pagination=PaginationSchema.model_validate(result.pagination, from_attributes=True),
        filters=result.filters,
        degraded=result.degraded,
    )
