"""Public blog endpoints: the post grid, single posts and filter facets."""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.application.schemas import (
    AuthorFacetSchema,
    CategoryResponse,
    PaginationSchema,
    PostPageResponse,
    PostResponse,
    PublishedPostResponse,
    SearchFacetsResponse,
)
from app.application.services import PostQueryService
from app.domain.entities import PostPage, PostSearchCriteria
from app.domain.exceptions import EntityNotFoundError, ValidationError
from app.infrastructure.dependencies import get_post_query_service

router = APIRouter(prefix="/blog", tags=["Blog"])


def to_page_response(result: PostPage) -> PostPageResponse:
    return PostPageResponse(
        items=[PostResponse.model_validate(p, from_attributes=True) for p in result.items],
        pagination=PaginationSchema.model_validate(result.pagination, from_attributes=True),
        filters=result.filters,
        degraded=result.degraded,
    )


@router.get("/posts", response_model=PostPageResponse)
async def list_public_posts(
    q: str | None = None,
    category: str | None = None,
    author: str | None = None,
    date_from: str | None = Query(None, alias="dateFrom"),
    date_to: str | None = Query(None, alias="dateTo"),
    page: str | None = None,
    service: PostQueryService = Depends(get_post_query_service),
) -> PostPageResponse:
    """Public grid of published posts, newest first."""
    criteria = PostSearchCriteria(
        query=q, category=category, author=author, date_from=date_from, date_to=date_to
    )
    try:
        result = await service.list_public_posts(criteria, page=page)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return to_page_response(result)


@router.get("/posts/{slug}", response_model=PublishedPostResponse)
async def get_published_post(
    slug: str,
    service: PostQueryService = Depends(get_post_query_service),
) -> PublishedPostResponse:
    """A published post by slug plus the latest other posts."""
    try:
        post, related = await service.get_published_post(slug)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return PublishedPostResponse(
        post=PostResponse.model_validate(post, from_attributes=True),
        related=[PostResponse.model_validate(p, from_attributes=True) for p in related],
    )


@router.get("/facets", response_model=SearchFacetsResponse)
async def get_facets(
    service: PostQueryService = Depends(get_post_query_service),
) -> SearchFacetsResponse:
    categories, authors = await service.get_facets()
    total = await service.count_public_posts()
    return SearchFacetsResponse(
        categories=[CategoryResponse.model_validate(c, from_attributes=True) for c in categories],
        authors=[AuthorFacetSchema.model_validate(a, from_attributes=True) for a in authors],
        total_posts=total,
    )
