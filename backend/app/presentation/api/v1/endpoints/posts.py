"""Post management endpoints (dashboard surface)."""

from fastapi import APIRouter, Depends, Query, status

from app.application.schemas import PostCreate, PostPageResponse, PostResponse, PostUpdate
from app.application.services import PostQueryService, PostService
from app.domain.entities import AuthSession, PostSearchCriteria
from app.infrastructure.dependencies import (
    get_optional_session,
    get_post_query_service,
    get_post_service,
)
from app.presentation.api.v1.endpoints.blog import to_page_response
from app.presentation.api.v1.endpoints.errors import DOMAIN_ERRORS, http_error

router = APIRouter(prefix="/posts", tags=["Posts"])


@router.get("", response_model=PostPageResponse)
async def list_posts(
    q: str | None = None,
    status_filter: str | None = Query(None, alias="status"),
    category_id: str | None = None,
    author_id: str | None = None,
    page: str | None = None,
    limit: str | None = None,
    session: AuthSession | None = Depends(get_optional_session),
    service: PostQueryService = Depends(get_post_query_service),
) -> PostPageResponse:
    """All posts regardless of status, newest first. Requires ADMIN or WRITER."""
    criteria = PostSearchCriteria(
        query=q, status=status_filter, category_id=category_id, author_id=author_id
    )
    try:
        result = await service.list_posts(session, criteria, page=page, limit=limit)
    except DOMAIN_ERRORS as e:
        raise http_error(e)
    return to_page_response(result)


@router.get("/{post_id}", response_model=PostResponse)
async def get_post(
    post_id: str,
    session: AuthSession | None = Depends(get_optional_session),
    service: PostService = Depends(get_post_service),
) -> PostResponse:
    try:
        post = await service.get_post(session, post_id)
    except DOMAIN_ERRORS as e:
        raise http_error(e)
    return PostResponse.model_validate(post, from_attributes=True)


@router.post("", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
async def create_post(
    data: PostCreate,
    session: AuthSession | None = Depends(get_optional_session),
    service: PostService = Depends(get_post_service),
) -> PostResponse:
    """Create a post authored by the caller."""
    try:
        post = await service.create_post(session, data)
    except DOMAIN_ERRORS as e:
        raise http_error(e)
    return PostResponse.model_validate(post, from_attributes=True)


@router.put("/{post_id}", response_model=PostResponse)
async def update_post(
    post_id: str,
    data: PostUpdate,
    session: AuthSession | None = Depends(get_optional_session),
    service: PostService = Depends(get_post_service),
) -> PostResponse:
    """Update a post. Writers may only edit their own posts."""
    try:
        post = await service.update_post(session, post_id, data)
    except DOMAIN_ERRORS as e:
        raise http_error(e)
    return PostResponse.model_validate(post, from_attributes=True)


@router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_post(
    post_id: str,
    session: AuthSession | None = Depends(get_optional_session),
    service: PostService = Depends(get_post_service),
) -> None:
    try:
        await service.delete_post(session, post_id)
    except DOMAIN_ERRORS as e:
        raise http_error(e)
