"""Tag endpoints."""

from fastapi import APIRouter, Depends, status

from app.application.schemas import TagCreate, TagResponse
from app.application.services import TagService
from app.domain.entities import AuthSession
from app.infrastructure.dependencies import get_optional_session, get_tag_service
from app.presentation.api.v1.endpoints.errors import DOMAIN_ERRORS, http_error

router = APIRouter(prefix="/tags", tags=["Tags"])


@router.get("", response_model=list[TagResponse])
async def list_tags(
    service: TagService = Depends(get_tag_service),
) -> list[TagResponse]:
    try:
        tags = await service.list_tags()
    except DOMAIN_ERRORS as e:
        raise http_error(e)
    return [TagResponse.model_validate(t, from_attributes=True) for t in tags]


@router.post("", response_model=TagResponse, status_code=status.HTTP_201_CREATED)
async def create_tag(
    data: TagCreate,
    session: AuthSession | None = Depends(get_optional_session),
    service: TagService = Depends(get_tag_service),
) -> TagResponse:
    try:
        tag = await service.create_tag(session, data)
    except DOMAIN_ERRORS as e:
        raise http_error(e)
    return TagResponse.model_validate(tag, from_attributes=True)


@router.delete("/{tag_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_tag(
    tag_id: str,
    session: AuthSession | None = Depends(get_optional_session),
    service: TagService = Depends(get_tag_service),
) -> None:
    """Delete a tag; posts keep existing without it."""
    try:
        await service.delete_tag(session, tag_id)
    except DOMAIN_ERRORS as e:
        raise http_error(e)
