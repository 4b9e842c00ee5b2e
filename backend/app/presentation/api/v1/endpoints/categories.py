"""Category endpoints."""

from fastapi import APIRouter, Depends, status

from app.application.schemas import CategoryCreate, CategoryResponse, CategoryUpdate
from app.application.services import CategoryService
from app.domain.entities import AuthSession
from app.infrastructure.dependencies import get_category_service, get_optional_session
from app.presentation.api.v1.endpoints.errors import DOMAIN_ERRORS, http_error

router = APIRouter(prefix="/categories", tags=["Categories"])


@router.get("", response_model=list[CategoryResponse])
async def list_categories(
    service: CategoryService = Depends(get_category_service),
) -> list[CategoryResponse]:
    """All categories ordered by name, with post counts."""
    try:
        categories = await service.list_categories()
    except DOMAIN_ERRORS as e:
        raise http_error(e)
    return [CategoryResponse.model_validate(c, from_attributes=True) for c in categories]


@router.post("", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
async def create_category(
    data: CategoryCreate,
    session: AuthSession | None = Depends(get_optional_session),
    service: CategoryService = Depends(get_category_service),
) -> CategoryResponse:
    try:
        category = await service.create_category(session, data)
    except DOMAIN_ERRORS as e:
        raise http_error(e)
    return CategoryResponse.model_validate(category, from_attributes=True)


@router.put("/{category_id}", response_model=CategoryResponse)
async def update_category(
    category_id: str,
    data: CategoryUpdate,
    session: AuthSession | None = Depends(get_optional_session),
    service: CategoryService = Depends(get_category_service),
) -> CategoryResponse:
    try:
        category = await service.update_category(session, category_id, data)
    except DOMAIN_ERRORS as e:
        raise http_error(e)
    return CategoryResponse.model_validate(category, from_attributes=True)


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_category(
    category_id: str,
    session: AuthSession | None = Depends(get_optional_session),
    service: CategoryService = Depends(get_category_service),
) -> None:
    """Delete a category. Refused with 409 while posts still use it."""
    try:
        await service.delete_category(session, category_id)
    except DOMAIN_ERRORS as e:
        raise http_error(e)
