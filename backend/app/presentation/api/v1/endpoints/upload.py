"""Image upload endpoints backed by the configured image host."""

from fastapi import APIRouter, Depends, File, UploadFile

from app.application.schemas import ImageUploadResponse, MessageResponse
from app.application.services import ImageService
from app.domain.entities import AuthSession
from app.infrastructure.dependencies import get_image_service, get_optional_session
from app.presentation.api.v1.endpoints.errors import DOMAIN_ERRORS, http_error

router = APIRouter(prefix="/upload", tags=["Upload"])


@router.post("", response_model=ImageUploadResponse)
async def upload_image(
    file: UploadFile | None = File(None),
    session: AuthSession | None = Depends(get_optional_session),
    service: ImageService = Depends(get_image_service),
) -> ImageUploadResponse:
    """Upload a JPEG, PNG or WebP image (max 5 MB by default)."""
    try:
        image = await service.upload_image(
            session,
            read=file.read if file is not None else None,
            filename=file.filename if file is not None else None,
            content_type=file.content_type if file is not None else None,
        )
    except DOMAIN_ERRORS as e:
        raise http_error(e)
    return ImageUploadResponse.model_validate(image, from_attributes=True)


@router.delete("", response_model=MessageResponse)
async def delete_image(
    public_id: str | None = None,
    session: AuthSession | None = Depends(get_optional_session),
    service: ImageService = Depends(get_image_service),
) -> MessageResponse:
    try:
        await service.delete_image(session, public_id)
    except DOMAIN_ERRORS as e:
        raise http_error(e)
    return MessageResponse(message="Image deleted successfully")
