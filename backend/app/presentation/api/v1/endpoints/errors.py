"""Domain exception → HTTPException translation shared by the endpoints."""

import logging

from fastapi import HTTPException, status

from app.domain.exceptions import (
    DuplicateEntityError,
    EntityNotFoundError,
    ForbiddenError,
    ImageHostingError,
    StoreError,
    UnauthenticatedError,
    ValidationError,
)

logger = logging.getLogger(__name__)

DOMAIN_ERRORS = (
    ValidationError,
    UnauthenticatedError,
    ForbiddenError,
    EntityNotFoundError,
    DuplicateEntityError,
    StoreError,
    ImageHostingError,
)


def http_error(exc: Exception) -> HTTPException:
    """Map one of DOMAIN_ERRORS onto its HTTP status."""
    if isinstance(exc, ValidationError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
    if isinstance(exc, UnauthenticatedError):
        return HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(exc),
            headers={"WWW-Authenticate": "Bearer"},
        )
    if isinstance(exc, ForbiddenError):
        return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(exc))
    if isinstance(exc, EntityNotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    if isinstance(exc, DuplicateEntityError):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))
    if isinstance(exc, ImageHostingError):
        return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=exc.message)
    logger.error("Unhandled store failure: %s", exc)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal server error"
    )
