"""Registration, login and current-user endpoints."""

from fastapi import APIRouter, Depends, status

from app.application.schemas import LoginRequest, RegisterRequest, TokenResponse, UserResponse
from app.application.services import AuthService
from app.domain.entities import AuthSession
from app.infrastructure.dependencies import get_auth_service, get_optional_session
from app.presentation.api.v1.endpoints.errors import DOMAIN_ERRORS, http_error

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register(
    data: RegisterRequest,
    service: AuthService = Depends(get_auth_service),
) -> UserResponse:
    """Create a reader account (role USER)."""
    try:
        user = await service.register(data)
    except DOMAIN_ERRORS as e:
        raise http_error(e)
    return UserResponse.model_validate(user, from_attributes=True)


@router.post("/login", response_model=TokenResponse)
async def login(
    data: LoginRequest,
    service: AuthService = Depends(get_auth_service),
) -> TokenResponse:
    """Exchange email and password for a bearer token."""
    try:
        token = await service.login(data)
    except DOMAIN_ERRORS as e:
        raise http_error(e)
    return TokenResponse(access_token=token, expires_in=service.token_lifetime)


@router.get("/me", response_model=UserResponse)
async def me(
    session: AuthSession | None = Depends(get_optional_session),
    service: AuthService = Depends(get_auth_service),
) -> UserResponse:
    try:
        user = await service.get_current_user(session)
    except DOMAIN_ERRORS as e:
        raise http_error(e)
    return UserResponse.model_validate(user, from_attributes=True)
