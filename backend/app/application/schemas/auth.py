"""Pydantic schemas for registration, login and the current user."""

from datetime import datetime

from pydantic import BaseModel, Field

from app.domain.entities import UserRole

_EMAIL = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class RegisterRequest(BaseModel):
    name: str = Field(..., min_length=2, max_length=100)
    email: str = Field(..., max_length=255, pattern=_EMAIL)
    password: str = Field(..., min_length=8, max_length=128)


class LoginRequest(BaseModel):
    email: str = Field(..., pattern=_EMAIL)
    password: str = Field(..., min_length=1)


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int


class UserResponse(BaseModel):
    """A user as returned to clients: never includes the password hash."""

    id: str
    email: str
    name: str
    role: UserRole
    email_verified: datetime | None = None
    created_at: datetime

    model_config = {"from_attributes": True}
