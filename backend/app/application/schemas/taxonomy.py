"""Pydantic DTOs for categories and tags."""

from datetime import datetime

from pydantic import BaseModel, Field

_HEX_COLOR = r"^#[0-9A-Fa-f]{6}$"
_SLUG = r"^[a-z0-9]+(?:-[a-z0-9]+)*$"


class CategoryCreate(BaseModel):
    """Schema for creating a category. The slug is derived from the name when omitted."""

    name: str = Field(..., min_length=1, max_length=100, examples=["Web Development"])
    slug: str | None = Field(None, min_length=1, max_length=100, pattern=_SLUG)
    description: str | None = None
    color: str | None = Field(None, pattern=_HEX_COLOR, examples=["#3B82F6"])


class CategoryUpdate(BaseModel):
    """Schema for updating a category: all fields optional."""

    name: str | None = Field(None, min_length=1, max_length=100)
    slug: str | None = Field(None, min_length=1, max_length=100, pattern=_SLUG)
    description: str | None = None
    color: str | None = Field(None, pattern=_HEX_COLOR)


class CategoryResponse(BaseModel):
    id: str
    name: str
    slug: str
    description: str | None
    color: str
    post_count: int = 0
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class TagCreate(BaseModel):
    """Schema for creating a tag. The slug is derived from the name when omitted."""

    name: str = Field(..., min_length=1, max_length=50, examples=["FastAPI"])
    slug: str | None = Field(None, min_length=1, max_length=50, pattern=_SLUG)
    color: str | None = Field(None, pattern=_HEX_COLOR, examples=["#10B981"])


class TagResponse(BaseModel):
    id: str
    name: str
    slug: str
    color: str
    post_count: int = 0
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
