"""Pydantic DTOs (Data Transfer Objects) for the Post feature."""

from datetime import datetime

from pydantic import BaseModel, Field, HttpUrl

from app.domain.entities import PostStatus


class PostCreate(BaseModel):
    """Schema for creating a new post. The slug is derived from the title when omitted."""

    title: str = Field(..., min_length=1, max_length=200, examples=["Getting Started with FastAPI"])
    slug: str | None = Field(None, min_length=1, max_length=200, pattern=r"^[a-z0-9]+(?:-[a-z0-9]+)*$")
    excerpt: str | None = None
    content: str = Field(..., min_length=1)
    featured_image: HttpUrl | None = None
    category_id: str | None = None
    tag_ids: list[str] = Field(default_factory=list)
    status: PostStatus = PostStatus.DRAFT
    published: bool = False


class PostUpdate(BaseModel):
    """Schema for updating an existing post: all fields optional.

    Explicit nulls for ``excerpt``, ``featured_image`` and ``category_id``
    clear the field; omitted fields are left untouched.
    """

    title: str | None = Field(None, min_length=1, max_length=200)
    slug: str | None = Field(None, min_length=1, max_length=200, pattern=r"^[a-z0-9]+(?:-[a-z0-9]+)*$")
    excerpt: str | None = None
    content: str | None = Field(None, min_length=1)
    featured_image: HttpUrl | None = None
    category_id: str | None = None
    tag_ids: list[str] | None = None
    status: PostStatus | None = None
    published: bool | None = None


class AuthorSchema(BaseModel):
    id: str
    name: str
    email: str

    model_config = {"from_attributes": True}


class CategorySummarySchema(BaseModel):
    id: str
    name: str
    slug: str
    color: str | None = None

    model_config = {"from_attributes": True}


class TagSummarySchema(BaseModel):
    id: str
    name: str
    slug: str
    color: str | None = None

    model_config = {"from_attributes": True}


class PostResponse(BaseModel):
    """Schema returned to the client."""

    id: str
    title: str
    slug: str
    excerpt: str | None
    content: str
    featured_image: str | None
    status: PostStatus
    published: bool
    published_at: datetime | None
    created_at: datetime
    updated_at: datetime
    author_id: str
    category_id: str | None
    author: AuthorSchema | None = None
    category: CategorySummarySchema | None = None
    tags: list[TagSummarySchema] = Field(default_factory=list)

    model_config = {"from_attributes": True}


class PublishedPostResponse(BaseModel):
    """A public post plus the most recent other posts."""

    post: PostResponse
    related: list[PostResponse]
