"""Pydantic schemas for paginated listings and search results."""

from pydantic import BaseModel, Field

from app.application.schemas.post import PostResponse
from app.application.schemas.taxonomy import CategoryResponse


class PaginationSchema(BaseModel):
    page: int
    limit: int
    total_count: int
    total_pages: int
    has_next: bool
    has_prev: bool

    model_config = {"from_attributes": True}


class PostPageResponse(BaseModel):
    """Page envelope for post listings."""

    items: list[PostResponse]
    pagination: PaginationSchema
    filters: dict[str, str] = Field(default_factory=dict)
    degraded: bool = False


class SearchResultSchema(PostResponse):
    """A post as shown in search results, with a short snippet and highlighted title."""

    snippet: str
    highlighted_title: str


class SearchResponse(BaseModel):
    items: list[SearchResultSchema]
    pagination: PaginationSchema
    filters: dict[str, str] = Field(default_factory=dict)
    degraded: bool = False


class AuthorFacetSchema(BaseModel):
    id: str
    name: str

    model_config = {"from_attributes": True}


class SearchFacetsResponse(BaseModel):
    """Filter options for the public blog: categories and authors."""

    categories: list[CategoryResponse]
    authors: list[AuthorFacetSchema]
    total_posts: int
