from .post import (
    AuthorSchema,
    CategorySummarySchema,
    PostCreate,
    PostResponse,
    PostUpdate,
    PublishedPostResponse,
    TagSummarySchema,
)
from .taxonomy import (
    CategoryCreate,
    CategoryResponse,
    CategoryUpdate,
    TagCreate,
    TagResponse,
)
from .search import (
    AuthorFacetSchema,
    PaginationSchema,
    PostPageResponse,
    SearchFacetsResponse,
    SearchResponse,
    SearchResultSchema,
)
from .auth import LoginRequest, RegisterRequest, TokenResponse, UserResponse
from .upload import ImageUploadResponse, MessageResponse

__all__ = [
    "AuthorSchema",
    "CategorySummarySchema",
    "PostCreate",
    "PostResponse",
    "PostUpdate",
    "PublishedPostResponse",
    "TagSummarySchema",
    "CategoryCreate",
    "CategoryResponse",
    "CategoryUpdate",
    "TagCreate",
    "TagResponse",
    "AuthorFacetSchema",
    "PaginationSchema",
    "PostPageResponse",
    "SearchFacetsResponse",
    "SearchResponse",
    "SearchResultSchema",
    "LoginRequest",
    "RegisterRequest",
    "TokenResponse",
    "UserResponse",
    "ImageUploadResponse",
    "MessageResponse",
]
