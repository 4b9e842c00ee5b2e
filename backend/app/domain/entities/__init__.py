from .post import Author, Post, PostStatus
from .taxonomy import Category, Tag, DEFAULT_CATEGORY_COLOR, DEFAULT_TAG_COLOR
from .user import AuthSession, User, UserRole
from .site import SiteProfile
from .search import (
    AuthorFacet,
    FilterOperator,
    PageInfo,
    PostField,
    PostFilter,
    PostOrdering,
    PostPage,
    PostPredicate,
    PostSearchCriteria,
)

__all__ = [
    "Author",
    "Post",
    "PostStatus",
    "Category",
    "Tag",
    "DEFAULT_CATEGORY_COLOR",
    "DEFAULT_TAG_COLOR",
    "AuthSession",
    "User",
    "UserRole",
    "SiteProfile",
    "AuthorFacet",
    "FilterOperator",
    "PageInfo",
    "PostField",
    "PostFilter",
    "PostOrdering",
    "PostPage",
    "PostPredicate",
    "PostSearchCriteria",
]
