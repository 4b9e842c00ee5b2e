"""Domain entities for post search: filter predicates and page envelopes."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from app.domain.entities.post import Post


class PostField(str, Enum):
    """Post attributes a predicate may constrain; dotted names follow relations."""

    TITLE = "title"
    SLUG = "slug"
    EXCERPT = "excerpt"
    CONTENT = "content"
    STATUS = "status"
    PUBLISHED = "published"
    PUBLISHED_AT = "published_at"
    CATEGORY_ID = "category_id"
    AUTHOR_ID = "author_id"
    CATEGORY_SLUG = "category.slug"
    AUTHOR_NAME = "author.name"


class FilterOperator(str, Enum):
    EQUALS = "equals"
    NOT_EQUALS = "not_equals"
    CONTAINS = "contains"  # case-insensitive substring
    GTE = "gte"
    LTE = "lte"


class PostOrdering(str, Enum):
    """Sort orders used by the listing surfaces."""

    PUBLISHED_DESC = "published_desc"  # published_at desc, then created_at desc
    CREATED_DESC = "created_desc"


@dataclass(frozen=True)
class PostFilter:
    """A single leaf constraint on one post field."""

    field_name: PostField
    value: Any
    operator: FilterOperator = FilterOperator.EQUALS


@dataclass(frozen=True)
class PostPredicate:
    """AND of ``filters`` plus, when non-empty, an OR group ``any_of``."""

    filters: tuple[PostFilter, ...] = ()
    any_of: tuple[PostFilter, ...] = ()

    def find(self, field_name: PostField) -> list[PostFilter]:
        """Return the AND-ed leaves that constrain ``field_name``."""
        return [f for f in self.filters if f.field_name == field_name]


@dataclass
class PostSearchCriteria:
    """Raw, untrusted search parameters as they arrive from the query string."""

    query: str | None = None
    category: str | None = None
    author: str | None = None
    date_from: str | None = None
    date_to: str | None = None
    status: str | None = None
    category_id: str | None = None
    author_id: str | None = None

    def echo(self) -> dict[str, str]:
        """The user-facing filters, blank when absent."""
        return {
            "query": self.query or "",
            "category": self.category or "",
            "author": self.author or "",
            "date_from": self.date_from or "",
            "date_to": self.date_to or "",
        }


@dataclass(frozen=True)
class PageInfo:
    """Pagination arithmetic for one page of a result set."""

    page: int
    limit: int
    total_count: int
    total_pages: int
    skip: int
    take: int
    has_next: bool
    has_prev: bool


@dataclass
class PostPage:
    """Page envelope: one page of posts plus its pagination.

    ``degraded`` is True when the content store was unreachable and the
    envelope is the empty fallback rather than real data.
    """

    items: list[Post]
    pagination: PageInfo
    filters: dict[str, str] = field(default_factory=dict)
    degraded: bool = False


@dataclass
class AuthorFacet:
    """An author with at least one public post."""

    id: str
    name: str
