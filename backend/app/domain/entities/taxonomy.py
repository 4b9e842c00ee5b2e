"""Domain entities for post classification: categories and tags."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import uuid4

DEFAULT_CATEGORY_COLOR = "#3B82F6"
DEFAULT_TAG_COLOR = "#10B981"


@dataclass
class Category:
    """A single-valued grouping of posts."""

    name: str
    slug: str
    description: str | None = None
    color: str = DEFAULT_CATEGORY_COLOR
    id: str = field(default_factory=lambda: str(uuid4()))
    post_count: int = 0
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def update(
        self,
        name: str | None = None,
        slug: str | None = None,
        description: str | None = ...,  # type: ignore[assignment]
        color: str | None = None,
    ) -> None:
        """Update mutable fields and refresh the updated_at timestamp."""
        if name is not None:
            self.name = name
        if slug is not None:
            self.slug = slug
        if description is not ...:
            self.description = description
        if color is not None:
            self.color = color
        self.updated_at = datetime.now(timezone.utc)


@dataclass
class Tag:
    """A free-form label; posts carry any number of them."""

    name: str
    slug: str
    color: str = DEFAULT_TAG_COLOR
    id: str = field(default_factory=lambda: str(uuid4()))
    post_count: int = 0
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
