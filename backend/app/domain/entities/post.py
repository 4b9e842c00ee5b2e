"""Domain entities: pure Python business objects, no framework dependencies."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from uuid import uuid4

from app.domain.entities.taxonomy import Category, Tag


class PostStatus(str, Enum):
    """Editorial lifecycle of a post."""

    DRAFT = "DRAFT"
    PUBLISHED = "PUBLISHED"
    ARCHIVED = "ARCHIVED"

    @classmethod
    def parse(cls, raw: str | None) -> "PostStatus | None":
        """Return the matching status, or None for absent/unknown values."""
        if raw is None:
            return None
        try:
            return cls(raw)
        except ValueError:
            return None


@dataclass
class Author:
    """Public projection of the user who wrote a post."""

    id: str
    name: str
    email: str = ""


@dataclass
class Post:
    """Core domain entity representing a blog post.

    ``published`` and ``status`` are stored separately; ``published_at`` is
    derived from both and is only ever set through :meth:`apply_publication`.
    """

    title: str
    slug: str
    content: str
    author_id: str
    excerpt: str | None = None
    featured_image: str | None = None
    status: PostStatus = PostStatus.DRAFT
    published: bool = False
    published_at: datetime | None = None
    category_id: str | None = None
    tags: list[Tag] = field(default_factory=list)
    author: Author | None = None
    category: Category | None = None
    id: str = field(default_factory=lambda: str(uuid4()))
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def is_public(self) -> bool:
        return self.published and self.status == PostStatus.PUBLISHED

    @property
    def tag_ids(self) -> list[str]:
        return [tag.id for tag in self.tags]

    def apply_publication(
        self,
        published: bool,
        status: PostStatus,
        now: datetime | None = None,
    ) -> None:
        """Set the publication fields and keep ``published_at`` consistent.

        ``published_at`` is non-null exactly when the post is published with
        status PUBLISHED. A post that was already public keeps its timestamp.
        """
        self.published = published
        self.status = status
        if self.is_public:
            if self.published_at is None:
                self.published_at = now or datetime.now(timezone.utc)
        else:
            self.published_at = None

    def update(
        self,
        title: str | None = None,
        slug: str | None = None,
        content: str | None = None,
        excerpt: str | None = ...,  # type: ignore[assignment]
        featured_image: str | None = ...,  # type: ignore[assignment]
        category_id: str | None = ...,  # type: ignore[assignment]
        status: PostStatus | None = None,
        published: bool | None = None,
    ) -> None:
        """Update mutable fields and refresh the updated_at timestamp."""
        if title is not None:
            self.title = title
        if slug is not None:
            self.slug = slug
        if content is not None:
            self.content = content
        if excerpt is not ...:
            self.excerpt = excerpt
        if featured_image is not ...:
            self.featured_image = featured_image
        if category_id is not ...:
            self.category_id = category_id
        self.apply_publication(
            published=self.published if published is None else published,
            status=status or self.status,
        )
        self.updated_at = datetime.now(timezone.utc)
