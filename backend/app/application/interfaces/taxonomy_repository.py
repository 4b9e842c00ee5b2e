"""Abstract repository interfaces (ports) for categories and tags."""

from abc import ABC, abstractmethod

from app.domain.entities import Category, Tag


class CategoryRepository(ABC):
    """Port for category persistence."""

    @abstractmethod
    async def get_by_id(self, category_id: str) -> Category | None:
        ...

    @abstractmethod
    async def find_conflict(
        self, name: str, slug: str, exclude_id: str | None = None
    ) -> Category | None:
        """Return a category sharing ``name`` or ``slug``, if any."""
        ...

    @abstractmethod
    async def list_with_counts(self) -> list[Category]:
        """All categories ordered by name, with ``post_count`` populated."""
        ...

    @abstractmethod
    async def count_posts(self, category_id: str) -> int:
        """Number of posts referencing the category."""
        ...

    @abstractmethod
    async def create(self, category: Category) -> Category:
        ...

    @abstractmethod
    async def update(self, category: Category) -> Category:
        ...

    @abstractmethod
    async def delete(self, category_id: str) -> bool:
        ...


class TagRepository(ABC):
    """Port for tag persistence."""

    @abstractmethod
    async def get_by_id(self, tag_id: str) -> Tag | None:
        ...

    @abstractmethod
    async def get_many(self, tag_ids: list[str]) -> list[Tag]:
        """Return the tags that exist among ``tag_ids``; unknown IDs are skipped."""
        ...

    @abstractmethod
    async def find_conflict(self, name: str, slug: str) -> Tag | None:
        """Return a tag sharing ``name`` or ``slug``, if any."""
        ...

    @abstractmethod
    async def list_with_counts(self) -> list[Tag]:
        """All tags ordered by name, with ``post_count`` populated."""
        ...

    @abstractmethod
    async def create(self, tag: Tag) -> Tag:
        ...

    @abstractmethod
    async def delete(self, tag_id: str) -> bool:
        """Delete a tag and its post links."""
        ...
