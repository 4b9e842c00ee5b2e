"""Abstract repository interfaces (ports): define the contract, not the implementation."""

from abc import ABC, abstractmethod
from collections.abc import Callable
from contextlib import AbstractAsyncContextManager

from app.domain.entities import Post, PostOrdering, PostPredicate


class PostRepository(ABC):
    """Port for post persistence: implemented in the infrastructure layer.

    Implementations translate store failures into ``StoreError`` and
    uniqueness violations into ``DuplicateEntityError``.
    """

    @abstractmethod
    async def get_by_id(self, post_id: str) -> Post | None:
        """Retrieve a single post (with author, category and tags) by its ID."""
        ...

    @abstractmethod
    async def get_by_slug(self, slug: str) -> Post | None:
        """Retrieve a single post by its unique slug."""
        ...

    @abstractmethod
    async def slug_exists(self, slug: str, exclude_id: str | None = None) -> bool:
        """True when another post already uses ``slug``."""
        ...

    @abstractmethod
    async def count(self, predicate: PostPredicate) -> int:
        """Count posts matching ``predicate``."""
        ...

    @abstractmethod
    async def find_page(
        self,
        predicate: PostPredicate,
        ordering: PostOrdering,
        skip: int = 0,
        take: int = 10,
    ) -> list[Post]:
        """Return one ordered page of posts matching ``predicate``."""
        ...

    @abstractmethod
    async def create(self, post: Post) -> Post:
        """Persist a new post and its tag links."""
        ...

    @abstractmethod
    async def update(self, post: Post) -> Post:
        """Persist changes to an existing post, replacing its tag set."""
        ...

    @abstractmethod
    async def delete(self, post_id: str) -> bool:
        """Delete a post. Returns True if deleted, False if not found."""
        ...


# Opens a repository bound to its own session; used by read paths that
# issue independent queries concurrently.
PostRepositoryFactory = Callable[[], AbstractAsyncContextManager[PostRepository]]
