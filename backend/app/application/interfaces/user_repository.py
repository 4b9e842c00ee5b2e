"""Abstract repository interface (port) for user accounts."""

from abc import ABC, abstractmethod

from app.domain.entities import AuthorFacet, User


class UserRepository(ABC):
    """Port for user persistence: implemented in the infrastructure layer."""

    @abstractmethod
    async def get_by_id(self, user_id: str) -> User | None:
        ...

    @abstractmethod
    async def get_by_email(self, email: str) -> User | None:
        ...

    @abstractmethod
    async def create(self, user: User) -> User:
        """Persist a new user and return it."""
        ...

    @abstractmethod
    async def list_public_authors(self) -> list[AuthorFacet]:
        """Users with at least one public post, ordered by name."""
        ...
