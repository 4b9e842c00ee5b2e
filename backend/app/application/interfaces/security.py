"""Abstract interfaces for credential hashing and access tokens."""

from abc import ABC, abstractmethod
from typing import Any

from app.domain.entities import User


class PasswordHasher(ABC):
    """Port for one-way password hashing."""

    @abstractmethod
    def hash(self, password: str) -> str:
        ...

    @abstractmethod
    def verify(self, password: str, password_hash: str) -> bool:
        """True if ``password`` matches ``password_hash``; never raises on mismatch."""
        ...


class TokenCodec(ABC):
    """Port for issuing and reading signed bearer tokens."""

    @property
    @abstractmethod
    def expires_in(self) -> int:
        """Token lifetime in seconds."""
        ...

    @abstractmethod
    def issue(self, user: User) -> str:
        """Create a signed token whose subject is the user's ID."""
        ...

    @abstractmethod
    def decode(self, token: str) -> dict[str, Any] | None:
        """Return the verified claims, or None when the token is invalid or expired."""
        ...
