"""Domain entities for users and authenticated sessions."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from uuid import uuid4


class UserRole(str, Enum):
    """Capability tiers. WRITER adds content management on top of USER."""

    ADMIN = "ADMIN"
    WRITER = "WRITER"
    USER = "USER"


@dataclass
class User:
    """A registered account. ``password_hash`` never leaves the backend."""

    email: str
    name: str
    password_hash: str
    role: UserRole = UserRole.USER
    email_verified: datetime | None = None
    id: str = field(default_factory=lambda: str(uuid4()))
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass(frozen=True)
class AuthSession:
    """The caller identity resolved from a bearer token."""

    user_id: str
    role: UserRole
    email: str = ""
    name: str = ""
