"""Account registration, login and bearer-token session resolution."""

import logging

from app.application.interfaces import PasswordHasher, TokenCodec, UserRepository
from app.application.schemas import LoginRequest, RegisterRequest
from app.domain.entities import AuthSession, User, UserRole
from app.domain.exceptions import (
    DuplicateEntityError,
    UnauthenticatedError,
    ValidationError,
)

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 8


class AuthService:
    """Credentials in, signed tokens out. Depends on ports only."""

    def __init__(
        self,
        repository: UserRepository,
        hasher: PasswordHasher,
        tokens: TokenCodec,
    ):
        self._repository = repository
        self._hasher = hasher
        self._tokens = tokens

    @property
    def token_lifetime(self) -> int:
        return self._tokens.expires_in

    async def register(self, data: RegisterRequest) -> User:
        """Create a USER account. The email must not be taken."""
        email = data.email.strip().lower()
        if len(data.password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters", field="password"
            )
        if await self._repository.get_by_email(email) is not None:
            raise DuplicateEntityError("User", "email", email)

        user = User(
            email=email,
            name=data.name.strip(),
            password_hash=self._hasher.hash(data.password),
            role=UserRole.USER,
        )
        created = await self._repository.create(user)
        logger.info("User registered: id=%s", created.id)
        return created

    async def login(self, data: LoginRequest) -> str:
        """Return a bearer token for valid credentials."""
        user = await self._repository.get_by_email(data.email.strip().lower())
        if user is None or not self._hasher.verify(data.password, user.password_hash):
            logger.info("Rejected login attempt")
            raise UnauthenticatedError("Invalid email or password")
        return self._tokens.issue(user)

    async def resolve_session(self, token: str | None) -> AuthSession | None:
        """Map a bearer token to a session. Invalid or stale tokens are anonymous."""
        if not token:
            return None
        claims = self._tokens.decode(token)
        if not claims or not claims.get("sub"):
            return None

        user = await self._repository.get_by_id(str(claims["sub"]))
        if user is None:
            logger.debug("Token subject %s no longer exists", claims["sub"])
            return None
        return AuthSession(user_id=user.id, role=user.role, email=user.email, name=user.name)

    async def get_current_user(self, session: AuthSession | None) -> User:
        if session is None:
            raise UnauthenticatedError()
        user = await self._repository.get_by_id(session.user_id)
        if user is None:
            raise UnauthenticatedError()
        return user

    async def seed_admin(self, email: str, password: str, name: str) -> User | None:
        """Create the configured ADMIN account once; no-op when it already exists."""
        if not email or not password:
            return None
        email = email.strip().lower()
        existing = await self._repository.get_by_email(email)
        if existing is not None:
            return existing

        admin = User(
            email=email,
            name=name,
            password_hash=self._hasher.hash(password),
            role=UserRole.ADMIN,
        )
        created = await self._repository.create(admin)
        logger.info("Seeded admin account %s", email)
        return created
