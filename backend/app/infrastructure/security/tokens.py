"""JWT bearer tokens signed with python-jose."""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any

from jose import JWTError, jwt

from app.application.interfaces import TokenCodec
from app.domain.entities import User

logger = logging.getLogger(__name__)


class JWTTokenCodec(TokenCodec):
    """Issues HS256 (by default) access tokens carrying the user ID and role."""

    def __init__(self, secret_key: str, algorithm: str = "HS256", expire_minutes: int = 60 * 24):
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._expire = timedelta(minutes=expire_minutes)

    @property
    def expires_in(self) -> int:
        return int(self._expire.total_seconds())

    def issue(self, user: User) -> str:
        now = datetime.now(timezone.utc)
        claims = {
            "sub": user.id,
            "role": user.role.value,
            "email": user.email,
            "iat": now,
            "exp": now + self._expire,
        }
        return jwt.encode(claims, self._secret_key, algorithm=self._algorithm)

    def decode(self, token: str) -> dict[str, Any] | None:
        try:
            return jwt.decode(token, self._secret_key, algorithms=[self._algorithm])
        except JWTError as exc:
            logger.debug("Rejected bearer token: %s", exc)
            return None
