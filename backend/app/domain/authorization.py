"""Authorization gate: a single decision function over (session, action, owner).

Every mutating use case asks :func:`authorize` (or :func:`require`) before
touching the store, so role rules live here and nowhere else.
"""

from dataclasses import dataclass
from enum import Enum

from app.domain.entities.user import AuthSession, UserRole
from app.domain.exceptions import ForbiddenError, UnauthenticatedError


class Action(str, Enum):
    READ_PUBLIC = "read-public"
    READ_MANAGEMENT = "read-management"
    CREATE_POST = "create-post"
    UPDATE_POST = "update-post"
    DELETE_POST = "delete-post"
    CREATE_CATEGORY = "create-category"
    UPDATE_CATEGORY = "update-category"
    DELETE_CATEGORY = "delete-category"
    CREATE_TAG = "create-tag"
    DELETE_TAG = "delete-tag"
    UPLOAD_IMAGE = "upload-image"
    DELETE_IMAGE = "delete-image"


class DenyReason(str, Enum):
    UNAUTHENTICATED = "unauthenticated"
    INSUFFICIENT_ROLE = "insufficient role"
    NOT_OWNER = "not owner"


@dataclass(frozen=True)
class Decision:
    """``Allow`` when ``allowed`` is True, otherwise ``Deny(reason)``."""

    allowed: bool
    reason: DenyReason | None = None

    @classmethod
    def allow(cls) -> "Decision":
        return cls(allowed=True)

    @classmethod
    def deny(cls, reason: DenyReason) -> "Decision":
        return cls(allowed=False, reason=reason)


_WRITER_ACTIONS = frozenset({
    Action.READ_PUBLIC,
    Action.READ_MANAGEMENT,
    Action.CREATE_POST,
    Action.CREATE_CATEGORY,
    Action.CREATE_TAG,
    Action.UPLOAD_IMAGE,
    Action.DELETE_IMAGE,
})

# Writers may perform these only on posts they authored.
_OWNER_SCOPED_ACTIONS = frozenset({Action.UPDATE_POST, Action.DELETE_POST})


def authorize(
    session: AuthSession | None,
    action: Action,
    owner_id: str | None = None,
) -> Decision:
    """Decide whether ``session`` may perform ``action`` on a resource owned by ``owner_id``."""
    if action == Action.READ_PUBLIC:
        return Decision.allow()
    if session is None:
        return Decision.deny(DenyReason.UNAUTHENTICATED)

    if session.role == UserRole.ADMIN:
        return Decision.allow()

    if session.role == UserRole.WRITER:
        if action in _WRITER_ACTIONS:
            return Decision.allow()
        if action in _OWNER_SCOPED_ACTIONS:
            if owner_id is not None and session.user_id == owner_id:
                return Decision.allow()
            return Decision.deny(DenyReason.NOT_OWNER)

    return Decision.deny(DenyReason.INSUFFICIENT_ROLE)


def require(
    session: AuthSession | None,
    action: Action,
    owner_id: str | None = None,
) -> AuthSession | None:
    """Raise the matching auth error when the gate denies ``action``.

    Returns the session so callers can keep using it after the check.
    """
    decision = authorize(session, action, owner_id)
    if decision.allowed:
        return session
    if decision.reason == DenyReason.UNAUTHENTICATED:
        raise UnauthenticatedError()
    raise ForbiddenError(
        reason=decision.reason.value,
        message=f"Forbidden: {decision.reason.value} for {action.value}",
    )
