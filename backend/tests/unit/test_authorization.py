"""Unit tests for the authorization gate."""

import pytest

from app.domain.authorization import Action, Decision, DenyReason, authorize, require
from app.domain.entities import AuthSession, UserRole
from app.domain.exceptions import ForbiddenError, UnauthenticatedError

ADMIN = AuthSession(user_id="admin-1", role=UserRole.ADMIN)
WRITER = AuthSession(user_id="writer-1", role=UserRole.WRITER)
READER = AuthSession(user_id="reader-1", role=UserRole.USER)


@pytest.mark.parametrize("session", [None, ADMIN, WRITER, READER])
def test_public_reads_are_always_allowed(session):
    assert authorize(session, Action.READ_PUBLIC) == Decision.allow()


@pytest.mark.parametrize("action", [a for a in Action if a != Action.READ_PUBLIC])
def test_anonymous_is_unauthenticated_for_everything_else(action):
    assert authorize(None, action) == Decision.deny(DenyReason.UNAUTHENTICATED)


@pytest.mark.parametrize("action", list(Action))
def test_admin_may_do_anything(action):
    assert authorize(ADMIN, action, owner_id="someone-else").allowed


@pytest.mark.parametrize(
    "action",
    [
        Action.READ_MANAGEMENT,
        Action.CREATE_POST,
        Action.CREATE_CATEGORY,
        Action.CREATE_TAG,
        Action.UPLOAD_IMAGE,
        Action.DELETE_IMAGE,
    ],
)
def test_writer_capabilities(action):
    assert authorize(WRITER, action).allowed


@pytest.mark.parametrize("action", [Action.UPDATE_POST, Action.DELETE_POST])
def test_writer_owner_scoped_actions(action):
    assert authorize(WRITER, action, owner_id="writer-1").allowed
    assert authorize(WRITER, action, owner_id="writer-2") == Decision.deny(DenyReason.NOT_OWNER)


@pytest.mark.parametrize(
    "action", [Action.UPDATE_CATEGORY, Action.DELETE_CATEGORY, Action.DELETE_TAG]
)
def test_writer_cannot_administer_taxonomy(action):
    assert authorize(WRITER, action) == Decision.deny(DenyReason.INSUFFICIENT_ROLE)


def test_user_owning_a_post_is_still_denied_for_role():
    decision = authorize(READER, Action.UPDATE_POST, owner_id="reader-1")
    assert decision == Decision.deny(DenyReason.INSUFFICIENT_ROLE)


def test_user_cannot_read_management_surface():
    assert authorize(READER, Action.READ_MANAGEMENT) == Decision.deny(
        DenyReason.INSUFFICIENT_ROLE
    )


def test_require_raises_matching_errors():
    with pytest.raises(UnauthenticatedError):
        require(None, Action.CREATE_POST)

    with pytest.raises(ForbiddenError) as exc_info:
        require(WRITER, Action.DELETE_POST, owner_id="writer-2")
    assert exc_info.value.reason == "not owner"

    assert require(ADMIN, Action.DELETE_TAG) is ADMIN
