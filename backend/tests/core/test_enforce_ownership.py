"""Ownership Enforcement — who may mutate which resource.

Tests:
    - can_mutate true only for the authenticated owner
    - Anonymous actors are rejected with UnauthenticatedError (never Forbidden)
    - Non-owners are rejected with ForbiddenError carrying the resource
"""

from uuid import uuid4

import pytest

from blogify.core.domain_types import ANONYMOUS, Actor, UserId
from blogify.core.enforce_ownership import (
    can_mutate, require_authenticated, require_owner,
)
from blogify.core.errors import ForbiddenError, UnauthenticatedError


def _actor(user_id=None) -> Actor:
    uid = UserId(user_id or uuid4())
    return Actor(user_id=uid, email="a@example.com", full_name="A")


# ─── can_mutate ──────────────────────────────────────────────────

def test_owner_can_mutate():
    owner = _actor()
    assert can_mutate(owner, owner.user_id) is True


def test_other_user_cannot_mutate():
    assert can_mutate(_actor(), uuid4()) is False


def test_anonymous_cannot_mutate_anything():
    assert can_mutate(ANONYMOUS, uuid4()) is False
    assert can_mutate(ANONYMOUS, None) is False


def test_missing_owner_is_never_mutable():
    assert can_mutate(_actor(), None) is False


# ─── require_authenticated ───────────────────────────────────────

def test_require_authenticated_returns_user_id():
    actor = _actor()
    assert require_authenticated(actor) == actor.user_id


def test_require_authenticated_rejects_anonymous():
    with pytest.raises(UnauthenticatedError) as exc_info:
        require_authenticated(ANONYMOUS)
    assert exc_info.value.http_status == 401
    assert exc_info.value.context.redirect_to == "/api/v1/users/signin"


# ─── require_owner ───────────────────────────────────────────────

def test_require_owner_passes_for_owner():
    owner = _actor()
    assert require_owner(owner, owner.user_id, "Post", uuid4()) == owner.user_id


def test_require_owner_forbids_non_owner():
    post_id = uuid4()
    with pytest.raises(ForbiddenError) as exc_info:
        require_owner(_actor(), uuid4(), "Post", post_id)
    err = exc_info.value
    assert err.http_status == 403
    assert err.context.resource_type == "Post"
    assert err.context.resource_id == str(post_id)


def test_require_owner_anonymous_is_unauthenticated_not_forbidden():
    with pytest.raises(UnauthenticatedError):
        require_owner(ANONYMOUS, uuid4(), "Post", uuid4())
