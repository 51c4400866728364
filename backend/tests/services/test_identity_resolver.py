"""Identity Resolver — token → Actor with soft failure.

Invariants:
    - No token / bad token / expired token → ANONYMOUS, never an exception
    - Valid token for a deleted user → ANONYMOUS
    - Lookup failure or timeout → ANONYMOUS
    - Valid token for an existing user → Actor built from the re-fetched user
"""

import asyncio
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from uuid import UUID, uuid4

import pytest

from blogify.core.domain_types import ANONYMOUS
from blogify.core.session_token import SessionTokenCodec
from blogify.services.identity_resolver import IdentityResolver


@dataclass
class _User:
    id: UUID
    email: str
    full_name: str


class _DictLookup:
    def __init__(self, *users):
        self.users = {u.id: u for u in users}
        self.calls = 0

    async def get_by_id(self, user_id):
        self.calls += 1
        return self.users.get(user_id)


class _FailingLookup:
    async def get_by_id(self, user_id):
        raise ConnectionError("store down")


class _SlowLookup:
    async def get_by_id(self, user_id):
        await asyncio.sleep(5)


@pytest.fixture
def codec():
    return SessionTokenCodec("resolver-secret")


@pytest.fixture
def user():
    return _User(id=uuid4(), email="carol@example.com", full_name="Carol Current")


async def test_no_token_is_anonymous_without_lookup(codec):
    lookup = _DictLookup()
    resolver = IdentityResolver(codec, lookup)
    assert await resolver.resolve(None) is ANONYMOUS
    assert await resolver.resolve("") is ANONYMOUS
    assert lookup.calls == 0


async def test_valid_token_resolves_current_user(codec, user):
    resolver = IdentityResolver(codec, _DictLookup(user))
    actor = await resolver.resolve(codec.issue(user).token)
    assert actor.user_id == user.id
    assert actor.full_name == "Carol Current"
    assert not actor.is_anonymous


async def test_actor_reflects_store_not_token(codec, user):
    token = codec.issue(user).token
    renamed = _User(id=user.id, email=user.email, full_name="Carol Renamed")
    actor = await IdentityResolver(codec, _DictLookup(renamed)).resolve(token)
    assert actor.full_name == "Carol Renamed"


async def test_garbage_token_is_anonymous(codec):
    lookup = _DictLookup()
    assert await IdentityResolver(codec, lookup).resolve("garbage") is ANONYMOUS
    assert lookup.calls == 0


async def test_expired_token_is_anonymous(codec, user):
    stale = codec.issue(user, now=datetime.now(timezone.utc) - timedelta(days=3))
    actor = await IdentityResolver(codec, _DictLookup(user)).resolve(stale.token)
    assert actor is ANONYMOUS


async def test_deleted_user_is_anonymous(codec, user):
    token = codec.issue(user).token
    assert await IdentityResolver(codec, _DictLookup()).resolve(token) is ANONYMOUS


async def test_lookup_failure_is_anonymous(codec, user):
    token = codec.issue(user).token
    assert await IdentityResolver(codec, _FailingLookup()).resolve(token) is ANONYMOUS


async def test_lookup_timeout_is_anonymous(codec, user):
    token = codec.issue(user).token
    resolver = IdentityResolver(codec, _SlowLookup(), timeout_seconds=0.05)
    assert await resolver.resolve(token) is ANONYMOUS


async def test_resolves_against_credential_store(codec, store, alice):
    actor = await IdentityResolver(codec, store).resolve(codec.issue(alice).token)
    assert actor.user_id == alice.id
    assert actor.email == "alice@example.com"
