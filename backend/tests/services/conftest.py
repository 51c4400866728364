"""Service test fixtures — async DB, FastAPI test client and a fake media host.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use test DB session
    - db_manager patched so the identity middleware resolves users from the test DB
    - get_media_gateway overridden with FakeMediaGateway (no network)

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
      (conflict-ignoring inserts use the sqlite dialect here, postgresql in prod)
    - Cookies are switched per call with as_user, so one client can act as
      several users in the same test
"""

import asyncio

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from blogify.api.dependencies import get_media_gateway
from blogify.core.domain_types import Actor, UserId
from blogify.core.errors import DependencyUnavailableError
from blogify.db.base import Base
from blogify.infrastructure.database import get_db, DatabaseSessionManager
import blogify.infrastructure.database as db_module
from blogify.main import app
from blogify.services.credential_store import CredentialStore
from blogify.services.post_lifecycle import PostLifecycle

FAST_HASH = "pbkdf2:sha256:1000"
CLOUD_BASE = "https://res.cloudinary.com/test-cloud/image/upload"


class FakeMediaGateway:
    """In-memory MediaGateway with switchable failure modes."""

    def __init__(self):
        self.stored: dict[str, bytes] = {}
        self.deleted: list[str] = []
        self.fail_upload = False
        self.fail_delete = False
        self.refuse_delete = False
        self.delete_delay = 0.0

    async def upload(self, data: bytes, filename: str, content_type: str) -> str:
        if self.fail_upload:
            raise DependencyUnavailableError("media host down", "media")
        url = f"{CLOUD_BASE}/v1/blog-images/{len(self.stored)}-{filename}"
        self.stored[url] = data
        return url

    async def delete_by_reference(self, reference: str) -> bool:
        if self.delete_delay:
            await asyncio.sleep(self.delete_delay)
        if self.fail_delete:
            raise ConnectionError("media host unreachable")
        if self.refuse_delete:
            return False
        self.deleted.append(reference)
        self.stored.pop(reference, None)
        return True


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def media():
    return FakeMediaGateway()


@pytest.fixture
async def client(test_engine, test_session_factory, media):
    """FastAPI test client with DB and media dependencies overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_media_gateway] = lambda: media

    # Patch db_manager for the identity middleware, which bypasses get_db
    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


# ─── users & actors ─────────────────────────────────────────────

@pytest.fixture
def store(test_db):
    return CredentialStore(test_db, hash_method=FAST_HASH)


@pytest.fixture
def lifecycle(test_db, media):
    return PostLifecycle(test_db, media, media_timeout_seconds=0.5)


@pytest.fixture
async def alice(store):
    return await store.create("alice@example.com", "Alice Writer", "alice-password")


@pytest.fixture
async def bob(store):
    return await store.create("bob@example.com", "Bob Reader", "bob-password")


@pytest.fixture
def actor_for():
    """Build the Actor the identity resolver would produce for a stored user."""
    def _actor_for(user) -> Actor:
        return Actor(
            user_id=UserId(user.id), email=user.email, full_name=user.full_name,
        )
    return _actor_for


@pytest.fixture
def signup(client):
    """Register + sign in through the API; returns the session token.

    The client's cookie jar is left empty so each call starts anonymous.
    """
    async def _signup(email, full_name, password="password123") -> str:
        res = await client.post("/api/v1/users/signup", json={
            "full_name": full_name, "email": email, "password": password,
        })
        assert res.status_code == 201, res.text
        res = await client.post("/api/v1/users/signin", json={
            "email": email, "password": password,
        })
        assert res.status_code == 200, res.text
        token = res.cookies["token"]
        client.cookies.clear()
        return token
    return _signup


@pytest.fixture
def as_user(client):
    """Switch the client's session cookie to a token (None → anonymous)."""
    def _as_user(token: str | None) -> None:
        client.cookies.clear()
        if token:
            client.cookies.set("token", token)
    return _as_user
