"""Identity Middleware — resolves the request actor once, before routing.

Invariants:
    - Runs exactly once per HTTP request; non-HTTP scopes pass through untouched
    - Always sets request.state.actor (an Actor, possibly ANONYMOUS)
    - Never rejects a request: token and lookup problems degrade to ANONYMOUS

Design Decisions:
    - Pure ASGI middleware: no response buffering, no extra task per request
    - db_manager read at call time so a late init (or a test patch) is picked up
"""

from uuid import UUID

from starlette.requests import Request
from starlette.types import ASGIApp, Receive, Scope, Send

from blogify.api.dependencies import get_token_codec
from blogify.config import get_settings
from blogify.core.errors import DatabaseError
from blogify.infrastructure import database
from blogify.models.user import User
from blogify.services.credential_store import CredentialStore
from blogify.services.identity_resolver import IdentityResolver


class _StoreUserLookup:
    """UserLookup that opens its own short-lived session per lookup."""

    async def get_by_id(self, user_id: UUID) -> User | None:
        manager = database.db_manager
        if manager is None:
            raise DatabaseError("Database not initialized", "connect")
        async with manager.session() as db:
            return await CredentialStore(db).get_by_id(user_id)


class IdentityMiddleware:
    def __init__(self, app: ASGIApp, cookie_name: str = "token"):
        self.app = app
        self.cookie_name = cookie_name

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request = Request(scope)
        resolver = IdentityResolver(
            get_token_codec(),
            _StoreUserLookup(),
            timeout_seconds=get_settings().identity_lookup_timeout_seconds,
        )
        request.state.actor = await resolver.resolve(
            request.cookies.get(self.cookie_name),
        )
        await self.app(scope, receive, send)
