"""Identity Resolver — token → Actor, soft-failing to anonymous.

Invariants:
    - No token: ANONYMOUS without touching the store
    - TokenInvalidError is absorbed here and never reaches a handler
    - A valid token is trusted only after re-fetching the user by id;
      a user that no longer exists resolves to ANONYMOUS
    - Lookup failures (store down, timeout) resolve to ANONYMOUS with a warning
    - resolve() never raises for lookup or token problems

Design Decisions:
    - Lookup injected as a UserLookup protocol: the middleware supplies a
      store-backed one, tests supply fakes
    - Lookup bounded by asyncio.wait_for so a hung store cannot stall requests
"""

import asyncio
import logging

from blogify.core.domain_types import ANONYMOUS, Actor, UserId
from blogify.core.errors import TokenInvalidError
from blogify.core.repository_protocols import UserLookup
from blogify.core.session_token import SessionTokenCodec

logger = logging.getLogger(__name__)


class IdentityResolver:
    """Resolves the actor for one inbound request."""

    def __init__(
        self,
        codec: SessionTokenCodec,
        lookup: UserLookup,
        timeout_seconds: float = 5.0,
    ):
        self.codec = codec
        self.lookup = lookup
        self.timeout_seconds = timeout_seconds

    async def resolve(self, token: str | None) -> Actor:
        if not token:
            return ANONYMOUS

        try:
            claims = self.codec.verify(token)
        except TokenInvalidError as e:
            logger.debug(f"Ignoring session token: {e.reason}")
            return ANONYMOUS

        try:
            user = await asyncio.wait_for(
                self.lookup.get_by_id(claims.subject),
                timeout=self.timeout_seconds,
            )
        except asyncio.TimeoutError:
            logger.warning(
                "Identity lookup timed out, continuing as anonymous",
                extra={"user_id": claims.subject, "dependency": "database"},
            )
            return ANONYMOUS
        except Exception as e:
            logger.warning(
                f"Identity lookup failed, continuing as anonymous: {e}",
                extra={"user_id": claims.subject, "dependency": "database"},
            )
            return ANONYMOUS

        if user is None:
            logger.info(
                "Session token for unknown user",
                extra={"user_id": claims.subject},
            )
            return ANONYMOUS

        return Actor(
            user_id=UserId(user.id),
            email=user.email,
            full_name=user.full_name,
        )
