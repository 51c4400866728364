"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - The identity resolver and the post lifecycle reach IO only through these types
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, so test fakes need no base class
    - Async in Protocol: implementations do IO; the pure functions in core/
      that reason about their results are never async themselves
"""

from datetime import datetime
from typing import Protocol
from uuid import UUID


class UserLike(Protocol):
    """Structural contract for User objects crossing the core boundary."""
    id: UUID
    email: str
    full_name: str
    created_at: datetime


class UserLookup(Protocol):
    """Contract for re-fetching a user by id — implemented by the credential store."""
    async def get_by_id(self, user_id: UUID) -> UserLike | None: ...


class MediaGateway(Protocol):
    """Contract for the external media host.

    upload() raises UploadRejectedError; delete_by_reference() is idempotent
    and returns False when the host reports a failed deletion.
    """
    async def upload(
        self, data: bytes, filename: str, content_type: str,
    ) -> str: ...
    async def delete_by_reference(self, reference: str) -> bool: ...
