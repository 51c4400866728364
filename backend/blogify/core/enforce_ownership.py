"""Ownership Enforcement — who may mutate which resource.

Invariants:
    - All functions are PURE: no IO, no async, no DB
    - can_mutate is true iff the actor is authenticated AND is the owner
    - Anonymous actors get UnauthenticatedError, non-owners get ForbiddenError
    - No roles, no bypass

Design Decisions:
    - Callers pass the owner id they just re-read from the store; this module
      never caches or fetches ownership itself
"""

from uuid import UUID

from blogify.core.domain_types import Actor, UserId
from blogify.core.errors import ForbiddenError, UnauthenticatedError, ErrorContext


def can_mutate(actor: Actor, owner_id: UUID | None) -> bool:
    if actor.is_anonymous or owner_id is None:
        return False
    return actor.user_id == owner_id


def require_authenticated(actor: Actor) -> UserId:
    """Return the actor's id or raise UnauthenticatedError."""
    if actor.is_anonymous:
        raise UnauthenticatedError()
    return actor.user_id


def require_owner(
    actor: Actor, owner_id: UUID | None, resource_type: str, resource_id: UUID,
) -> UserId:
    """Raise unless the actor owns the resource; returns the actor's id."""
    user_id = require_authenticated(actor)
    if not can_mutate(actor, owner_id):
        raise ForbiddenError(
            resource_type, str(resource_id),
            context=ErrorContext(user_id=str(user_id)),
        )
    return user_id
