"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - UserId, PostId, CommentId wrap UUIDs
    - Category is a closed set; DEFAULT_CATEGORY applies when none is given
    - ANONYMOUS is the only actor without a user_id

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
    - Actor is frozen: a resolved identity never changes within a request
"""

from dataclasses import dataclass
from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", UUID)
PostId = NewType("PostId", UUID)
CommentId = NewType("CommentId", UUID)


# ─── Enums ───────────────────────────────────────────────────────

class Category(str, Enum):
    """Allowed post categories — maps to DB `category` column."""
    TECHNOLOGY = "Technology"
    HEALTH = "Health"
    LIFESTYLE = "Lifestyle"
    FASHION = "Fashion"


DEFAULT_CATEGORY = Category.TECHNOLOGY


class MediaCleanup(str, Enum):
    """Outcome of the best-effort media step of a post deletion."""
    NOT_APPLICABLE = "not_applicable"
    DELETED = "deleted"
    FAILED = "failed"


# ─── Actor ───────────────────────────────────────────────────────

@dataclass(frozen=True)
class Actor:
    """Identity resolved for the current request (or anonymous)."""
    user_id: UserId | None = None
    email: str | None = None
    full_name: str | None = None

    @property
    def is_anonymous(self) -> bool:
        return self.user_id is None


ANONYMOUS = Actor()
