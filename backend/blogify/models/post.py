"""Post ORM — a blog entry owned by its creating user.

Invariants:
    - owner_id is set at creation and never reassigned
    - category is one of core.domain_types.Category (validated before insert)
    - cover_image_url is an opaque media-host reference, nullable

Design Decisions:
    - No ORM relationships to comments/likes: deletion cascade is sequenced
      explicitly by services/post_lifecycle.py, not by the ORM
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Text, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from blogify.core.domain_types import DEFAULT_CATEGORY
from blogify.db.base import Base


def _now() -> datetime:
    return datetime.now(timezone.utc)


class Post(Base):
    """Blog post entity."""
    __tablename__ = "posts"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    body: Mapped[str] = mapped_column(Text, nullable=False)
    cover_image_url: Mapped[str | None] = mapped_column(
        String(500), nullable=True,
    )
    category: Mapped[str] = mapped_column(
        String(20), nullable=False, default=DEFAULT_CATEGORY.value,
    )
    owner_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id"), nullable=False, index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_now,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_now, onupdate=_now,
    )
