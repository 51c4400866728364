"""ORM Models — SQLAlchemy declarative models for all domain entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Posts and comments reference users by id only; no ownership cascade

Design Decisions:
    - One file per entity for locality
    - All models imported here so Base.metadata is complete before
      create_all() or Alembic autogenerate runs
"""

from blogify.models.user import User  # noqa: F401
from blogify.models.post import Post  # noqa: F401
from blogify.models.post_like import PostLike  # noqa: F401
from blogify.models.comment import Comment  # noqa: F401
