"""Post Queries — read side: listing, author profile, post detail.

Invariants:
    - Read-only: never commits
    - Listings are newest first; likers are in like order
    - get_post_or_404 always hits the store (ownership is never cached)

Design Decisions:
    - get_post_or_404 exported for reuse by the lifecycle and comment services
    - Likers loaded with one IN query per listing instead of per post
"""

from dataclasses import dataclass, field
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from blogify.core.errors import ResourceNotFoundError
from blogify.models.post import Post
from blogify.models.post_like import PostLike
from blogify.models.user import User


@dataclass
class PostView:
    post: Post
    author_name: str
    liker_ids: list[UUID] = field(default_factory=list)


async def get_post_or_404(db: AsyncSession, post_id: UUID) -> Post:
    result = await db.execute(select(Post).where(Post.id == post_id))
    post = result.scalar_one_or_none()
    if post is None:
        raise ResourceNotFoundError("Post", str(post_id))
    return post


class PostQueries:
    """Read models for posts."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_posts(self) -> list[PostView]:
        return await self._views(
            select(Post, User.full_name)
            .join(User, User.id == Post.owner_id)
            .order_by(Post.created_at.desc())
        )

    async def list_by_owner(self, owner_id: UUID) -> tuple[User, list[PostView]]:
        result = await self.db.execute(select(User).where(User.id == owner_id))
        author = result.scalar_one_or_none()
        if author is None:
            raise ResourceNotFoundError("User", str(owner_id))
        views = await self._views(
            select(Post, User.full_name)
            .join(User, User.id == Post.owner_id)
            .where(Post.owner_id == owner_id)
            .order_by(Post.created_at.desc())
        )
        return author, views

    async def get_post(self, post_id: UUID) -> PostView:
        views = await self._views(
            select(Post, User.full_name)
            .join(User, User.id == Post.owner_id)
            .where(Post.id == post_id)
        )
        if not views:
            raise ResourceNotFoundError("Post", str(post_id))
        return views[0]

    async def liker_ids(self, post_id: UUID) -> list[UUID]:
        likers = await self._likers([post_id])
        return likers.get(post_id, [])

    async def _views(self, query) -> list[PostView]:
        rows = (await self.db.execute(query)).all()
        likers = await self._likers([post.id for post, _ in rows])
        return [
            PostView(post=post, author_name=name, liker_ids=likers.get(post.id, []))
            for post, name in rows
        ]

    async def _likers(self, post_ids: list[UUID]) -> dict[UUID, list[UUID]]:
        if not post_ids:
            return {}
        result = await self.db.execute(
            select(PostLike.post_id, PostLike.user_id)
            .where(PostLike.post_id.in_(post_ids))
            .order_by(PostLike.created_at.asc())
        )
        grouped: dict[UUID, list[UUID]] = {}
        for post_id, user_id in result.all():
            grouped.setdefault(post_id, []).append(user_id)
        return grouped
