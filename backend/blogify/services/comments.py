"""Comment Service — add, list and delete comments on a post.

Invariants:
    - Adding requires an authenticated actor and an existing parent post
    - Deleting requires the actor to be the comment's author
    - Listings are oldest first
"""

import logging
from dataclasses import dataclass
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from blogify.core.domain_types import Actor
from blogify.core.enforce_content import clean_comment_content
from blogify.core.enforce_ownership import require_authenticated, require_owner
from blogify.core.errors import ResourceNotFoundError
from blogify.models.comment import Comment
from blogify.models.user import User
from blogify.services.post_queries import get_post_or_404

logger = logging.getLogger(__name__)


@dataclass
class CommentView:
    comment: Comment
    author_name: str


class CommentService:
    """Comment persistence guarded by ownership rules."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def add_comment(
        self, post_id: UUID, actor: Actor, content: str | None,
    ) -> CommentView:
        author_id = require_authenticated(actor)
        content = clean_comment_content(content)
        await get_post_or_404(self.db, post_id)

        comment = Comment(post_id=post_id, content=content, author_id=author_id)
        self.db.add(comment)
        await self.db.commit()
        await self.db.refresh(comment)
        logger.info(
            "Comment added",
            extra={"post_id": post_id, "comment_id": comment.id, "user_id": author_id},
        )
        return CommentView(comment=comment, author_name=actor.full_name or "")

    async def list_for_post(self, post_id: UUID) -> list[CommentView]:
        result = await self.db.execute(
            select(Comment, User.full_name)
            .join(User, User.id == Comment.author_id)
            .where(Comment.post_id == post_id)
            .order_by(Comment.created_at.asc())
        )
        return [
            CommentView(comment=comment, author_name=name)
            for comment, name in result.all()
        ]

    async def delete_comment(
        self, post_id: UUID, comment_id: UUID, actor: Actor,
    ) -> None:
        result = await self.db.execute(
            select(Comment)
            .where(Comment.id == comment_id, Comment.post_id == post_id)
        )
        comment = result.scalar_one_or_none()
        if comment is None:
            raise ResourceNotFoundError("Comment", str(comment_id))
        require_owner(actor, comment.author_id, "Comment", comment_id)

        await self.db.delete(comment)
        await self.db.commit()
        logger.info(
            "Comment deleted",
            extra={"post_id": post_id, "comment_id": comment_id, "user_id": actor.user_id},
        )
