"""Post Lifecycle — create, toggle-like and delete with ownership and cleanup rules.

Invariants:
    - Every mutation consults core/enforce_ownership before touching the store
    - delete_post: fetch → authorize → media cleanup → purge comments/likes →
      delete post, strictly in that order; nothing is mutated before
      authorization succeeds
    - Media cleanup is best-effort: failure or timeout is logged and reported
      as MediaCleanup.FAILED, the post and its comments are still removed
    - toggle_like is a storage-level set operation: conditional DELETE, then
      conflict-ignoring INSERT; never read-modify-write in Python
    - Upload failures of any kind surface as UploadRejectedError

Design Decisions:
    - DeletionReport keeps the primary outcome and the media outcome apart
    - Media calls bounded by asyncio.wait_for(media_timeout_seconds)
    - Comments and likes are deleted in bulk with the post in one commit;
      the media step sits outside that transaction
"""

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from blogify.core.domain_types import Actor, MediaCleanup, PostId
from blogify.core.enforce_content import clean_post_fields, parse_category
from blogify.core.enforce_ownership import require_authenticated, require_owner
from blogify.core.enforce_upload import (
    DEFAULT_ALLOWED_FORMATS, DEFAULT_MAX_UPLOAD_BYTES, check_upload,
)
from blogify.core.errors import DependencyUnavailableError, UploadRejectedError
from blogify.core.repository_protocols import MediaGateway
from blogify.models.comment import Comment
from blogify.models.post import Post
from blogify.models.post_like import PostLike
from blogify.services.post_queries import get_post_or_404

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CoverImage:
    filename: str
    content_type: str
    data: bytes


@dataclass(frozen=True)
class LikeToggleResult:
    post_id: PostId
    liked: bool
    like_count: int


@dataclass(frozen=True)
class DeletionReport:
    post_id: PostId
    post_deleted: bool
    comments_deleted: int
    media_cleanup: MediaCleanup


class PostLifecycle:
    """Mutating operations on posts."""

    def __init__(
        self,
        db: AsyncSession,
        media: MediaGateway,
        media_timeout_seconds: float = 10.0,
        max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES,
        allowed_formats: frozenset[str] = DEFAULT_ALLOWED_FORMATS,
    ):
        self.db = db
        self.media = media
        self.media_timeout_seconds = media_timeout_seconds
        self.max_upload_bytes = max_upload_bytes
        self.allowed_formats = allowed_formats

    async def create_post(
        self,
        actor: Actor,
        title: str | None,
        body: str | None,
        category: str | None = None,
        cover_image: CoverImage | None = None,
    ) -> Post:
        owner_id = require_authenticated(actor)
        title, body = clean_post_fields(title, body)
        resolved_category = parse_category(category)

        reference = None
        if cover_image is not None:
            reference = await self._upload_cover(cover_image)

        post = Post(
            title=title,
            body=body,
            category=resolved_category.value,
            cover_image_url=reference,
            owner_id=owner_id,
        )
        self.db.add(post)
        try:
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            if reference:
                await self._cleanup_media(reference, None)
            raise
        await self.db.refresh(post)
        logger.info("Post created", extra={"post_id": post.id, "user_id": owner_id})
        return post

    async def toggle_like(self, post_id: UUID, actor: Actor) -> LikeToggleResult:
        user_id = require_authenticated(actor)
        await get_post_or_404(self.db, post_id)

        removed = await self.db.execute(
            delete(PostLike)
            .where(PostLike.post_id == post_id, PostLike.user_id == user_id)
            .execution_options(synchronize_session=False)
        )
        liked = removed.rowcount == 0
        if liked:
            await self.db.execute(self._insert_like_if_absent(post_id, user_id))
        await self.db.commit()

        count = await self.db.scalar(
            select(func.count()).select_from(PostLike)
            .where(PostLike.post_id == post_id)
        )
        return LikeToggleResult(
            post_id=PostId(post_id), liked=liked, like_count=count or 0,
        )

    async def delete_post(self, post_id: UUID, actor: Actor) -> DeletionReport:
        post = await get_post_or_404(self.db, post_id)
        require_owner(actor, post.owner_id, "Post", post_id)

        media_cleanup = MediaCleanup.NOT_APPLICABLE
        if post.cover_image_url:
            media_cleanup = await self._cleanup_media(post.cover_image_url, post_id)

        purged = await self.db.execute(
            delete(Comment)
            .where(Comment.post_id == post_id)
            .execution_options(synchronize_session=False)
        )
        await self.db.execute(
            delete(PostLike)
            .where(PostLike.post_id == post_id)
            .execution_options(synchronize_session=False)
        )
        await self.db.execute(
            delete(Post)
            .where(Post.id == post_id)
            .execution_options(synchronize_session=False)
        )
        await self.db.commit()
        self.db.expunge(post)

        report = DeletionReport(
            post_id=PostId(post_id),
            post_deleted=True,
            comments_deleted=purged.rowcount or 0,
            media_cleanup=media_cleanup,
        )
        logger.info(
            "Post deleted",
            extra={
                "post_id": post_id,
                "user_id": actor.user_id,
                "comments_deleted": report.comments_deleted,
                "media_cleanup": media_cleanup.value,
            },
        )
        return report

    # ─── media ──────────────────────────────────────────────────

    async def _upload_cover(self, image: CoverImage) -> str:
        check_upload(
            image.filename, image.content_type, len(image.data),
            max_bytes=self.max_upload_bytes,
            allowed_formats=self.allowed_formats,
        )
        try:
            return await asyncio.wait_for(
                self.media.upload(image.data, image.filename, image.content_type),
                timeout=self.media_timeout_seconds,
            )
        except asyncio.TimeoutError:
            raise UploadRejectedError(
                "Media host did not respond in time", "timeout",
            )
        except DependencyUnavailableError as e:
            raise UploadRejectedError(
                "Media host unavailable", "unavailable",
            ) from e

    async def _cleanup_media(
        self, reference: str, post_id: UUID | None,
    ) -> MediaCleanup:
        extra = {"post_id": post_id, "dependency": "media"}
        try:
            deleted = await asyncio.wait_for(
                self.media.delete_by_reference(reference),
                timeout=self.media_timeout_seconds,
            )
        except asyncio.TimeoutError:
            logger.warning("Media cleanup timed out", extra=extra)
            return MediaCleanup.FAILED
        except Exception as e:
            logger.warning(f"Media cleanup failed: {e}", extra=extra, exc_info=True)
            return MediaCleanup.FAILED
        if not deleted:
            logger.warning("Media host refused deletion", extra=extra)
            return MediaCleanup.FAILED
        return MediaCleanup.DELETED

    # ─── likes ──────────────────────────────────────────────────

    def _insert_like_if_absent(self, post_id: UUID, user_id: UUID):
        dialect = self.db.get_bind().dialect.name
        insert = postgresql_insert if dialect == "postgresql" else sqlite_insert
        return (
            insert(PostLike)
            .values(
                post_id=post_id,
                user_id=user_id,
                created_at=datetime.now(timezone.utc),
            )
            .on_conflict_do_nothing(index_elements=["post_id", "user_id"])
        )
