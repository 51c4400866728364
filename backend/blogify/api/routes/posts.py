"""Post Routes — listing, detail, create, delete, like and comments.

Invariants:
    - Reads are public; every mutation goes through a service that checks ownership
    - Routes hold no business logic: they translate HTTP ↔ service calls
    - Cover image bytes are read with a ceiling of max_upload_bytes + 1
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, UploadFile, status

from blogify.api.dependencies import (
    get_actor, get_comment_service, get_post_lifecycle, get_post_queries,
)
from blogify.api.routes.post_payloads import (
    comment_payload, post_detail_payload, post_payload,
)
from blogify.config import get_settings
from blogify.core.domain_types import Actor
from blogify.schemas.post import (
    CommentCreate, CommentResponse, DeletePostResponse, LikeResponse,
    PostDetailResponse, PostResponse,
)
from blogify.services.comments import CommentService
from blogify.services.post_lifecycle import CoverImage, PostLifecycle
from blogify.services.post_queries import PostQueries, PostView

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/posts", tags=["posts"])


@router.get("", response_model=list[PostResponse])
async def list_posts(queries: PostQueries = Depends(get_post_queries)):
    """All posts, newest first."""
    default_image = get_settings().default_image_url
    return [post_payload(v, default_image) for v in await queries.list_posts()]


@router.post(
    "", response_model=PostResponse, status_code=status.HTTP_201_CREATED,
)
async def create_post(
    title: str | None = Form(None),
    body: str | None = Form(None),
    category: str | None = Form(None),
    cover_image: UploadFile | None = File(None),
    actor: Actor = Depends(get_actor),
    lifecycle: PostLifecycle = Depends(get_post_lifecycle),
):
    """Create a post owned by the current user, optionally with a cover image."""
    image = None
    if cover_image is not None and cover_image.filename:
        data = await cover_image.read(lifecycle.max_upload_bytes + 1)
        image = CoverImage(
            filename=cover_image.filename,
            content_type=cover_image.content_type or "",
            data=data,
        )
    post = await lifecycle.create_post(
        actor, title, body, category=category, cover_image=image,
    )
    view = PostView(post=post, author_name=actor.full_name or "")
    return post_payload(view, get_settings().default_image_url)


@router.get("/{post_id}", response_model=PostDetailResponse)
async def get_post(
    post_id: UUID,
    queries: PostQueries = Depends(get_post_queries),
    comments: CommentService = Depends(get_comment_service),
):
    """Post with its comments (oldest first) and likers."""
    view = await queries.get_post(post_id)
    return post_detail_payload(
        view,
        await comments.list_for_post(post_id),
        get_settings().default_image_url,
    )


@router.delete("/{post_id}", response_model=DeletePostResponse)
async def delete_post(
    post_id: UUID,
    actor: Actor = Depends(get_actor),
    lifecycle: PostLifecycle = Depends(get_post_lifecycle),
):
    """Delete an owned post, its comments and (best effort) its cover image."""
    report = await lifecycle.delete_post(post_id, actor)
    return DeletePostResponse(
        message="Post deleted successfully",
        post_id=report.post_id,
        post_deleted=report.post_deleted,
        comments_deleted=report.comments_deleted,
        media_cleanup=report.media_cleanup.value,
    )


@router.post("/{post_id}/like", response_model=LikeResponse)
async def toggle_like(
    post_id: UUID,
    actor: Actor = Depends(get_actor),
    lifecycle: PostLifecycle = Depends(get_post_lifecycle),
):
    """Like the post, or remove the like if the user already liked it."""
    result = await lifecycle.toggle_like(post_id, actor)
    return LikeResponse(
        post_id=result.post_id, liked=result.liked, like_count=result.like_count,
    )


@router.post(
    "/{post_id}/comments",
    response_model=CommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_comment(
    post_id: UUID,
    body: CommentCreate,
    actor: Actor = Depends(get_actor),
    comments: CommentService = Depends(get_comment_service),
):
    view = await comments.add_comment(post_id, actor, body.content)
    return comment_payload(view)


@router.delete("/{post_id}/comments/{comment_id}")
async def delete_comment(
    post_id: UUID,
    comment_id: UUID,
    actor: Actor = Depends(get_actor),
    comments: CommentService = Depends(get_comment_service),
):
    await comments.delete_comment(post_id, comment_id, actor)
    return {"message": "Comment deleted", "comment_id": str(comment_id)}
