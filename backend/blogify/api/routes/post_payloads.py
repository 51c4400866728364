"""Post Payloads — ORM/view → response schema conversion shared by post and user routes."""

from blogify.core.media_reference import safe_image_url
from blogify.schemas.post import CommentResponse, PostDetailResponse, PostResponse
from blogify.services.comments import CommentView
from blogify.services.post_queries import PostView


def post_payload(view: PostView, default_image_url: str) -> PostResponse:
    post = view.post
    return PostResponse(
        id=post.id,
        title=post.title,
        body=post.body,
        category=post.category,
        cover_image_url=post.cover_image_url,
        display_image_url=safe_image_url(post.cover_image_url, default_image_url),
        owner_id=post.owner_id,
        author_name=view.author_name,
        liker_ids=view.liker_ids,
        like_count=len(view.liker_ids),
        created_at=post.created_at,
        updated_at=post.updated_at,
    )


def comment_payload(view: CommentView) -> CommentResponse:
    comment = view.comment
    return CommentResponse(
        id=comment.id,
        post_id=comment.post_id,
        content=comment.content,
        author_id=comment.author_id,
        author_name=view.author_name,
        created_at=comment.created_at,
    )


def post_detail_payload(
    view: PostView, comments: list[CommentView], default_image_url: str,
) -> PostDetailResponse:
    base = post_payload(view, default_image_url)
    return PostDetailResponse(
        **base.model_dump(),
        comments=[comment_payload(c) for c in comments],
    )
