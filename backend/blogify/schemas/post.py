"""Post Schemas — post, comment, like and deletion payloads.

Invariants:
    - CommentCreate.content: 1-5000 chars, stripped, non-empty
    - DeletePostResponse reports post deletion and media cleanup separately
    - liker_ids preserves like order and never repeats an id
"""

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, Field, field_validator


class PostResponse(BaseModel):
    id: UUID
    title: str
    body: str
    category: str
    cover_image_url: str | None = None
    display_image_url: str
    owner_id: UUID
    author_name: str
    liker_ids: list[UUID] = Field(default_factory=list)
    like_count: int = 0
    created_at: datetime
    updated_at: datetime


class CommentCreate(BaseModel):
    content: str = Field(min_length=1, max_length=5_000)

    @field_validator("content")
    @classmethod
    def strip_content(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("content cannot be empty or whitespace")
        return v


class CommentResponse(BaseModel):
    id: UUID
    post_id: UUID
    content: str
    author_id: UUID
    author_name: str
    created_at: datetime


class PostDetailResponse(PostResponse):
    comments: list[CommentResponse] = Field(default_factory=list)


class LikeResponse(BaseModel):
    post_id: UUID
    liked: bool
    like_count: int


class DeletePostResponse(BaseModel):
    message: str
    post_id: UUID
    post_deleted: bool
    comments_deleted: int
    media_cleanup: Literal["not_applicable", "deleted", "failed"]
