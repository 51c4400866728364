"""API Dependencies — FastAPI providers for actor, codec, gateway and services.

Invariants:
    - get_actor never fails: the identity middleware always sets request.state.actor,
      and a missing value reads as ANONYMOUS
    - Services receive the request-scoped AsyncSession explicitly

Design Decisions:
    - get_media_gateway is the seam tests override with an in-memory fake
"""

from functools import lru_cache

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from blogify.config import get_settings
from blogify.core.domain_types import ANONYMOUS, Actor
from blogify.core.repository_protocols import MediaGateway
from blogify.core.session_token import SessionTokenCodec
from blogify.infrastructure.database import get_db
from blogify.infrastructure.media_gateway import CloudinaryMediaGateway
from blogify.services.comments import CommentService
from blogify.services.credential_store import CredentialStore
from blogify.services.post_lifecycle import PostLifecycle
from blogify.services.post_queries import PostQueries


def get_actor(request: Request) -> Actor:
    return getattr(request.state, "actor", ANONYMOUS)


@lru_cache
def get_token_codec() -> SessionTokenCodec:
    settings = get_settings()
    return SessionTokenCodec(
        settings.secret_key,
        algorithm=settings.token_algorithm,
        ttl_hours=settings.token_ttl_hours,
    )


@lru_cache
def get_media_gateway() -> MediaGateway:
    settings = get_settings()
    return CloudinaryMediaGateway(
        cloud_name=settings.cloudinary_cloud_name,
        api_key=settings.cloudinary_api_key,
        api_secret=settings.cloudinary_api_secret,
        folder=settings.media_folder,
        allowed_formats=settings.media_allowed_formats,
    )


def get_credential_store(db: AsyncSession = Depends(get_db)) -> CredentialStore:
    return CredentialStore(db, hash_method=get_settings().password_hash_method)


def get_post_queries(db: AsyncSession = Depends(get_db)) -> PostQueries:
    return PostQueries(db)


def get_comment_service(db: AsyncSession = Depends(get_db)) -> CommentService:
    return CommentService(db)


def get_post_lifecycle(
    db: AsyncSession = Depends(get_db),
    media: MediaGateway = Depends(get_media_gateway),
) -> PostLifecycle:
    settings = get_settings()
    return PostLifecycle(
        db,
        media,
        media_timeout_seconds=settings.media_timeout_seconds,
        max_upload_bytes=settings.media_max_upload_bytes,
        allowed_formats=frozenset(f.lower() for f in settings.media_allowed_formats),
    )
