"""User Routes — signup, signin, logout, current user and author profile.

Invariants:
    - signin sets the session cookie (HttpOnly, SameSite=lax, max_age = token TTL)
    - Failed signin always answers with the same INVALID_CREDENTIALS envelope
    - logout only clears the cookie (stateless tokens, no server-side revocation)
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status

from blogify.api.dependencies import (
    get_actor, get_credential_store, get_post_queries, get_token_codec,
)
from blogify.api.routes.post_payloads import post_payload
from blogify.config import get_settings
from blogify.core.domain_types import Actor
from blogify.core.enforce_ownership import require_authenticated
from blogify.core.session_token import SessionTokenCodec
from blogify.schemas.user import (
    ProfileResponse, SigninRequest, SigninResponse, SignupRequest, UserResponse,
)
from blogify.services.credential_store import CredentialStore
from blogify.services.post_queries import PostQueries

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/users", tags=["users"])


def _user_payload(user) -> UserResponse:
    return UserResponse(
        id=user.id,
        email=user.email,
        full_name=user.full_name,
        created_at=user.created_at,
    )


@router.post(
    "/signup", response_model=UserResponse, status_code=status.HTTP_201_CREATED,
)
async def signup(
    body: SignupRequest,
    store: CredentialStore = Depends(get_credential_store),
):
    user = await store.create(body.email, body.full_name, body.password)
    return _user_payload(user)


@router.post("/signin", response_model=SigninResponse)
async def signin(
    body: SigninRequest,
    response: Response,
    store: CredentialStore = Depends(get_credential_store),
    codec: SessionTokenCodec = Depends(get_token_codec),
):
    user = await store.verify(body.email, body.password)
    issued = codec.issue(user)
    settings = get_settings()
    response.set_cookie(
        settings.session_cookie_name,
        issued.token,
        max_age=int(codec.ttl.total_seconds()),
        httponly=True,
        samesite="lax",
        secure=settings.session_cookie_secure,
    )
    logger.info("User signed in", extra={"user_id": user.id})
    return SigninResponse(user=_user_payload(user), expires_at=issued.expires_at)


@router.post("/logout")
async def logout(response: Response):
    response.delete_cookie(get_settings().session_cookie_name)
    return {"message": "Signed out"}


@router.get("/me", response_model=UserResponse)
async def current_user(actor: Actor = Depends(get_actor)):
    user_id = require_authenticated(actor)
    return UserResponse(id=user_id, email=actor.email, full_name=actor.full_name)


@router.get("/{user_id}/profile", response_model=ProfileResponse)
async def author_profile(
    user_id: UUID, queries: PostQueries = Depends(get_post_queries),
):
    """Author plus their posts, newest first."""
    author, views = await queries.list_by_owner(user_id)
    default_image = get_settings().default_image_url
    return ProfileResponse(
        author=_user_payload(author),
        posts=[post_payload(v, default_image) for v in views],
    )
