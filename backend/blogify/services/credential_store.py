"""Credential Store — user signup, credential verification and re-fetch by id.

Invariants:
    - Emails are normalized before every read and write
    - The plaintext password only reaches core/passwords.hash_password / verify_password
    - verify() raises the same InvalidCredentialsError for unknown email and
      wrong password, after the same amount of hashing work
    - A unique-constraint race on signup maps to DuplicateIdentityError

Design Decisions:
    - AsyncSession passed in explicitly (no ambient connection state)
    - Implements core.repository_protocols.UserLookup for the identity resolver
"""

import logging
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from blogify.core.errors import (
    DuplicateIdentityError, FieldValidationError, InvalidCredentialsError,
)
from blogify.core.passwords import (
    DEFAULT_HASH_METHOD, dummy_hash, hash_password, normalize_email, verify_password,
)
from blogify.models.user import User

logger = logging.getLogger(__name__)

MAX_NAME_LENGTH = 200


class CredentialStore:
    """Persists users and checks their passwords."""

    def __init__(self, db: AsyncSession, hash_method: str = DEFAULT_HASH_METHOD):
        self.db = db
        self.hash_method = hash_method

    async def create(
        self, email: str, full_name: str, plaintext_password: str,
    ) -> User:
        email = normalize_email(email)
        full_name = (full_name or "").strip()
        if not email:
            raise FieldValidationError("email is required", "email")
        if not full_name or len(full_name) > MAX_NAME_LENGTH:
            raise FieldValidationError("full_name is required", "full_name")
        if not plaintext_password:
            raise FieldValidationError("password is required", "password")

        if await self._get_by_email(email):
            raise DuplicateIdentityError()

        user = User(
            email=email,
            full_name=full_name,
            password_hash=hash_password(plaintext_password, self.hash_method),
        )
        self.db.add(user)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise DuplicateIdentityError()
        await self.db.refresh(user)
        logger.info("User registered", extra={"user_id": user.id})
        return user

    async def verify(self, email: str, plaintext_password: str) -> User:
        user = await self._get_by_email(normalize_email(email or ""))
        if user is None:
            verify_password(plaintext_password or "", dummy_hash(self.hash_method))
            raise InvalidCredentialsError()
        if not verify_password(plaintext_password or "", user.password_hash):
            raise InvalidCredentialsError()
        return user

    async def get_by_id(self, user_id: UUID) -> User | None:
        result = await self.db.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()

    async def _get_by_email(self, email: str) -> User | None:
        result = await self.db.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()
