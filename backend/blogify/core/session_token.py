"""Session Token Codec — issues and verifies signed, time-bound identity tokens.

Invariants:
    - Payload is {sub, email, iat, exp}; sub is the user id as a string
    - verify() raises TokenInvalidError for ANY bad input (signature, expiry,
      structure, missing claims) and nothing else
    - Expiry comes from configuration, never from the caller

Design Decisions:
    - JWT (HS256) via python-jose: self-contained, no server-side session table
    - Stateless: no revocation list, logout only clears the client cookie
    - Pure CPU work, no IO, so the codec lives in core/
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from uuid import UUID

from jose import JWTError, jwt

from blogify.core.domain_types import UserId
from blogify.core.errors import TokenInvalidError
from blogify.core.repository_protocols import UserLike


@dataclass(frozen=True)
class IssuedToken:
    token: str
    expires_at: datetime


@dataclass(frozen=True)
class TokenClaims:
    subject: UserId
    email: str
    expires_at: datetime


class SessionTokenCodec:
    """Signs and verifies session tokens with a server-held secret."""

    def __init__(
        self, secret_key: str, algorithm: str = "HS256", ttl_hours: float = 48,
    ):
        if not secret_key:
            raise ValueError("secret_key must not be empty")
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.ttl = timedelta(hours=ttl_hours)

    def issue(self, user: UserLike, now: datetime | None = None) -> IssuedToken:
        issued_at = now or datetime.now(timezone.utc)
        expires_at = issued_at + self.ttl
        claims = {
            "sub": str(user.id),
            "email": user.email,
            "iat": issued_at,
            "exp": expires_at,
        }
        token = jwt.encode(claims, self.secret_key, algorithm=self.algorithm)
        return IssuedToken(token=token, expires_at=expires_at)

    def verify(self, token: str) -> TokenClaims:
        if not isinstance(token, str) or not token:
            raise TokenInvalidError("empty")
        try:
            claims = jwt.decode(
                token, self.secret_key, algorithms=[self.algorithm],
            )
        except (JWTError, ValueError, TypeError) as e:
            raise TokenInvalidError(type(e).__name__) from e
        return _claims_from_payload(claims)


def _claims_from_payload(claims: dict) -> TokenClaims:
    subject = claims.get("sub")
    email = claims.get("email")
    exp = claims.get("exp")
    if not isinstance(subject, str) or not isinstance(email, str):
        raise TokenInvalidError("missing claims")
    if not isinstance(exp, (int, float)):
        raise TokenInvalidError("missing expiry")
    try:
        user_id = UserId(UUID(subject))
    except ValueError as e:
        raise TokenInvalidError("malformed subject") from e
    return TokenClaims(
        subject=user_id,
        email=email,
        expires_at=datetime.fromtimestamp(exp, tz=timezone.utc),
    )
