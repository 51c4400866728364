"""Password Hashing — salted KDF hashing and constant-time verification.

Invariants:
    - Only derived hashes leave this module; plaintext is never stored or logged
    - verify_password never raises on a malformed stored hash, it returns False
    - dummy_hash() lets callers spend the same KDF cost when no user exists

Design Decisions:
    - werkzeug.security: salted scrypt/pbkdf2 with hmac.compare_digest comparison
    - Method is a parameter so settings can choose the KDF without code changes
"""

from functools import lru_cache

from werkzeug.security import check_password_hash, generate_password_hash

DEFAULT_HASH_METHOD = "scrypt"


def normalize_email(email: str) -> str:
    """Canonical form used for storage and lookup."""
    return email.strip().lower()


def hash_password(plaintext: str, method: str = DEFAULT_HASH_METHOD) -> str:
    return generate_password_hash(plaintext, method=method)


def verify_password(plaintext: str, password_hash: str) -> bool:
    try:
        return check_password_hash(password_hash, plaintext)
    except ValueError:
        return False


@lru_cache(maxsize=8)
def dummy_hash(method: str = DEFAULT_HASH_METHOD) -> str:
    """Hash of a throwaway secret, compared against when the email is unknown."""
    return generate_password_hash("blogify-timing-equalizer", method=method)
