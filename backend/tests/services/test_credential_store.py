"""Credential Store — signup, verification and re-fetch by id.

Invariants:
    - Emails normalized on write and lookup
    - Duplicate email → DuplicateIdentityError (also case-insensitively)
    - Unknown email and wrong password raise the same InvalidCredentialsError
    - Stored hash never equals the plaintext
"""

from uuid import uuid4

import pytest

from blogify.core.errors import (
    DuplicateIdentityError, FieldValidationError, InvalidCredentialsError,
)


async def test_create_normalizes_email_and_hashes_password(store):
    user = await store.create("  Alice@Example.com ", " Alice ", "s3cret-pass")
    assert user.email == "alice@example.com"
    assert user.full_name == "Alice"
    assert user.password_hash != "s3cret-pass"
    assert user.id is not None
    assert user.created_at is not None


async def test_duplicate_email_rejected(store, alice):
    with pytest.raises(DuplicateIdentityError) as exc_info:
        await store.create("alice@example.com", "Other", "pw-123456")
    assert exc_info.value.http_status == 409


async def test_duplicate_check_ignores_case(store, alice):
    with pytest.raises(DuplicateIdentityError):
        await store.create("ALICE@example.COM", "Other", "pw-123456")


@pytest.mark.parametrize("email,name,password,field", [
    ("", "Name", "pw", "email"),
    ("x@example.com", "   ", "pw", "full_name"),
    ("x@example.com", "Name", "", "password"),
])
async def test_missing_fields_rejected(store, email, name, password, field):
    with pytest.raises(FieldValidationError) as exc_info:
        await store.create(email, name, password)
    assert exc_info.value.field == field


# ─── verify ──────────────────────────────────────────────────────

async def test_verify_returns_user(store, alice):
    user = await store.verify("Alice@Example.com", "alice-password")
    assert user.id == alice.id


async def test_wrong_password_and_unknown_email_are_indistinguishable(store, alice):
    with pytest.raises(InvalidCredentialsError) as wrong_pw:
        await store.verify("alice@example.com", "not-it")
    with pytest.raises(InvalidCredentialsError) as unknown:
        await store.verify("nobody@example.com", "not-it")
    assert wrong_pw.value.to_response()["error"]["message"] == \
        unknown.value.to_response()["error"]["message"]
    assert wrong_pw.value.code == unknown.value.code


async def test_verify_with_empty_password_fails(store, alice):
    with pytest.raises(InvalidCredentialsError):
        await store.verify("alice@example.com", "")


# ─── get_by_id ───────────────────────────────────────────────────

async def test_get_by_id(store, alice):
    assert (await store.get_by_id(alice.id)).email == "alice@example.com"


async def test_get_by_id_unknown_returns_none(store):
    assert await store.get_by_id(uuid4()) is None
