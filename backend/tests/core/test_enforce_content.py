"""Content Enforcement — required fields and category set.

Tests:
    - Missing/blank title, body and comment content raise FieldValidationError
    - Values are returned stripped
    - Category defaults when absent, rejects unknown labels
"""

import pytest

from blogify.core.domain_types import Category, DEFAULT_CATEGORY
from blogify.core.enforce_content import (
    MAX_TITLE_LENGTH, clean_comment_content, clean_post_fields, parse_category,
)
from blogify.core.errors import FieldValidationError


# ─── posts ───────────────────────────────────────────────────────

def test_post_fields_are_stripped():
    assert clean_post_fields("  Title ", " Body\n") == ("Title", "Body")


@pytest.mark.parametrize("title,body,field", [
    (None, "body", "title"),
    ("   ", "body", "title"),
    ("title", None, "body"),
    ("title", "", "body"),
])
def test_missing_post_field_rejected(title, body, field):
    with pytest.raises(FieldValidationError) as exc_info:
        clean_post_fields(title, body)
    assert exc_info.value.field == field
    assert exc_info.value.http_status == 400


def test_overlong_title_rejected():
    with pytest.raises(FieldValidationError):
        clean_post_fields("x" * (MAX_TITLE_LENGTH + 1), "body")


# ─── comments ────────────────────────────────────────────────────

def test_comment_content_required():
    with pytest.raises(FieldValidationError) as exc_info:
        clean_comment_content("   ")
    assert exc_info.value.field == "content"


def test_comment_content_stripped():
    assert clean_comment_content(" nice post ") == "nice post"


# ─── categories ──────────────────────────────────────────────────

@pytest.mark.parametrize("label", [None, "", "  "])
def test_absent_category_uses_default(label):
    assert parse_category(label) is DEFAULT_CATEGORY


def test_known_category_accepted():
    assert parse_category("Health") is Category.HEALTH


def test_unknown_category_rejected():
    with pytest.raises(FieldValidationError) as exc_info:
        parse_category("Cooking")
    assert exc_info.value.field == "category"
