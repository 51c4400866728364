"""Content Enforcement — required fields and closed-set checks for posts and comments.

Invariants:
    - All functions are PURE: no IO, no async, no DB
    - Returned strings are stripped; whitespace-only input counts as missing
    - Unknown category labels are rejected, never coerced to the default
"""

from blogify.core.domain_types import Category, DEFAULT_CATEGORY
from blogify.core.errors import FieldValidationError

MAX_TITLE_LENGTH = 200
MAX_BODY_LENGTH = 50_000
MAX_COMMENT_LENGTH = 5_000


def parse_category(label: str | None) -> Category:
    """Map a submitted label to a Category; absent/blank selects the default."""
    if label is None or not label.strip():
        return DEFAULT_CATEGORY
    try:
        return Category(label.strip())
    except ValueError:
        allowed = ", ".join(c.value for c in Category)
        raise FieldValidationError(
            f"Unknown category '{label}'. Allowed: {allowed}", "category",
        )


def clean_post_fields(title: str | None, body: str | None) -> tuple[str, str]:
    title = _required(title, "title", MAX_TITLE_LENGTH)
    body = _required(body, "body", MAX_BODY_LENGTH)
    return title, body


def clean_comment_content(content: str | None) -> str:
    return _required(content, "content", MAX_COMMENT_LENGTH)


def _required(value: str | None, field: str, max_length: int) -> str:
    cleaned = (value or "").strip()
    if not cleaned:
        raise FieldValidationError(f"{field} is required", field)
    if len(cleaned) > max_length:
        raise FieldValidationError(
            f"{field} exceeds {max_length} characters", field,
        )
    return cleaned
