"""Media References — parsing and display rules for stored cover image URLs.

Invariants:
    - extract_public_id returns None when there is nothing deletable
    - Strings that are not http(s) URLs are treated as public ids already
    - safe_image_url always returns something displayable
"""

import re

DEFAULT_IMAGE_URL = "/images/default.png"

_VERSION_SEGMENT = re.compile(r"^v\d+$")


def is_cloudinary_url(url: str | None) -> bool:
    return bool(url) and "cloudinary.com" in url


def extract_public_id(reference: str | None) -> str | None:
    """Public id from a delivery URL like
    https://res.cloudinary.com/<cloud>/image/upload/v1234/blog-images/cat.jpg
    → blog-images/cat
    """
    if not reference:
        return None
    if not reference.startswith("http"):
        return reference

    parts = reference.split("?", 1)[0].split("/")
    if "upload" not in parts:
        return None
    tail = parts[parts.index("upload") + 1:]
    if tail and _VERSION_SEGMENT.match(tail[0]):
        tail = tail[1:]
    if not tail:
        return None
    path = "/".join(tail)
    return path.rsplit(".", 1)[0] if "." in tail[-1] else path


def safe_image_url(url: str | None, fallback: str = DEFAULT_IMAGE_URL) -> str:
    if not url:
        return fallback
    return url
