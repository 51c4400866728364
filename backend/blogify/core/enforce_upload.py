"""Upload Enforcement — cover image policy checked before the media host is called.

Invariants:
    - All functions are PURE: no IO, no async
    - Only image/* content types with an allowed extension pass
    - Empty files and files above the size ceiling are rejected
"""

from blogify.core.errors import UploadRejectedError

DEFAULT_MAX_UPLOAD_BYTES = 5 * 1024 * 1024
DEFAULT_ALLOWED_FORMATS = frozenset({"jpg", "jpeg", "png", "gif", "webp"})


def file_extension(filename: str | None) -> str:
    if not filename or "." not in filename:
        return ""
    return filename.rsplit(".", 1)[1].lower()


def check_upload(
    filename: str | None,
    content_type: str | None,
    size: int,
    max_bytes: int = DEFAULT_MAX_UPLOAD_BYTES,
    allowed_formats: frozenset[str] = DEFAULT_ALLOWED_FORMATS,
) -> None:
    """Raise UploadRejectedError when the file breaks the upload policy."""
    if not (content_type or "").startswith("image/"):
        raise UploadRejectedError(
            "Only image files are allowed", "content_type",
        )
    if file_extension(filename) not in allowed_formats:
        raise UploadRejectedError(
            f"Unsupported image format. Allowed: {', '.join(sorted(allowed_formats))}",
            "format",
        )
    if size <= 0:
        raise UploadRejectedError("Uploaded file is empty", "empty")
    if size > max_bytes:
        raise UploadRejectedError(
            f"File too large. Maximum file size is {max_bytes // (1024 * 1024)}MB",
            "size",
        )
