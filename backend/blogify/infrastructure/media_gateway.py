"""Cloudinary Media Gateway — upload cover images and delete them by reference.

Invariants:
    - upload() returns the secure delivery URL, or raises UploadRejectedError
    - delete_by_reference() is idempotent: Cloudinary "not found" counts as deleted
    - Unreachable host / auth failures on delete raise DependencyUnavailableError
    - Blocking SDK calls run in a worker thread (asyncio.to_thread)

Design Decisions:
    - Uploads go to one folder with a size-limiting transformation, so stored
      images never exceed 800x600
    - Timeouts are applied by the caller (services/post_lifecycle.py), which
      owns the best-effort policy
"""

import asyncio
import logging

import cloudinary
import cloudinary.uploader
from cloudinary.exceptions import Error as CloudinaryError

from blogify.core.errors import DependencyUnavailableError, UploadRejectedError
from blogify.core.media_reference import extract_public_id

logger = logging.getLogger(__name__)

_DELETED_RESULTS = ("ok", "not found")


class CloudinaryMediaGateway:
    """MediaGateway implementation backed by the Cloudinary SDK."""

    def __init__(
        self,
        cloud_name: str,
        api_key: str,
        api_secret: str,
        folder: str = "blog-images",
        allowed_formats: list[str] | None = None,
    ):
        cloudinary.config(
            cloud_name=cloud_name,
            api_key=api_key,
            api_secret=api_secret,
            secure=True,
        )
        self.folder = folder
        self.allowed_formats = allowed_formats or ["jpg", "jpeg", "png", "gif", "webp"]

    async def upload(self, data: bytes, filename: str, content_type: str) -> str:
        try:
            result = await asyncio.to_thread(
                cloudinary.uploader.upload,
                data,
                folder=self.folder,
                resource_type="image",
                allowed_formats=self.allowed_formats,
                transformation=[
                    {"width": 800, "height": 600, "crop": "limit"},
                    {"quality": "auto"},
                ],
            )
        except CloudinaryError as e:
            logger.warning(f"Cloudinary upload failed for {filename}: {e}")
            raise UploadRejectedError(
                "Invalid file format or corrupted file", "media_host",
            ) from e
        except OSError as e:
            raise DependencyUnavailableError(
                f"Cloudinary unreachable: {e}", "media",
            ) from e

        url = result.get("secure_url")
        if not url:
            raise UploadRejectedError("Media host returned no URL", "media_host")
        logger.info(f"Uploaded {filename} ({content_type}) to Cloudinary")
        return url

    async def delete_by_reference(self, reference: str) -> bool:
        public_id = extract_public_id(reference)
        if not public_id:
            return True
        try:
            result = await asyncio.to_thread(
                cloudinary.uploader.destroy, public_id, invalidate=True,
            )
        except (CloudinaryError, OSError) as e:
            raise DependencyUnavailableError(
                f"Cloudinary delete failed: {e}", "media",
            ) from e
        outcome = result.get("result")
        logger.info(f"Cloudinary destroy {public_id}: {outcome}")
        return outcome in _DELETED_RESULTS
