"""Uploaded images held in the blob store."""

import logging
import re
import time

from django.core.files.uploadedfile import UploadedFile

from apps.web.core.exceptions import InvalidInputError
from apps.web.core.stores import BlobStore

logger = logging.getLogger(__name__)

ALLOWED_TYPES = frozenset({"image/jpeg", "image/png", "image/webp"})
MAX_SIZE = 5 * 1024 * 1024
CACHE_CONTROL = "public, max-age=31536000, immutable"

EXTENSION_TYPES = {
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "png": "image/png",
    "webp": "image/webp",
    "gif": "image/gif",
}


def _extension(name: str) -> str:
    return name.rsplit(".", 1)[-1].lower() if "." in name else ""


def image_key(filename: str) -> str:
    """menu/<epoch ms>-<sanitized stem, max 50 chars>.<ext>"""
    ext = _extension(filename) or "jpg"
    stem = re.sub(r"\.[^/.]+$", "", filename)
    sanitized = re.sub(r"[^a-zA-Z0-9\-_]", "-", stem)[:50]
    return f"menu/{int(time.time() * 1000)}-{sanitized}.{ext}"


def upload_image(upload: UploadedFile) -> str:
    """
    Store an uploaded menu image under a fresh key.

    Raises:
        InvalidInputError: Unsupported type or larger than 5 MB.
    """
    if upload.content_type not in ALLOWED_TYPES:
        logger.warning("Invalid file type attempted: %s", upload.content_type)
        raise InvalidInputError(
            "Invalid file type. Only JPEG, PNG, and WebP are allowed."
        )
    if upload.size > MAX_SIZE:
        logger.warning("File too large: size=%d", upload.size)
        raise InvalidInputError("File too large. Maximum size is 5MB.")

    key = image_key(upload.name or "")
    BlobStore().put(key, upload.read(), upload.content_type)
    logger.info("Image uploaded: key=%s size=%d", key, upload.size)
    return key


def restore_image(upload: UploadedFile, key: str) -> None:
    """Store an image under the key it had when backed up."""
    content_type = upload.content_type
    if not content_type or content_type == "application/octet-stream":
        content_type = EXTENSION_TYPES.get(_extension(key), "image/jpeg")
    BlobStore().put(key, upload.read(), content_type)
    logger.info("Image restored: key=%s content_type=%s", key, content_type)


def delete_image(key: str) -> None:
    BlobStore().delete(key)
    logger.info("Image deleted: key=%s", key)
