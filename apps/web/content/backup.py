"""Content backup and restore."""

import logging
from datetime import UTC, datetime
from typing import Any

from apps.web.core.exceptions import PersistenceError
from apps.web.core.stores import BlobStore, DocumentStore

logger = logging.getLogger(__name__)

BACKUP_VERSION = 1
BACKUP_KEYS = ("menu", "schedule", "bookings", "hero", "about")
RESTORE_KEYS = (*BACKUP_KEYS, "favicon")


def create_backup() -> dict[str, Any]:
    """Snapshot of content documents plus the keys of every stored image."""
    documents = DocumentStore()
    image_keys = BlobStore().list()
    backup = {
        "version": BACKUP_VERSION,
        "exportedAt": datetime.now(UTC).isoformat(),
        "content": {key: documents.get(key) for key in BACKUP_KEYS},
        "imageKeys": image_keys,
    }
    logger.info("Backup created: image_count=%d", len(image_keys))
    return backup


def _clear_images(blobs: BlobStore) -> int:
    keys = blobs.list()
    for key in keys:
        try:
            blobs.delete(key)
        except PersistenceError as e:
            logger.warning("Failed to delete image during restore: key=%s error=%s", key, e)
    return len(keys)


def restore_backup(
    content: dict[str, Any], clear_existing_images: bool = False
) -> list[str]:
    """
    Write each provided content document.

    Only known keys are restored; a key mapped to null is written as null.
    Image files are restored separately, one request per image.

    Returns:
        The keys that were written.
    """
    if clear_existing_images:
        count = _clear_images(BlobStore())
        logger.info("Cleared existing images: count=%d", count)

    documents = DocumentStore()
    restored = [key for key in RESTORE_KEYS if key in content]
    for key in restored:
        documents.put(key, content[key])

    logger.info("Content restored: keys=%s", ",".join(restored))
    return restored
