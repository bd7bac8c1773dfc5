"""
Storage services - document and blob stores.

Thin get/put/delete/list wrappers over the Document and Blob models.
Database failures surface as PersistenceError.
"""

import logging
from dataclasses import dataclass
from typing import Any

from django.db import DatabaseError

from .exceptions import PersistenceError
from .models import Blob, Document

logger = logging.getLogger(__name__)


class DocumentStore:
    """JSON documents keyed by logical name. No transactions, no partial updates."""

    def get(self, key: str) -> Any:
        """Return the stored JSON value, or None if the key is absent."""
        try:
            document = Document.objects.filter(key=key).first()
        except DatabaseError as e:
            logger.error("Document read failed: key=%s error=%s", key, e)
            raise PersistenceError(f"Failed to read {key}") from e
        return document.data if document else None

    def put(self, key: str, value: Any) -> None:
        """Replace the whole document stored under key."""
        try:
            Document.objects.update_or_create(key=key, defaults={"data": value})
        except DatabaseError as e:
            logger.error("Document write failed: key=%s error=%s", key, e)
            raise PersistenceError(f"Failed to write {key}") from e


@dataclass(frozen=True)
class StoredBlob:
    """A blob read back from the store."""

    key: str
    content: bytes
    content_type: str


class BlobStore:
    """Binary objects (uploaded images)."""

    def get(self, key: str) -> StoredBlob | None:
        try:
            blob = Blob.objects.filter(key=key).first()
        except DatabaseError as e:
            raise PersistenceError(f"Failed to read blob {key}") from e
        if blob is None:
            return None
        return StoredBlob(blob.key, bytes(blob.content), blob.content_type)

    def put(self, key: str, content: bytes, content_type: str) -> None:
        try:
            Blob.objects.update_or_create(
                key=key,
                defaults={"content": content, "content_type": content_type},
            )
        except DatabaseError as e:
            raise PersistenceError(f"Failed to write blob {key}") from e

    def delete(self, key: str) -> None:
        try:
            Blob.objects.filter(key=key).delete()
        except DatabaseError as e:
            raise PersistenceError(f"Failed to delete blob {key}") from e

    def list(self) -> list[str]:
        try:
            return list(Blob.objects.order_by("key").values_list("key", flat=True))
        except DatabaseError as e:
            raise PersistenceError("Failed to list blobs") from e
