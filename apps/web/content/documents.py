"""
Editable site documents.

Each document is stored whole under its key. Reads of a missing document
return its default so a fresh install renders an empty site.
"""

import copy
import logging
from typing import Any

from foodtruck_schemas import MenuData
from pydantic import ValidationError as PydanticValidationError

from apps.web.core.exceptions import InvalidInputError, NotFoundError
from apps.web.core.stores import DocumentStore

logger = logging.getLogger(__name__)

DOCUMENT_DEFAULTS: dict[str, Any] = {
    "menu": {"categories": []},
    "schedule": [],
    "settings": {"onlineOrderingEnabled": False},
    "hero": {"title": "", "tagline": "", "ctaText": "", "ctaLink": ""},
    "about": {"heading": "", "paragraphs": []},
    "sociallinks": {"links": []},
    "favicon": {
        "hasCustomFavicon": False,
        "siteName": "",
        "themeColor": "#ffffff",
        "metaDescription": "",
    },
}


def _check_key(key: str) -> None:
    if key not in DOCUMENT_DEFAULTS:
        raise NotFoundError(f"Unknown document: {key}")


def get_document(key: str, store: DocumentStore | None = None) -> Any:
    """Stored value for key, or a fresh copy of its default."""
    _check_key(key)
    value = (store or DocumentStore()).get(key)
    if value is None:
        return copy.deepcopy(DOCUMENT_DEFAULTS[key])
    return value


def validate_menu(value: Any) -> MenuData:
    """
    Raises:
        InvalidInputError: Duplicate category ids, duplicate item names
            within a category, or negative prices.
    """
    try:
        return MenuData.model_validate(value)
    except PydanticValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(loc) for loc in first["loc"])
        raise InvalidInputError(f"Invalid menu: {field}: {first['msg']}") from e


def put_document(key: str, value: Any, store: DocumentStore | None = None) -> None:
    """Replace a document. Menus are validated first and stored as sent."""
    _check_key(key)
    if key == "menu":
        validate_menu(value)
    (store or DocumentStore()).put(key, value)
    logger.info("Document saved: key=%s", key)
