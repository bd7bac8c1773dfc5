"""Custom favicon set and the web app manifest built from it."""

import copy
import logging
from typing import Any

from apps.web.content.documents import DOCUMENT_DEFAULTS, get_document
from apps.web.core.stores import BlobStore, DocumentStore

logger = logging.getLogger(__name__)

FAVICON_KEYS = (
    "favicon/favicon.ico",
    "favicon/favicon-16x16.png",
    "favicon/favicon-32x32.png",
    "favicon/apple-touch-icon.png",
    "favicon/android-chrome-192x192.png",
    "favicon/android-chrome-512x512.png",
)

MANIFEST_CACHE_CONTROL = "public, max-age=86400"
DEFAULT_SITE_NAME = "Food Truck"
DEFAULT_THEME_COLOR = "#ffffff"


def delete_favicon() -> None:
    """Remove every generated icon and reset the favicon document."""
    blobs = BlobStore()
    for key in FAVICON_KEYS:
        blobs.delete(key)
    DocumentStore().put("favicon", copy.deepcopy(DOCUMENT_DEFAULTS["favicon"]))
    logger.info("Custom favicon removed")


def build_manifest() -> dict[str, Any]:
    favicon = get_document("favicon")
    name = favicon.get("siteName") or DEFAULT_SITE_NAME
    return {
        "name": name,
        "short_name": name,
        "icons": [
            {
                "src": f"/api/images/favicon/android-chrome-{size}x{size}.png",
                "sizes": f"{size}x{size}",
                "type": "image/png",
            }
            for size in (192, 512)
        ],
        "theme_color": favicon.get("themeColor") or DEFAULT_THEME_COLOR,
        "background_color": "#ffffff",
        "display": "standalone",
    }
