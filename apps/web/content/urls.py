"""
URL routing for site content endpoints.
"""

from django.urls import path

from apps.web.content import views
from apps.web.content.documents import DOCUMENT_DEFAULTS

app_name = "content"

urlpatterns = [
    path("admin/backup", views.backup_view, name="backup"),
    path("admin/restore", views.restore_view, name="restore"),
    path("admin/images", views.admin_images, name="admin-images"),
    path("admin/restore-image", views.restore_image, name="restore-image"),
    path("images/<path:key>", views.serve_image, name="image"),
    path("manifest", views.manifest, name="manifest"),
    path("admin/favicon", views.admin_favicon, name="admin-favicon"),
]

# One public and one admin route per editable document
for _key in DOCUMENT_DEFAULTS:
    urlpatterns.append(path(_key, views.public_document, {"key": _key}, name=_key))
    if _key != "favicon":
        urlpatterns.append(
            path(f"admin/{_key}", views.admin_document, {"key": _key}, name=f"admin-{_key}")
        )
