"""
Site content API views - public reads, admin edits, backup and images.
"""

import json

from django.http import HttpRequest, HttpResponse, JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_http_methods, require_POST

from apps.web.content import backup, favicon, images
from apps.web.content.documents import get_document, put_document
from apps.web.core.decorators import api_view, read_json
from apps.web.core.exceptions import InvalidInputError
from apps.web.core.stores import BlobStore


def _document_response(value: object) -> JsonResponse:
    return JsonResponse(value, safe=False)


@require_GET
@api_view
def public_document(_request: HttpRequest, key: str) -> JsonResponse:
    """GET /api/<menu|schedule|settings|hero|about|sociallinks|favicon>"""
    return _document_response(get_document(key))


@csrf_exempt
@require_http_methods(["GET", "POST"])
@api_view
def admin_document(request: HttpRequest, key: str) -> JsonResponse:
    """
    GET  /api/admin/<key> - current document or its default
    POST /api/admin/<key> - replace the whole document
    """
    if request.method == "GET":
        return _document_response(get_document(key))

    put_document(key, read_json(request))
    return JsonResponse({"success": True})


@csrf_exempt
@require_http_methods(["GET", "POST", "DELETE"])
@api_view
def admin_favicon(request: HttpRequest) -> JsonResponse:
    """
    GET/POST /api/admin/favicon - as for any other document
    DELETE   /api/admin/favicon - drop the custom icons and reset settings
    """
    if request.method == "GET":
        return _document_response(get_document("favicon"))
    if request.method == "POST":
        put_document("favicon", read_json(request))
        return JsonResponse({"success": True})

    favicon.delete_favicon()
    return JsonResponse({"success": True})


@require_GET
@api_view
def manifest(_request: HttpRequest) -> HttpResponse:
    """GET /api/manifest"""
    response = HttpResponse(
        json.dumps(favicon.build_manifest()),
        content_type="application/manifest+json",
    )
    response["Cache-Control"] = favicon.MANIFEST_CACHE_CONTROL
    return response


@require_GET
@api_view
def backup_view(_request: HttpRequest) -> JsonResponse:
    """GET /api/admin/backup"""
    return JsonResponse(backup.create_backup())


@csrf_exempt
@require_POST
@api_view
def restore_view(request: HttpRequest) -> JsonResponse:
    """POST /api/admin/restore - {content, clearExistingImages?}"""
    body = read_json(request)
    content = body.get("content") if isinstance(body, dict) else None
    if not isinstance(content, dict):
        raise InvalidInputError("No content provided")

    restored = backup.restore_backup(
        content, clear_existing_images=bool(body.get("clearExistingImages"))
    )
    return JsonResponse(
        {
            "success": True,
            "message": "Content restored successfully",
            "restoredKeys": restored,
        }
    )


@csrf_exempt
@require_http_methods(["POST", "DELETE"])
@api_view
def admin_images(request: HttpRequest) -> JsonResponse:
    """
    POST   /api/admin/images - multipart upload, field "file"
    DELETE /api/admin/images?key=...
    """
    if request.method == "DELETE":
        key = request.GET.get("key")
        if not key:
            raise InvalidInputError("No key provided")
        images.delete_image(key)
        return JsonResponse({"success": True})

    upload = request.FILES.get("file")
    if upload is None:
        raise InvalidInputError("No file provided")
    return JsonResponse({"key": images.upload_image(upload)})


@csrf_exempt
@require_POST
@api_view
def restore_image(request: HttpRequest) -> JsonResponse:
    """POST /api/admin/restore-image - multipart "file" and "key" """
    upload = request.FILES.get("file")
    if upload is None:
        raise InvalidInputError("No file provided")
    key = request.POST.get("key")
    if not key:
        raise InvalidInputError("No key provided")

    images.restore_image(upload, key)
    return JsonResponse({"success": True, "key": key})


@require_GET
def serve_image(_request: HttpRequest, key: str) -> HttpResponse:
    """GET /api/images/<key>"""
    blob = BlobStore().get(key)
    if blob is None:
        return HttpResponse("Not found", status=404)

    response = HttpResponse(blob.content, content_type=blob.content_type)
    response["Cache-Control"] = images.CACHE_CONTROL
    return response
