"""
Booking API views - public request form and admin review.
"""

from django.http import HttpRequest, JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_http_methods, require_POST

from foodtruck_schemas import BookingSubmission

from apps.web.bookings.serializers import BookingUpdateRequest
from apps.web.bookings.store import BookingStore
from apps.web.core.decorators import api_view, parse_body


@csrf_exempt
@require_POST
@api_view
def submit_booking(request: HttpRequest) -> JsonResponse:
    """
    POST /api/bookings

    Every field but message is required; guestCount must be a positive
    integer. New bookings start as pending.
    """
    submission = parse_body(request, BookingSubmission)
    booking = BookingStore().create(submission)
    return JsonResponse({"success": True, "id": booking.id})


@csrf_exempt
@require_http_methods(["GET", "POST"])
@api_view
def admin_bookings(request: HttpRequest) -> JsonResponse:
    """
    GET  /api/admin/bookings
    POST /api/admin/bookings - {id, status, adminNotes?, private?}
    """
    store = BookingStore()
    if request.method == "GET":
        return JsonResponse([b.to_json_dict() for b in store.list()], safe=False)

    body = parse_body(request, BookingUpdateRequest)
    extra = (
        {"admin_notes": body.admin_notes}
        if "admin_notes" in body.model_fields_set
        else {}
    )
    store.update(body.id, body.status, private=body.private, **extra)
    return JsonResponse({"success": True})
