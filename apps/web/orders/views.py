"""
Order API views - online checkout, order lookup and the admin order console.
"""

import logging
from datetime import UTC, datetime

from django.http import HttpRequest, JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_http_methods, require_POST

from foodtruck_schemas import Order, OrderSource, OrderStatus, PaymentMethod

from apps.web.core.decorators import api_view, parse_body
from apps.web.core.exceptions import FeatureDisabledError, InvalidInputError
from apps.web.core.stores import DocumentStore
from apps.web.orders.pricing import generate_order_id, price_cart
from apps.web.orders.prep_queue import build_prep_queue
from apps.web.orders.serializers import CheckoutRequest, OrderPatchRequest
from apps.web.orders.store import OrderStore
from apps.web.payments.services import call_provider

logger = logging.getLogger(__name__)

# Online carts are capped per line; POS carts are not
ONLINE_MAX_QUANTITY = 50


def request_origin(request: HttpRequest) -> str:
    """scheme://host of the current request, used for provider return URLs."""
    return f"{request.scheme}://{request.get_host()}"


def _online_ordering_enabled() -> bool:
    site_settings = DocumentStore().get("settings")
    return isinstance(site_settings, dict) and bool(
        site_settings.get("onlineOrderingEnabled")
    )


@csrf_exempt
@require_POST
@api_view
def checkout(request: HttpRequest) -> JsonResponse:
    """
    POST /api/checkout

    Price the cart from the stored menu, open a provider checkout and
    persist a pending online order linked to the checkout session.

    Response: {success, clientSecret} for embedded checkout or
    {success, checkoutUrl} for hosted checkout.
    """
    body = parse_body(request, CheckoutRequest)
    if not body.items:
        raise InvalidInputError("Cart is empty")

    if not _online_ordering_enabled():
        raise FeatureDisabledError("Online ordering is currently disabled")

    cart = price_cart(body.items, max_quantity=ONLINE_MAX_QUANTITY)
    order_id = generate_order_id()
    origin = request_origin(request)

    result = call_provider(
        lambda p: p.create_online_checkout(
            cart.provider_line_items, cart.total_cents, order_id, origin
        )
    )

    now = datetime.now(UTC)
    OrderStore().create_pending(
        Order(
            id=order_id,
            items=cart.line_items,
            total=cart.total,
            status=OrderStatus.PENDING,
            source=OrderSource.ONLINE,
            payment_method=PaymentMethod.ONLINE,
            provider_session_id=result.provider_session_id,
            created_at=now,
            updated_at=now,
        )
    )

    response: dict = {"success": True}
    if result.client_secret:
        response["clientSecret"] = result.client_secret
    if result.checkout_url:
        response["checkoutUrl"] = result.checkout_url
    return JsonResponse(response)


@require_GET
@api_view
def order_by_session(request: HttpRequest) -> JsonResponse:
    """
    GET /api/orders?session_id=...

    Public order confirmation lookup. Admin fields are never returned.
    """
    session_id = request.GET.get("session_id")
    if not session_id:
        raise InvalidInputError("Missing session_id parameter")

    order = OrderStore().find_by_session_id(session_id)
    return JsonResponse(order.public_view())


@csrf_exempt
@require_http_methods(["GET", "POST"])
@api_view
def admin_orders(request: HttpRequest) -> JsonResponse:
    """
    GET  /api/admin/orders - every order, oldest first
    POST /api/admin/orders - patch status, adminNotes or one unit's prep status
    """
    store = OrderStore()
    if request.method == "GET":
        return JsonResponse([o.to_json_dict() for o in store.list()], safe=False)

    body = parse_body(request, OrderPatchRequest)
    prep = body.item_prep_status
    order = store.patch(
        body.id,
        status=body.status or None,
        item_prep_status=(
            (prep.item_index, prep.unit_index, prep.status) if prep else None
        ),
        **(
            {"admin_notes": body.admin_notes}
            if "admin_notes" in body.model_fields_set
            else {}
        ),
    )
    return JsonResponse({"success": True, "order": order.to_json_dict()})


@require_GET
@api_view
def prep_queue(_request: HttpRequest) -> JsonResponse:
    """
    GET /api/admin/prep-queue

    Kitchen display, polled by the client. Paid orders with units still to
    make, plus fully made orders for 15 minutes after their last update.
    """
    now = datetime.now(UTC)
    orders = build_prep_queue(OrderStore().list(), now)
    return JsonResponse(
        {
            "orders": [o.to_json_dict() for o in orders],
            "timestamp": now.isoformat(),
        }
    )
