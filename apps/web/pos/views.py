"""
Point-of-sale API views - admin counter checkout and terminal control.
"""

from django.http import HttpRequest, JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_POST

from apps.web.core.decorators import api_view, parse_body
from apps.web.core.exceptions import InvalidInputError
from apps.web.orders.views import request_origin
from apps.web.pos import services
from apps.web.pos.serializers import (
    PosCartRequest,
    PosOrderRequest,
    PosPaymentRequest,
    TerminalCancelRequest,
)


@csrf_exempt
@require_POST
@api_view
def pos_order(request: HttpRequest) -> JsonResponse:
    """
    POST /api/admin/pos-order

    Cash or external-card order. Always recorded as paid; cash orders
    carry cashTendered and changeDue.
    """
    body = parse_body(request, PosOrderRequest)
    order = services.create_counter_order(
        body.items,
        body.payment_method,
        cash_tendered=body.cash_tendered,
        customer_name=body.customer_name,
    )
    return JsonResponse({"success": True, "order": order.to_json_dict()})


@csrf_exempt
@require_POST
@api_view
def pos_payment_intent(request: HttpRequest) -> JsonResponse:
    """
    POST /api/admin/pos-payment-intent

    In-person card charge. A clientSecret in the response means the
    browser must confirm the payment; without one the order is already paid.
    """
    body = parse_body(request, PosPaymentRequest)
    order, client_secret = services.create_card_payment(
        body.items, customer_name=body.customer_name, source_id=body.source_id
    )
    response = {"success": True, "orderId": order.id, "status": order.status.value}
    if client_secret:
        response["clientSecret"] = client_secret
    return JsonResponse(response)


@csrf_exempt
@require_POST
@api_view
def pos_checkout_link(request: HttpRequest) -> JsonResponse:
    """POST /api/admin/pos-checkout-link"""
    body = parse_body(request, PosCartRequest)
    order, checkout_url = services.create_checkout_link(
        body.items, request_origin(request), customer_name=body.customer_name
    )
    return JsonResponse(
        {"success": True, "checkoutUrl": checkout_url, "orderId": order.id}
    )


@csrf_exempt
@require_POST
@api_view
def pos_terminal_intent(request: HttpRequest) -> JsonResponse:
    """POST /api/admin/pos-terminal-intent"""
    body = parse_body(request, PosCartRequest)
    order, client_secret = services.create_terminal_payment(
        body.items, customer_name=body.customer_name
    )
    response = {
        "success": True,
        "orderId": order.id,
        "terminalPaymentId": order.terminal_payment_id,
    }
    if client_secret:
        response["clientSecret"] = client_secret
    return JsonResponse(response)


@require_GET
@api_view
def pos_terminal_status(request: HttpRequest) -> JsonResponse:
    """GET /api/admin/pos-terminal-status?id=..."""
    terminal_payment_id = request.GET.get("id")
    if not terminal_payment_id:
        raise InvalidInputError("Missing id parameter")

    status = services.get_terminal_status(terminal_payment_id)
    return JsonResponse({"success": True, **status.to_json_dict()})


@csrf_exempt
@require_POST
@api_view
def pos_terminal_cancel(request: HttpRequest) -> JsonResponse:
    """POST /api/admin/pos-terminal-cancel"""
    body = parse_body(request, TerminalCancelRequest)
    services.cancel_terminal_payment(body.id)
    return JsonResponse({"success": True})


@csrf_exempt
@require_POST
@api_view
def terminal_connection_token(_request: HttpRequest) -> JsonResponse:
    """
    POST /api/admin/terminal-connection-token

    Stripe Terminal SDK bootstrap. Providers without connection tokens
    answer 400.
    """
    return JsonResponse({"secret": services.create_connection_token()})
