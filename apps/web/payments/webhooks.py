"""
Payment webhook endpoint.

Both providers post here; the configured provider verifies the signature
and normalizes completed payments:
- Stripe: checkout.session.completed, payment_intent.succeeded
- Square: payment.updated with status COMPLETED
"""

import logging

from django.conf import settings
from django.http import HttpRequest, HttpResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_POST

from apps.web.core.exceptions import WebhookInvalidError
from apps.web.payments.services import ingest_webhook

logger = logging.getLogger(__name__)


def _notification_url(request: HttpRequest) -> str:
    """The URL the provider signed; proxies can change what Django sees."""
    return settings.SQUARE_WEBHOOK_URL or request.build_absolute_uri()


@csrf_exempt
@require_POST
def provider_webhook(request: HttpRequest) -> HttpResponse:
    """
    POST /api/webhooks/provider (alias: /api/webhooks/stripe)

    Responds 400 when verification fails, otherwise 200 whether or not any
    event matched an order.
    """
    try:
        updated = ingest_webhook(
            request.body, dict(request.headers), _notification_url(request)
        )
    except WebhookInvalidError as e:
        return HttpResponse(e.message, status=400)

    logger.info("Webhook processed: orders_paid=%d", updated)
    return HttpResponse("ok", status=200)
