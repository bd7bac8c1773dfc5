"""
Public payment configuration for client bootstrap.
"""

from django.http import HttpRequest, JsonResponse
from django.views.decorators.http import require_GET

from apps.web.core.decorators import api_view
from apps.web.payments.providers import get_provider


@require_GET
@api_view
def payment_config(_request: HttpRequest) -> JsonResponse:
    """
    GET /api/payment-config

    Non-secret provider fields (publishable key, or application and
    location ids). Building the config makes no network call.
    """
    return JsonResponse(get_provider().get_public_config())
