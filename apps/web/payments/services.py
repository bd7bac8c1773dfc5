"""
Payment services - run provider calls from sync views and apply webhooks.

Views are synchronous; provider methods are coroutines. ``call_provider``
builds the configured provider, runs one operation under the caller-side
timeout and always closes the provider afterwards.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Mapping
from typing import TypeVar

from django.conf import settings

from apps.web.core.exceptions import OrderNotFoundError, WebhookInvalidError
from apps.web.orders.store import OrderStore
from apps.web.payments.exceptions import ProviderError
from apps.web.payments.providers import PaymentProvider, get_provider

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def _run(operation: Callable[[PaymentProvider], Awaitable[T]]) -> T:
    provider = get_provider()
    try:
        return await asyncio.wait_for(
            operation(provider), timeout=settings.PAYMENT_PROVIDER_TIMEOUT
        )
    except TimeoutError as e:
        logger.warning("%s provider call timed out", provider.name.value)
        raise ProviderError(
            "Payment provider timed out", provider=provider.name.value
        ) from e
    finally:
        await provider.close()


def call_provider(operation: Callable[[PaymentProvider], Awaitable[T]]) -> T:
    """
    Run one provider operation to completion.

    Example:
        result = call_provider(
            lambda p: p.create_terminal_payment(items, total_cents, order_id)
        )

    Raises:
        ProviderError: If the provider call fails or exceeds
            PAYMENT_PROVIDER_TIMEOUT.
    """
    return asyncio.run(_run(operation))


def ingest_webhook(payload: bytes, headers: Mapping[str, str], url: str) -> int:
    """
    Verify a provider webhook and mark its orders paid.

    Nothing is written unless the signature verifies. Events for unknown
    orders are logged and skipped so the provider stops redelivering.

    Returns:
        Number of orders transitioned from pending to paid.

    Raises:
        WebhookInvalidError: If the provider rejects the signature.
    """
    result = call_provider(lambda p: p.validate_webhook(payload, headers, url))
    if not result.valid:
        raise WebhookInvalidError("Invalid webhook signature")

    store = OrderStore()
    updated = 0
    for event in result.events:
        try:
            if store.mark_paid(
                event.order_id,
                event.provider_payment_id,
                customer_name=event.customer_name,
                customer_email=event.customer_email,
            ):
                updated += 1
        except OrderNotFoundError:
            logger.warning(
                "Webhook payment for unknown order: order_id=%s", event.order_id
            )
    return updated
