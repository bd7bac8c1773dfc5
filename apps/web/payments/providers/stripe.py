"""Stripe payment provider - embedded Checkout, PaymentIntents and Terminal."""

import json
import logging
import uuid
from collections.abc import Mapping
from typing import Any

import stripe
from foodtruck_schemas import (
    OnlineCheckoutResult,
    PaymentCompletedEvent,
    PaymentProviderName,
    PosCheckoutLinkResult,
    PosPaymentResult,
    ProviderLineItem,
    TerminalPaymentResult,
    TerminalPaymentStatus,
    TerminalStatus,
    WebhookValidationResult,
)

from apps.web.payments.exceptions import ProviderError

logger = logging.getLogger(__name__)

# PaymentIntent.status -> normalized terminal status
TERMINAL_STATUS_MAP: dict[str, TerminalStatus] = {
    "requires_payment_method": TerminalStatus.PENDING,
    "requires_confirmation": TerminalStatus.IN_PROGRESS,
    "requires_action": TerminalStatus.IN_PROGRESS,
    "processing": TerminalStatus.IN_PROGRESS,
    "succeeded": TerminalStatus.COMPLETED,
    "canceled": TerminalStatus.CANCELLED,
}


def _idempotency_key() -> str:
    return str(uuid.uuid4())


def _provider_error(e: stripe.StripeError) -> ProviderError:
    return ProviderError(
        message=str(e.user_message or e),
        provider=PaymentProviderName.STRIPE.value,
        status_code=e.http_status,
    )


class StripePaymentProvider:
    """
    Stripe provider implementing the PaymentProvider protocol.

    - Online orders use embedded Checkout Sessions (client_secret).
    - POS card payments use PaymentIntents confirmed by the browser.
    - Counter payment links use hosted Checkout Sessions (checkout_url).
    - Terminal payments use card_present PaymentIntents.

    The secret key is passed per request rather than set on the module,
    so two providers with different keys never share state.

    API Reference: https://docs.stripe.com/api
    """

    CURRENCY = "usd"

    def __init__(
        self,
        secret_key: str,
        webhook_secret: str = "",
        publishable_key: str = "",
    ) -> None:
        self._secret_key = secret_key
        self._webhook_secret = webhook_secret
        self._publishable_key = publishable_key

    @property
    def name(self) -> PaymentProviderName:
        return PaymentProviderName.STRIPE

    async def close(self) -> None:
        """Nothing to release; the SDK manages its own HTTP client."""

    def _checkout_line_items(
        self, line_items: list[ProviderLineItem]
    ) -> list[dict[str, Any]]:
        return [
            {
                "price_data": {
                    "currency": self.CURRENCY,
                    "product_data": {"name": li.name},
                    "unit_amount": li.unit_amount_cents,
                },
                "quantity": li.quantity,
            }
            for li in line_items
        ]

    # =========================================================================
    # Online and POS checkout
    # =========================================================================

    async def create_online_checkout(
        self,
        line_items: list[ProviderLineItem],
        total_cents: int,  # noqa: ARG002
        order_id: str,
        origin: str,
    ) -> OnlineCheckoutResult:
        """Create an embedded Checkout Session; the browser mounts it with client_secret."""
        try:
            session = await stripe.checkout.Session.create_async(
                api_key=self._secret_key,
                idempotency_key=_idempotency_key(),
                ui_mode="embedded",
                payment_method_types=["card"],
                line_items=self._checkout_line_items(line_items),
                mode="payment",
                return_url=f"{origin}/order/success?session_id={{CHECKOUT_SESSION_ID}}",
                metadata={"orderId": order_id},
            )
        except stripe.StripeError as e:
            raise _provider_error(e) from e

        return OnlineCheckoutResult(
            client_secret=session.client_secret,
            provider_session_id=session.id,
        )

    async def create_pos_payment(
        self,
        line_items: list[ProviderLineItem],  # noqa: ARG002
        total_cents: int,
        order_id: str,
        source_id: str | None = None,  # noqa: ARG002
    ) -> PosPaymentResult:
        """
        Create a PaymentIntent for an in-person card payment.

        Stripe collects card details in the browser, so source_id is unused
        and the result always carries a client_secret.
        """
        try:
            intent = await stripe.PaymentIntent.create_async(
                api_key=self._secret_key,
                idempotency_key=_idempotency_key(),
                amount=total_cents,
                currency=self.CURRENCY,
                metadata={"orderId": order_id},
                automatic_payment_methods={"enabled": True},
            )
        except stripe.StripeError as e:
            raise _provider_error(e) from e

        return PosPaymentResult(
            client_secret=intent.client_secret,
            provider_payment_id=intent.id,
        )

    async def create_pos_checkout_link(
        self,
        line_items: list[ProviderLineItem],
        total_cents: int,  # noqa: ARG002
        order_id: str,
        origin: str,
    ) -> PosCheckoutLinkResult:
        """Create a hosted Checkout Session for a counter order."""
        try:
            session = await stripe.checkout.Session.create_async(
                api_key=self._secret_key,
                idempotency_key=_idempotency_key(),
                payment_method_types=["card"],
                line_items=self._checkout_line_items(line_items),
                mode="payment",
                success_url=f"{origin}/order/success?session_id={{CHECKOUT_SESSION_ID}}",
                cancel_url=f"{origin}/admin/pos",
                metadata={"orderId": order_id},
            )
        except stripe.StripeError as e:
            raise _provider_error(e) from e

        return PosCheckoutLinkResult(
            checkout_url=session.url,
            provider_session_id=session.id,
        )

    # =========================================================================
    # Terminal
    # =========================================================================

    async def create_terminal_payment(
        self,
        line_items: list[ProviderLineItem],  # noqa: ARG002
        total_cents: int,
        order_id: str,
    ) -> TerminalPaymentResult:
        """Create a card_present PaymentIntent for a Stripe Terminal reader."""
        try:
            intent = await stripe.PaymentIntent.create_async(
                api_key=self._secret_key,
                idempotency_key=_idempotency_key(),
                amount=total_cents,
                currency=self.CURRENCY,
                payment_method_types=["card_present"],
                capture_method="automatic",
                metadata={"orderId": order_id},
            )
        except stripe.StripeError as e:
            raise _provider_error(e) from e

        return TerminalPaymentResult(
            terminal_payment_id=intent.id,
            provider_payment_id=intent.id,
            client_secret=intent.client_secret,
        )

    async def get_terminal_payment_status(
        self, terminal_payment_id: str
    ) -> TerminalPaymentStatus:
        try:
            intent = await stripe.PaymentIntent.retrieve_async(
                terminal_payment_id, api_key=self._secret_key
            )
        except stripe.StripeError as e:
            raise _provider_error(e) from e

        return TerminalPaymentStatus(
            status=TERMINAL_STATUS_MAP.get(intent.status, TerminalStatus.PENDING),
            provider_payment_id=intent.id,
        )

    async def cancel_terminal_payment(self, terminal_payment_id: str) -> None:
        try:
            await stripe.PaymentIntent.cancel_async(
                terminal_payment_id,
                api_key=self._secret_key,
                idempotency_key=_idempotency_key(),
            )
        except stripe.StripeError as e:
            raise _provider_error(e) from e

    async def create_terminal_connection_token(self) -> str:
        try:
            token = await stripe.terminal.ConnectionToken.create_async(
                api_key=self._secret_key,
                idempotency_key=_idempotency_key(),
            )
        except stripe.StripeError as e:
            raise _provider_error(e) from e
        return str(token.secret)

    # =========================================================================
    # Webhooks
    # =========================================================================

    async def validate_webhook(
        self, payload: bytes, headers: Mapping[str, str], url: str  # noqa: ARG002
    ) -> WebhookValidationResult:
        """
        Verify the Stripe-Signature header and normalize completed payments.

        Events handled:
        - checkout.session.completed: online and payment-link checkouts
        - payment_intent.succeeded: POS card and terminal payments
        """
        signature = _header(headers, "stripe-signature")
        if not signature or not self._webhook_secret:
            logger.warning("Stripe webhook missing signature or secret")
            return WebhookValidationResult.invalid()

        try:
            stripe.WebhookSignature.verify_header(
                payload.decode("utf-8"), signature, self._webhook_secret
            )
        except (ValueError, stripe.SignatureVerificationError) as e:
            logger.warning("Invalid Stripe webhook signature: %s", e)
            return WebhookValidationResult.invalid()

        # Read the verified body as plain JSON rather than SDK objects
        try:
            event = json.loads(payload)
        except ValueError as e:
            logger.warning("Invalid Stripe webhook payload: %s", e)
            return WebhookValidationResult.invalid()
        if not isinstance(event, dict) or "type" not in event:
            logger.warning("Invalid Stripe webhook payload: not an event")
            return WebhookValidationResult.invalid()

        logger.info("Received Stripe event: %s", event["type"])

        events: list[PaymentCompletedEvent] = []
        data = (event.get("data") or {}).get("object") or {}
        metadata = data.get("metadata") or {}
        order_id = metadata.get("orderId")

        match event["type"]:
            case "checkout.session.completed":
                if order_id:
                    customer = data.get("customer_details") or {}
                    events.append(
                        PaymentCompletedEvent(
                            order_id=order_id,
                            provider_payment_id=_payment_intent_id(
                                data.get("payment_intent")
                            ),
                            customer_name=customer.get("name") or None,
                            customer_email=customer.get("email") or None,
                        )
                    )
            case "payment_intent.succeeded":
                if order_id:
                    events.append(
                        PaymentCompletedEvent(
                            order_id=order_id,
                            provider_payment_id=data.get("id", ""),
                        )
                    )
            case _:
                logger.debug("Ignoring unhandled Stripe event: %s", event["type"])

        return WebhookValidationResult(valid=True, events=events)

    def get_public_config(self) -> dict[str, str]:
        return {
            "provider": PaymentProviderName.STRIPE.value,
            "publishableKey": self._publishable_key,
        }


def _header(headers: Mapping[str, str], name: str) -> str:
    """Case-insensitive header lookup that works for plain dicts too."""
    for key, value in headers.items():
        if key.lower() == name:
            return value
    return ""


def _payment_intent_id(payment_intent: Any) -> str:
    """Checkout sessions carry the intent as an id or an expanded object."""
    if isinstance(payment_intent, str):
        return payment_intent
    if isinstance(payment_intent, Mapping):
        return str(payment_intent.get("id", ""))
    return ""
