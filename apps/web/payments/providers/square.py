"""Square payment provider - payment links, Payments API and Terminal checkouts."""

import base64
import hashlib
import hmac
import json
import logging
import uuid
from collections.abc import Mapping
from typing import Any

import httpx
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

from apps.web.orders.store import SQUARE_REDIRECT_PREFIX
from apps.web.payments.exceptions import (
    MissingSourceError,
    ProviderError,
    UnsupportedOperationError,
)

logger = logging.getLogger(__name__)

SQUARE_API_VERSION = "2024-11-20"
SIGNATURE_HEADER = "x-square-hmacsha256-signature"

TERMINAL_STATUS_MAP: dict[str, TerminalStatus] = {
    "PENDING": TerminalStatus.PENDING,
    "IN_PROGRESS": TerminalStatus.IN_PROGRESS,
    "COMPLETED": TerminalStatus.COMPLETED,
    "CANCELLED": TerminalStatus.CANCELLED,
    "CANCEL_REQUESTED": TerminalStatus.CANCELLED,
}


class SquarePaymentProvider:
    """
    Square provider implementing the PaymentProvider protocol.

    - Online orders and counter links use hosted payment links.
    - POS card payments charge a Web Payments SDK nonce (source_id) directly,
      so they complete synchronously.
    - Terminal payments use Terminal checkouts pushed to a paired device.

    Requests are never retried: a repeated charge is worse than a failed one.

    API Reference: https://developer.squareup.com/reference/square
    """

    SANDBOX_BASE_URL = "https://connect.squareupsandbox.com"
    PROD_BASE_URL = "https://connect.squareup.com"
    CURRENCY = "USD"

    def __init__(
        self,
        access_token: str,
        location_id: str = "",
        application_id: str = "",
        environment: str = "sandbox",
        webhook_signature_key: str = "",
        terminal_device_id: str = "default",
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Initialize the Square provider.

        Args:
            access_token: Square access token.
            location_id: Location that owns orders and payments.
            application_id: Public application id for the Web Payments SDK.
            environment: "production" or anything else for sandbox.
            webhook_signature_key: Key used to sign webhook notifications.
            terminal_device_id: Paired Terminal device to push checkouts to.
            http_client: Optional HTTP client for dependency injection (testing).
        """
        self._access_token = access_token
        self._location_id = location_id
        self._application_id = application_id
        self._environment = environment
        self._webhook_signature_key = webhook_signature_key
        self._terminal_device_id = terminal_device_id
        self._base_url = (
            self.PROD_BASE_URL if environment == "production" else self.SANDBOX_BASE_URL
        )
        self._client = http_client
        self._owns_client = http_client is None

    @property
    def name(self) -> PaymentProviderName:
        return PaymentProviderName.SQUARE

    async def close(self) -> None:
        """Close the HTTP client if we own it."""
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

    def _http(self) -> httpx.AsyncClient:
        # Created on first request so config lookups never open a client
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=30.0)
        return self._client

    async def _request(
        self,
        method: str,
        path: str,
        fallback_error: str,
        json_body: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """
        Make a single Square API request and return the decoded body.

        Raises:
            ProviderError: On transport failure or any non-2xx response. The
                message is Square's first error detail when present.
        """
        headers = {
            "Authorization": f"Bearer {self._access_token}",
            "Square-Version": SQUARE_API_VERSION,
            "Content-Type": "application/json",
        }

        try:
            response = await self._http().request(
                method, f"{self._base_url}{path}", headers=headers, json=json_body
            )
        except httpx.RequestError as e:
            logger.warning("Square request %s %s failed: %s", method, path, e)
            raise ProviderError(
                f"{fallback_error}: {e}", provider=PaymentProviderName.SQUARE.value
            ) from e

        try:
            data = response.json()
        except ValueError:
            data = {}
        if not isinstance(data, dict):
            data = {}

        if response.is_error:
            errors = data.get("errors") or []
            detail = errors[0].get("detail") if errors else None
            logger.warning(
                "Square %s %s returned %d: %s",
                method,
                path,
                response.status_code,
                detail or fallback_error,
            )
            raise ProviderError(
                detail or fallback_error,
                provider=PaymentProviderName.SQUARE.value,
                status_code=response.status_code,
            )

        return data

    def _order_line_items(
        self, line_items: list[ProviderLineItem]
    ) -> list[dict[str, Any]]:
        return [
            {
                "name": li.name,
                "quantity": str(li.quantity),
                "base_price_money": {
                    "amount": li.unit_amount_cents,
                    "currency": self.CURRENCY,
                },
            }
            for li in line_items
        ]

    async def _create_payment_link(
        self,
        line_items: list[ProviderLineItem],
        order_id: str,
        origin: str,
        fallback_error: str,
    ) -> tuple[str, str]:
        data = await self._request(
            "POST",
            "/v2/online-checkout/payment-links",
            fallback_error,
            json_body={
                "idempotency_key": str(uuid.uuid4()),
                "order": {
                    "location_id": self._location_id,
                    "line_items": self._order_line_items(line_items),
                    "metadata": {"orderId": order_id},
                },
                "checkout_options": {
                    "redirect_url": (
                        f"{origin}/order/success"
                        f"?session_id={SQUARE_REDIRECT_PREFIX}{order_id}"
                    ),
                },
            },
        )
        link = data.get("payment_link")
        if not link:
            raise ProviderError(fallback_error, provider=PaymentProviderName.SQUARE.value)
        return link["url"], link["id"]

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
        url, link_id = await self._create_payment_link(
            line_items, order_id, origin, "Failed to create Square checkout"
        )
        return OnlineCheckoutResult(checkout_url=url, provider_session_id=link_id)

    async def create_pos_payment(
        self,
        line_items: list[ProviderLineItem],  # noqa: ARG002
        total_cents: int,
        order_id: str,
        source_id: str | None = None,
    ) -> PosPaymentResult:
        """Charge a tokenized card. The payment is captured when this returns."""
        if not source_id:
            raise MissingSourceError(
                "Square POS payment requires a sourceId (card nonce)",
                provider=PaymentProviderName.SQUARE.value,
            )

        data = await self._request(
            "POST",
            "/v2/payments",
            "Failed to create Square payment",
            json_body={
                "idempotency_key": str(uuid.uuid4()),
                "source_id": source_id,
                "amount_money": {"amount": total_cents, "currency": self.CURRENCY},
                "location_id": self._location_id,
                "note": f"Order {order_id}",
                "reference_id": order_id,
            },
        )
        payment = data.get("payment")
        if not payment:
            raise ProviderError(
                "Failed to create Square payment",
                provider=PaymentProviderName.SQUARE.value,
            )
        return PosPaymentResult(provider_payment_id=payment["id"])

    async def create_pos_checkout_link(
        self,
        line_items: list[ProviderLineItem],
        total_cents: int,  # noqa: ARG002
        order_id: str,
        origin: str,
    ) -> PosCheckoutLinkResult:
        url, link_id = await self._create_payment_link(
            line_items, order_id, origin, "Failed to create Square checkout link"
        )
        return PosCheckoutLinkResult(checkout_url=url, provider_session_id=link_id)

    # =========================================================================
    # Terminal
    # =========================================================================

    async def create_terminal_payment(
        self,
        line_items: list[ProviderLineItem],  # noqa: ARG002
        total_cents: int,
        order_id: str,
    ) -> TerminalPaymentResult:
        data = await self._request(
            "POST",
            "/v2/terminals/checkouts",
            "Failed to create Square terminal checkout",
            json_body={
                "idempotency_key": str(uuid.uuid4()),
                "checkout": {
                    "amount_money": {"amount": total_cents, "currency": self.CURRENCY},
                    "reference_id": order_id,
                    "device_options": {"device_id": self._terminal_device_id},
                    "payment_type": "CARD_PRESENT",
                },
            },
        )
        checkout = data.get("checkout")
        if not checkout:
            raise ProviderError(
                "Failed to create Square terminal checkout",
                provider=PaymentProviderName.SQUARE.value,
            )

        payment_ids = checkout.get("payment_ids") or []
        return TerminalPaymentResult(
            terminal_payment_id=checkout["id"],
            provider_payment_id=payment_ids[0] if payment_ids else checkout["id"],
        )

    async def get_terminal_payment_status(
        self, terminal_payment_id: str
    ) -> TerminalPaymentStatus:
        data = await self._request(
            "GET",
            f"/v2/terminals/checkouts/{terminal_payment_id}",
            "Failed to get terminal status",
        )
        checkout = data.get("checkout")
        if not checkout:
            raise ProviderError(
                "Failed to get terminal status",
                provider=PaymentProviderName.SQUARE.value,
            )

        payment_ids = checkout.get("payment_ids") or []
        return TerminalPaymentStatus(
            status=TERMINAL_STATUS_MAP.get(
                checkout.get("status", ""), TerminalStatus.PENDING
            ),
            provider_payment_id=payment_ids[0] if payment_ids else None,
        )

    async def cancel_terminal_payment(self, terminal_payment_id: str) -> None:
        await self._request(
            "POST",
            f"/v2/terminals/checkouts/{terminal_payment_id}/cancel",
            "Failed to cancel terminal payment",
        )

    async def create_terminal_connection_token(self) -> str:
        raise UnsupportedOperationError(
            "Terminal connection tokens are only available with Stripe",
            provider=PaymentProviderName.SQUARE.value,
        )

    # =========================================================================
    # Webhooks
    # =========================================================================

    def _expected_signature(self, payload: bytes, url: str) -> str:
        # Square signs HMAC-SHA256(signature_key, notification_url + body)
        digest = hmac.new(
            self._webhook_signature_key.encode(),
            url.encode() + payload,
            hashlib.sha256,
        ).digest()
        return base64.b64encode(digest).decode()

    async def validate_webhook(
        self, payload: bytes, headers: Mapping[str, str], url: str
    ) -> WebhookValidationResult:
        """
        Verify the notification signature and normalize completed payments.

        Only payment.updated notifications with status COMPLETED and a
        reference_id produce an event.
        """
        signature = ""
        for key, value in headers.items():
            if key.lower() == SIGNATURE_HEADER:
                signature = value
                break

        if not signature or not self._webhook_signature_key:
            logger.warning("Square webhook missing signature or signature key")
            return WebhookValidationResult.invalid()

        if not hmac.compare_digest(signature, self._expected_signature(payload, url)):
            logger.warning("Invalid Square webhook signature for %s", url)
            return WebhookValidationResult.invalid()

        try:
            body = json.loads(payload)
        except ValueError as e:
            logger.warning("Invalid Square webhook payload: %s", e)
            return WebhookValidationResult.invalid()

        events: list[PaymentCompletedEvent] = []
        event_type = body.get("type") if isinstance(body, dict) else None
        logger.info("Received Square event: %s", event_type)

        if event_type == "payment.updated":
            payment = ((body.get("data") or {}).get("object") or {}).get("payment") or {}
            if payment.get("status") == "COMPLETED" and payment.get("reference_id"):
                events.append(
                    PaymentCompletedEvent(
                        order_id=payment["reference_id"],
                        provider_payment_id=payment.get("id", ""),
                        customer_email=payment.get("buyer_email_address") or None,
                    )
                )

        return WebhookValidationResult(valid=True, events=events)

    def get_public_config(self) -> dict[str, str]:
        return {
            "provider": PaymentProviderName.SQUARE.value,
            "applicationId": self._application_id,
            "locationId": self._location_id,
            "environment": self._environment,
        }
