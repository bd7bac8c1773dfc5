"""Base payment provider protocol - interface for all payment backends."""

from collections.abc import Mapping
from typing import Protocol, runtime_checkable

from foodtruck_schemas import (
    OnlineCheckoutResult,
    PaymentProviderName,
    PosCheckoutLinkResult,
    PosPaymentResult,
    ProviderLineItem,
    TerminalPaymentResult,
    TerminalPaymentStatus,
    WebhookValidationResult,
)


@runtime_checkable
class PaymentProvider(Protocol):
    """
    Protocol defining the interface for payment backends.

    Both backends (Stripe, Square) implement this interface so checkout,
    POS and webhook code stays provider-agnostic. Methods are async to
    support non-blocking I/O with external APIs. Every mutating call sends
    a fresh idempotency key so a retried request is safe to resend.
    """

    @property
    def name(self) -> PaymentProviderName:
        """The provider this backend talks to."""
        ...

    # =========================================================================
    # Online and POS checkout
    # =========================================================================

    async def create_online_checkout(
        self,
        line_items: list[ProviderLineItem],
        total_cents: int,
        order_id: str,
        origin: str,
    ) -> OnlineCheckoutResult:
        """
        Begin a customer checkout for an online order.

        Exactly one of client_secret (embedded checkout) or checkout_url
        (hosted checkout) is populated.

        Raises:
            ProviderError: If the provider call fails.
        """
        ...

    async def create_pos_payment(
        self,
        line_items: list[ProviderLineItem],
        total_cents: int,
        order_id: str,
        source_id: str | None = None,
    ) -> PosPaymentResult:
        """
        Charge a card in person.

        A result without client_secret means the charge already completed.

        Raises:
            MissingSourceError: If the provider needs source_id and none given.
            ProviderError: If the provider call fails.
        """
        ...

    async def create_pos_checkout_link(
        self,
        line_items: list[ProviderLineItem],
        total_cents: int,
        order_id: str,
        origin: str,
    ) -> PosCheckoutLinkResult:
        """Create a hosted payment link for a counter order."""
        ...

    # =========================================================================
    # Card-present terminal
    # =========================================================================

    async def create_terminal_payment(
        self,
        line_items: list[ProviderLineItem],
        total_cents: int,
        order_id: str,
    ) -> TerminalPaymentResult:
        """Start a card-present payment on a terminal device."""
        ...

    async def get_terminal_payment_status(
        self, terminal_payment_id: str
    ) -> TerminalPaymentStatus:
        """
        Get the normalized status of a terminal payment.

        Provider statuses without a mapping are reported as pending.
        """
        ...

    async def cancel_terminal_payment(self, terminal_payment_id: str) -> None:
        """Cancel a terminal payment that has not completed."""
        ...

    async def create_terminal_connection_token(self) -> str:
        """
        Create a connection token for a terminal reader SDK.

        Raises:
            UnsupportedOperationError: If the provider has no such tokens.
        """
        ...

    # =========================================================================
    # Webhooks and client bootstrap
    # =========================================================================

    async def validate_webhook(
        self, payload: bytes, headers: Mapping[str, str], url: str
    ) -> WebhookValidationResult:
        """
        Verify a webhook signature and normalize its events.

        Args:
            payload: Raw request body.
            headers: Request headers.
            url: Absolute URL the webhook was delivered to.

        Returns:
            valid=False with no events when the signature or secret is
            missing or does not match. Otherwise valid=True with one
            payment_completed event per completed payment that carries an
            internal order id.
        """
        ...

    def get_public_config(self) -> dict[str, str]:
        """Non-secret fields the browser needs to initialize payments."""
        ...

    async def close(self) -> None:
        """Release network resources."""
        ...
