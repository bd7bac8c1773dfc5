"""Tests for StripePaymentProvider - API calls are mocked, webhooks are really signed."""

import asyncio
import time
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
import stripe
from foodtruck_schemas import PaymentProviderName, ProviderLineItem, TerminalStatus

from apps.web.payments.exceptions import ProviderError
from apps.web.payments.providers import PaymentProvider, StripePaymentProvider
from apps.web.payments.tests.signing import stripe_event, stripe_signature

LINE_ITEMS = [ProviderLineItem(name="Milk Tea (Drinks)", unit_amount_cents=500, quantity=2)]


@pytest.fixture
def provider() -> StripePaymentProvider:
    return StripePaymentProvider(
        secret_key="sk_test_123",
        webhook_secret="whsec_test123",
        publishable_key="pk_test_123",
    )


def test_implements_protocol(provider):
    assert isinstance(provider, PaymentProvider)
    assert provider.name == PaymentProviderName.STRIPE


def test_public_config(provider):
    assert provider.get_public_config() == {
        "provider": "stripe",
        "publishableKey": "pk_test_123",
    }


class TestCheckout:
    @pytest.mark.asyncio
    @patch("stripe.checkout.Session.create_async", new_callable=AsyncMock)
    async def test_online_checkout_is_embedded(self, mock_create, provider):
        mock_create.return_value = MagicMock(id="cs_test_1", client_secret="cs_secret")

        result = await provider.create_online_checkout(
            LINE_ITEMS, 1000, "order-1", "https://truck.example"
        )

        assert result.client_secret == "cs_secret"
        assert result.checkout_url is None
        assert result.provider_session_id == "cs_test_1"

        kwargs = mock_create.call_args.kwargs
        assert kwargs["api_key"] == "sk_test_123"
        assert kwargs["idempotency_key"]
        assert kwargs["ui_mode"] == "embedded"
        assert kwargs["payment_method_types"] == ["card"]
        assert kwargs["mode"] == "payment"
        assert kwargs["metadata"] == {"orderId": "order-1"}
        assert kwargs["return_url"] == (
            "https://truck.example/order/success?session_id={CHECKOUT_SESSION_ID}"
        )
        assert kwargs["line_items"] == [
            {
                "price_data": {
                    "currency": "usd",
                    "product_data": {"name": "Milk Tea (Drinks)"},
                    "unit_amount": 500,
                },
                "quantity": 2,
            }
        ]

    @pytest.mark.asyncio
    @patch("stripe.checkout.Session.create_async", new_callable=AsyncMock)
    async def test_fresh_idempotency_key_per_call(self, mock_create, provider):
        mock_create.return_value = MagicMock(id="cs_1", client_secret="secret")

        await provider.create_online_checkout(LINE_ITEMS, 1000, "order-1", "https://x")
        await provider.create_online_checkout(LINE_ITEMS, 1000, "order-1", "https://x")

        first, second = (c.kwargs["idempotency_key"] for c in mock_create.call_args_list)
        assert first != second

    @pytest.mark.asyncio
    @patch("stripe.checkout.Session.create_async", new_callable=AsyncMock)
    async def test_pos_checkout_link_is_hosted(self, mock_create, provider):
        mock_create.return_value = MagicMock(
            id="cs_link", url="https://checkout.stripe.com/c/pay/cs_link"
        )

        result = await provider.create_pos_checkout_link(
            LINE_ITEMS, 1000, "order-2", "https://truck.example"
        )

        assert result.checkout_url == "https://checkout.stripe.com/c/pay/cs_link"
        assert result.provider_session_id == "cs_link"
        kwargs = mock_create.call_args.kwargs
        assert "ui_mode" not in kwargs
        assert kwargs["cancel_url"] == "https://truck.example/admin/pos"
        assert kwargs["success_url"].startswith("https://truck.example/order/success")

    @pytest.mark.asyncio
    @patch("stripe.checkout.Session.create_async", new_callable=AsyncMock)
    async def test_stripe_error_becomes_provider_error(self, mock_create, provider):
        mock_create.side_effect = stripe.InvalidRequestError(
            "No such price", param="line_items"
        )

        with pytest.raises(ProviderError, match="No such price") as exc_info:
            await provider.create_online_checkout(LINE_ITEMS, 1000, "order-1", "https://x")

        assert exc_info.value.provider == "stripe"
        assert exc_info.value.status_code == 500
        assert exc_info.value.provider_status_code is None


class TestPaymentIntents:
    @pytest.mark.asyncio
    @patch("stripe.PaymentIntent.create_async", new_callable=AsyncMock)
    async def test_pos_payment(self, mock_create, provider):
        mock_create.return_value = MagicMock(id="pi_1", client_secret="pi_1_secret")

        result = await provider.create_pos_payment(LINE_ITEMS, 1000, "order-3")

        assert result.client_secret == "pi_1_secret"
        assert result.provider_payment_id == "pi_1"
        kwargs = mock_create.call_args.kwargs
        assert kwargs["amount"] == 1000
        assert kwargs["currency"] == "usd"
        assert kwargs["automatic_payment_methods"] == {"enabled": True}
        assert kwargs["metadata"] == {"orderId": "order-3"}

    @pytest.mark.asyncio
    @patch("stripe.PaymentIntent.create_async", new_callable=AsyncMock)
    async def test_terminal_payment_is_card_present(self, mock_create, provider):
        mock_create.return_value = MagicMock(id="pi_term", client_secret="pi_term_secret")

        result = await provider.create_terminal_payment(LINE_ITEMS, 1000, "order-4")

        assert result.terminal_payment_id == "pi_term"
        assert result.provider_payment_id == "pi_term"
        assert result.client_secret == "pi_term_secret"
        kwargs = mock_create.call_args.kwargs
        assert kwargs["payment_method_types"] == ["card_present"]
        assert kwargs["capture_method"] == "automatic"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("stripe_status", "expected"),
        [
            ("requires_payment_method", TerminalStatus.PENDING),
            ("requires_confirmation", TerminalStatus.IN_PROGRESS),
            ("requires_action", TerminalStatus.IN_PROGRESS),
            ("processing", TerminalStatus.IN_PROGRESS),
            ("succeeded", TerminalStatus.COMPLETED),
            ("canceled", TerminalStatus.CANCELLED),
            ("requires_capture", TerminalStatus.PENDING),
        ],
    )
    async def test_terminal_status_mapping(self, provider, stripe_status, expected):
        with patch(
            "stripe.PaymentIntent.retrieve_async", new_callable=AsyncMock
        ) as mock_retrieve:
            mock_retrieve.return_value = MagicMock(id="pi_term", status=stripe_status)

            status = await provider.get_terminal_payment_status("pi_term")

        assert status.status == expected
        mock_retrieve.assert_awaited_once_with("pi_term", api_key="sk_test_123")

    @pytest.mark.asyncio
    @patch("stripe.PaymentIntent.cancel_async", new_callable=AsyncMock)
    async def test_cancel_terminal_payment(self, mock_cancel, provider):
        await provider.cancel_terminal_payment("pi_term")

        assert mock_cancel.call_args.args == ("pi_term",)

    @pytest.mark.asyncio
    @patch("stripe.terminal.ConnectionToken.create_async", new_callable=AsyncMock)
    async def test_connection_token(self, mock_create, provider):
        mock_create.return_value = MagicMock(secret="pst_test_abc")

        assert await provider.create_terminal_connection_token() == "pst_test_abc"


class TestValidateWebhook:
    def _validate(self, provider, payload, signature=None):
        headers = {"Stripe-Signature": signature or stripe_signature(payload)}
        return asyncio.run(provider.validate_webhook(payload, headers, "https://x"))

    def test_checkout_completed(self, provider):
        payload = stripe_event(
            "checkout.session.completed",
            {
                "id": "cs_1",
                "object": "checkout.session",
                "payment_intent": "pi_1",
                "metadata": {"orderId": "order-1"},
                "customer_details": {"name": "Ada", "email": "ada@example.com"},
            },
        )

        result = self._validate(provider, payload)

        assert result.valid
        [event] = result.events
        assert event.order_id == "order-1"
        assert event.provider_payment_id == "pi_1"
        assert event.customer_name == "Ada"
        assert event.customer_email == "ada@example.com"

    def test_expanded_payment_intent(self, provider):
        payload = stripe_event(
            "checkout.session.completed",
            {
                "object": "checkout.session",
                "payment_intent": {"id": "pi_expanded", "object": "payment_intent"},
                "metadata": {"orderId": "order-1"},
                "customer_details": None,
            },
        )

        result = self._validate(provider, payload)

        assert result.events[0].provider_payment_id == "pi_expanded"
        assert result.events[0].customer_name is None

    def test_payment_intent_succeeded(self, provider):
        payload = stripe_event(
            "payment_intent.succeeded",
            {"id": "pi_9", "object": "payment_intent", "metadata": {"orderId": "order-9"}},
        )

        result = self._validate(provider, payload)

        assert [(e.order_id, e.provider_payment_id) for e in result.events] == [
            ("order-9", "pi_9")
        ]

    def test_unlinked_events_dropped(self, provider):
        payload = stripe_event(
            "payment_intent.succeeded",
            {"id": "pi_9", "object": "payment_intent", "metadata": {}},
        )

        result = self._validate(provider, payload)

        assert result.valid
        assert result.events == []

    def test_other_event_types_ignored(self, provider):
        payload = stripe_event(
            "charge.refunded", {"id": "ch_1", "metadata": {"orderId": "order-1"}}
        )

        result = self._validate(provider, payload)

        assert result.valid
        assert result.events == []

    def test_wrong_secret(self, provider):
        payload = stripe_event("payment_intent.succeeded", {"id": "pi_9"})

        result = self._validate(
            provider, payload, stripe_signature(payload, secret="whsec_other")
        )

        assert not result.valid
        assert result.events == []

    def test_tampered_body(self, provider):
        signed = stripe_event(
            "payment_intent.succeeded", {"id": "pi_9", "metadata": {"orderId": "order-1"}}
        )
        tampered = stripe_event(
            "payment_intent.succeeded", {"id": "pi_9", "metadata": {"orderId": "order-2"}}
        )

        result = self._validate(provider, tampered, stripe_signature(signed))

        assert not result.valid

    def test_stale_timestamp(self, provider):
        payload = stripe_event("payment_intent.succeeded", {"id": "pi_9"})

        result = self._validate(
            provider, payload, stripe_signature(payload, timestamp=int(time.time()) - 3600)
        )

        assert not result.valid

    def test_missing_signature(self, provider):
        result = asyncio.run(provider.validate_webhook(b"{}", {}, "https://x"))

        assert not result.valid

    def test_missing_secret(self):
        provider = StripePaymentProvider(secret_key="sk_test_123")
        payload = stripe_event("payment_intent.succeeded", {"id": "pi_9"})

        assert not self._validate(provider, payload).valid

    def test_signed_garbage_is_invalid(self, provider):
        assert not self._validate(provider, b"not json").valid
