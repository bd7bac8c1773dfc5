"""Tests for point-of-sale API views."""

import json

import pytest
from foodtruck_schemas import (
    OrderStatus,
    PosCheckoutLinkResult,
    PosPaymentResult,
    TerminalPaymentResult,
    TerminalPaymentStatus,
    TerminalStatus,
)

from apps.web.orders.store import OrderStore
from apps.web.payments.exceptions import ProviderError, UnsupportedOperationError

pytestmark = pytest.mark.django_db

ITEMS = [
    {"categoryId": "drinks", "itemName": "Milk Tea", "quantity": 1},
    {"categoryId": "food", "itemName": "Bao", "quantity": 1},
]


def post_json(client, url, body):
    return client.post(url, data=json.dumps(body), content_type="application/json")


class TestPosOrder:
    url = "/api/admin/pos-order"

    def test_cash_order(self, client, menu):
        response = post_json(
            client, self.url, {"items": ITEMS, "paymentMethod": "cash", "cashTendered": 10}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["order"]["status"] == "paid"
        assert data["order"]["total"] == 7.5
        assert data["order"]["changeDue"] == 2.5
        assert data["order"]["source"] == "pos"

    def test_insufficient_cash(self, client, menu):
        response = post_json(
            client, self.url, {"items": ITEMS, "paymentMethod": "cash", "cashTendered": 5}
        )

        assert response.status_code == 400
        assert response.json() == {"success": False, "error": "Insufficient cash tendered"}
        assert OrderStore().list() == []

    def test_invalid_payment_method(self, client, menu):
        response = post_json(client, self.url, {"items": ITEMS, "paymentMethod": "iou"})

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid payment method"

    def test_empty_cart(self, client, menu):
        response = post_json(client, self.url, {"items": [], "paymentMethod": "cash"})

        assert response.status_code == 400
        assert response.json()["error"] == "No items in order"

    def test_get_not_allowed(self, client):
        assert client.get(self.url).status_code == 405


class TestPosPaymentIntent:
    url = "/api/admin/pos-payment-intent"

    def test_returns_client_secret(self, client, menu, fake_provider):
        fake_provider.create_pos_payment.return_value = PosPaymentResult(
            client_secret="pi_1_secret", provider_payment_id="pi_1"
        )

        response = post_json(client, self.url, {"items": ITEMS})

        data = response.json()
        assert data["success"] is True
        assert data["status"] == "pending"
        assert data["clientSecret"] == "pi_1_secret"
        assert OrderStore().get(data["orderId"]).status == OrderStatus.PENDING

    def test_square_payment_is_paid(self, client, menu, fake_provider):
        fake_provider.create_pos_payment.return_value = PosPaymentResult(
            provider_payment_id="sq_pay_1"
        )

        response = post_json(client, self.url, {"items": ITEMS, "sourceId": "cnon:ok"})

        data = response.json()
        assert data["status"] == "paid"
        assert "clientSecret" not in data
        assert fake_provider.create_pos_payment.call_args.args[3] == "cnon:ok"

    def test_provider_error_creates_no_order(self, client, menu, fake_provider):
        fake_provider.create_pos_payment.side_effect = ProviderError(
            "Card declined", provider="square"
        )

        response = post_json(client, self.url, {"items": ITEMS, "sourceId": "cnon:bad"})

        assert response.status_code == 500
        assert response.json() == {"success": False, "error": "Card declined"}
        assert OrderStore().list() == []


class TestPosCheckoutLink:
    def test_returns_link(self, client, menu, fake_provider):
        fake_provider.create_pos_checkout_link.return_value = PosCheckoutLinkResult(
            checkout_url="https://square.link/u/abc", provider_session_id="link_1"
        )

        response = post_json(client, "/api/admin/pos-checkout-link", {"items": ITEMS})

        data = response.json()
        assert data["success"] is True
        assert data["checkoutUrl"] == "https://square.link/u/abc"
        assert OrderStore().get(data["orderId"]).provider_session_id == "link_1"


class TestTerminal:
    def test_intent(self, client, menu, fake_provider):
        fake_provider.create_terminal_payment.return_value = TerminalPaymentResult(
            terminal_payment_id="pi_term",
            provider_payment_id="pi_term",
            client_secret="pi_term_secret",
        )

        response = post_json(client, "/api/admin/pos-terminal-intent", {"items": ITEMS})

        data = response.json()
        assert data["success"] is True
        assert data["terminalPaymentId"] == "pi_term"
        assert data["clientSecret"] == "pi_term_secret"
        assert OrderStore().get(data["orderId"]).terminal_payment_id == "pi_term"

    def test_status(self, client, fake_provider):
        fake_provider.get_terminal_payment_status.return_value = TerminalPaymentStatus(
            status=TerminalStatus.COMPLETED, provider_payment_id="sq_pay_1"
        )

        response = client.get("/api/admin/pos-terminal-status", {"id": "term_1"})

        assert response.json() == {
            "success": True,
            "status": "completed",
            "providerPaymentId": "sq_pay_1",
        }
        fake_provider.get_terminal_payment_status.assert_awaited_once_with("term_1")

    def test_status_requires_id(self, client, fake_provider):
        response = client.get("/api/admin/pos-terminal-status")

        assert response.status_code == 400
        fake_provider.get_terminal_payment_status.assert_not_called()

    def test_cancel(self, client, fake_provider):
        response = post_json(client, "/api/admin/pos-terminal-cancel", {"id": "term_1"})

        assert response.json() == {"success": True}
        fake_provider.cancel_terminal_payment.assert_awaited_once_with("term_1")

    def test_cancel_requires_id(self, client, fake_provider):
        response = post_json(client, "/api/admin/pos-terminal-cancel", {})

        assert response.status_code == 400
        fake_provider.cancel_terminal_payment.assert_not_called()

    def test_connection_token(self, client, fake_provider):
        fake_provider.create_terminal_connection_token.return_value = "pst_test_abc"

        response = client.post("/api/admin/terminal-connection-token")

        assert response.json() == {"secret": "pst_test_abc"}

    def test_connection_token_unsupported(self, client, fake_provider):
        fake_provider.create_terminal_connection_token.side_effect = (
            UnsupportedOperationError(
                "Terminal connection tokens are only available with Stripe",
                provider="square",
            )
        )

        response = client.post("/api/admin/terminal-connection-token")

        assert response.status_code == 400
        assert response.json()["success"] is False


def test_unexpected_provider_failure_is_json(client, menu, fake_provider):
    fake_provider.create_pos_checkout_link.side_effect = KeyError("url")

    response = post_json(client, "/api/admin/pos-checkout-link", {"items": ITEMS})

    assert response.status_code == 500
    assert response["Content-Type"] == "application/json"
    assert response.json()["success"] is False
    assert OrderStore().list() == []
