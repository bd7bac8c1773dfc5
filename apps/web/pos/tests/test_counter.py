"""Tests for counter order services."""

from decimal import Decimal

import pytest
from foodtruck_schemas import (
    CartItem,
    OrderSource,
    OrderStatus,
    PaymentMethod,
    PosCheckoutLinkResult,
    PosPaymentResult,
    TerminalPaymentResult,
)

from apps.web.core.exceptions import (
    InsufficientCashError,
    InvalidInputError,
    ItemNotFoundError,
)
from apps.web.orders.store import OrderStore
from apps.web.pos import services

pytestmark = pytest.mark.django_db

# Milk Tea 5.00 + Bao 2.50
CART = [
    CartItem(category_id="drinks", item_name="Milk Tea", quantity=1),
    CartItem(category_id="food", item_name="Bao", quantity=1),
]


class TestCounterOrder:
    def test_cash_with_change(self, menu):
        order = services.create_counter_order(
            CART, "cash", cash_tendered=Decimal("10.00"), customer_name="Sam"
        )

        assert order.status == OrderStatus.PAID
        assert order.source == OrderSource.POS
        assert order.payment_method == PaymentMethod.CASH
        assert order.total == Decimal("7.50")
        assert order.cash_tendered == Decimal("10.00")
        assert order.change_due == Decimal("2.50")
        assert order.customer_name == "Sam"
        assert OrderStore().get(order.id) == order

    def test_exact_cash(self, menu):
        order = services.create_counter_order(CART, "cash", cash_tendered=Decimal("7.50"))

        assert order.change_due == Decimal("0.00")

    @pytest.mark.parametrize("tendered", [None, Decimal("7.49")])
    def test_insufficient_cash_creates_nothing(self, menu, tendered):
        with pytest.raises(InsufficientCashError, match="Insufficient cash tendered"):
            services.create_counter_order(CART, "cash", cash_tendered=tendered)

        assert OrderStore().list() == []

    def test_card_external(self, menu):
        order = services.create_counter_order(CART, "card_external")

        assert order.status == OrderStatus.PAID
        assert order.payment_method == PaymentMethod.CARD_EXTERNAL
        assert order.cash_tendered is None
        assert order.change_due is None

    @pytest.mark.parametrize("method", [None, "pos_card", "bitcoin"])
    def test_invalid_payment_method(self, menu, method):
        with pytest.raises(InvalidInputError, match="Invalid payment method"):
            services.create_counter_order(CART, method)

    def test_empty_cart(self, menu):
        with pytest.raises(InvalidInputError, match="No items in order"):
            services.create_counter_order([], "cash", cash_tendered=Decimal("5"))

    def test_unknown_item(self, menu):
        cart = [CartItem(category_id="drinks", item_name="Espresso", quantity=1)]

        with pytest.raises(ItemNotFoundError):
            services.create_counter_order(cart, "card_external")


class TestCardPayment:
    def test_browser_confirmed_payment_stays_pending(self, menu, fake_provider):
        fake_provider.create_pos_payment.return_value = PosPaymentResult(
            client_secret="pi_1_secret", provider_payment_id="pi_1"
        )

        order, client_secret = services.create_card_payment(CART)

        assert client_secret == "pi_1_secret"
        assert order.status == OrderStatus.PENDING
        assert order.payment_method == PaymentMethod.POS_CARD
        assert order.provider_payment_id == "pi_1"
        _, total_cents, order_id, source_id = fake_provider.create_pos_payment.call_args.args
        assert total_cents == 750
        assert order_id == order.id
        assert source_id is None

    def test_synchronous_capture_is_paid(self, menu, fake_provider):
        fake_provider.create_pos_payment.return_value = PosPaymentResult(
            provider_payment_id="sq_pay_1"
        )

        order, client_secret = services.create_card_payment(CART, source_id="cnon:ok")

        assert client_secret is None
        assert order.status == OrderStatus.PAID
        assert OrderStore().get(order.id).status == OrderStatus.PAID

    def test_unknown_item_never_reaches_provider(self, menu, fake_provider):
        cart = [CartItem(category_id="food", item_name="Seasonal Special", quantity=1)]

        with pytest.raises(ItemNotFoundError):
            services.create_card_payment(cart)

        fake_provider.create_pos_payment.assert_not_called()


class TestCheckoutLink:
    def test_creates_pending_link_order(self, menu, fake_provider):
        fake_provider.create_pos_checkout_link.return_value = PosCheckoutLinkResult(
            checkout_url="https://checkout.stripe.com/c/pay/cs_1",
            provider_session_id="cs_1",
        )

        order, url = services.create_checkout_link(CART, "https://truck.example")

        assert url == "https://checkout.stripe.com/c/pay/cs_1"
        assert order.status == OrderStatus.PENDING
        assert order.payment_method == PaymentMethod.POS_LINK
        assert order.provider_session_id == "cs_1"
        assert fake_provider.create_pos_checkout_link.call_args.args[3] == (
            "https://truck.example"
        )


class TestTerminal:
    def test_creates_pending_terminal_order(self, menu, fake_provider):
        fake_provider.create_terminal_payment.return_value = TerminalPaymentResult(
            terminal_payment_id="term_1", provider_payment_id="sq_pay_1"
        )

        order, client_secret = services.create_terminal_payment(CART, customer_name="Lee")

        assert client_secret is None
        assert order.status == OrderStatus.PENDING
        assert order.payment_method == PaymentMethod.POS_TERMINAL
        assert order.terminal_payment_id == "term_1"
        assert order.provider_payment_id == "sq_pay_1"
        assert order.customer_name == "Lee"
