"""
Counter order service - every way an order is taken at the truck.

Each flow prices the cart from the stored menu before touching the
payment provider, then appends the order to the orders collection:

- cash / card_external: paid immediately, no provider call
- pos_card: provider card charge, paid immediately when it captures
  synchronously, otherwise pending until the webhook arrives
- pos_link: hosted checkout link the customer pays on their phone
- pos_terminal: card-present payment on a paired reader
"""

import logging
from datetime import UTC, datetime
from decimal import Decimal

from foodtruck_schemas import (
    CartItem,
    Order,
    OrderSource,
    OrderStatus,
    PaymentMethod,
    TerminalPaymentStatus,
)

from apps.web.core.exceptions import InsufficientCashError, InvalidInputError
from apps.web.orders.pricing import PricedCart, generate_order_id, price_cart, round_money
from apps.web.orders.store import OrderStore
from apps.web.payments.services import call_provider

logger = logging.getLogger(__name__)

COUNTER_PAYMENT_METHODS = (PaymentMethod.CASH, PaymentMethod.CARD_EXTERNAL)


def _new_order(
    order_id: str,
    cart: PricedCart,
    status: OrderStatus,
    payment_method: PaymentMethod,
    customer_name: str | None,
    **fields,
) -> Order:
    now = datetime.now(UTC)
    return Order(
        id=order_id,
        items=cart.line_items,
        total=cart.total,
        status=status,
        source=OrderSource.POS,
        payment_method=payment_method,
        customer_name=customer_name or None,
        created_at=now,
        updated_at=now,
        **fields,
    )


def create_counter_order(
    items: list[CartItem],
    payment_method: str | None,
    cash_tendered: Decimal | None = None,
    customer_name: str | None = None,
) -> Order:
    """
    Record a cash or external-card order as paid.

    For cash, the tendered amount is compared at face value against the
    rounded total and the change is rounded to cents.

    Raises:
        InvalidInputError: Empty cart or unsupported payment method.
        InsufficientCashError: Cash tendered is missing or below the total.
    """
    if not items:
        raise InvalidInputError("No items in order")
    if payment_method not in {m.value for m in COUNTER_PAYMENT_METHODS}:
        raise InvalidInputError("Invalid payment method")
    method = PaymentMethod(payment_method)

    cart = price_cart(items)

    cash_fields: dict[str, Decimal] = {}
    if method == PaymentMethod.CASH:
        if cash_tendered is None or cash_tendered < cart.total:
            raise InsufficientCashError("Insufficient cash tendered")
        cash_fields = {
            "cash_tendered": cash_tendered,
            "change_due": round_money(cash_tendered - cart.total),
        }

    order = _new_order(
        generate_order_id(),
        cart,
        OrderStatus.PAID,
        method,
        customer_name,
        **cash_fields,
    )
    return OrderStore().create_pending(order)


def create_card_payment(
    items: list[CartItem],
    customer_name: str | None = None,
    source_id: str | None = None,
) -> tuple[Order, str | None]:
    """
    Charge a card at the counter.

    Returns:
        The stored order and the client secret the browser must confirm,
        or None when the provider already captured the payment.
    """
    if not items:
        raise InvalidInputError("No items in order")
    cart = price_cart(items)
    order_id = generate_order_id()

    result = call_provider(
        lambda p: p.create_pos_payment(
            cart.provider_line_items, cart.total_cents, order_id, source_id
        )
    )

    # No client secret means the charge completed synchronously
    status = OrderStatus.PENDING if result.client_secret else OrderStatus.PAID
    order = _new_order(
        order_id,
        cart,
        status,
        PaymentMethod.POS_CARD,
        customer_name,
        provider_payment_id=result.provider_payment_id,
    )
    OrderStore().create_pending(order)
    return order, result.client_secret


def create_checkout_link(
    items: list[CartItem],
    origin: str,
    customer_name: str | None = None,
) -> tuple[Order, str]:
    """Create a hosted payment link for a counter order. Returns (order, url)."""
    if not items:
        raise InvalidInputError("No items in order")
    cart = price_cart(items)
    order_id = generate_order_id()

    result = call_provider(
        lambda p: p.create_pos_checkout_link(
            cart.provider_line_items, cart.total_cents, order_id, origin
        )
    )

    order = _new_order(
        order_id,
        cart,
        OrderStatus.PENDING,
        PaymentMethod.POS_LINK,
        customer_name,
        provider_session_id=result.provider_session_id,
    )
    OrderStore().create_pending(order)
    return order, result.checkout_url


def create_terminal_payment(
    items: list[CartItem],
    customer_name: str | None = None,
) -> tuple[Order, str | None]:
    """
    Start a card-present payment.

    Returns:
        The pending order and the client secret for the reader SDK, if the
        provider uses one.
    """
    if not items:
        raise InvalidInputError("No items in order")
    cart = price_cart(items)
    order_id = generate_order_id()

    result = call_provider(
        lambda p: p.create_terminal_payment(
            cart.provider_line_items, cart.total_cents, order_id
        )
    )

    order = _new_order(
        order_id,
        cart,
        OrderStatus.PENDING,
        PaymentMethod.POS_TERMINAL,
        customer_name,
        terminal_payment_id=result.terminal_payment_id,
        provider_payment_id=result.provider_payment_id,
    )
    OrderStore().create_pending(order)
    return order, result.client_secret


def get_terminal_status(terminal_payment_id: str) -> TerminalPaymentStatus:
    return call_provider(lambda p: p.get_terminal_payment_status(terminal_payment_id))


def cancel_terminal_payment(terminal_payment_id: str) -> None:
    call_provider(lambda p: p.cancel_terminal_payment(terminal_payment_id))
    logger.info("Terminal payment cancelled: id=%s", terminal_payment_id)


def create_connection_token() -> str:
    return call_provider(lambda p: p.create_terminal_connection_token())
