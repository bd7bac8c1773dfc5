"""POS services - counter orders, card payments and terminal control."""

from apps.web.pos.services.counter import (
    cancel_terminal_payment,
    create_card_payment,
    create_checkout_link,
    create_connection_token,
    create_counter_order,
    create_terminal_payment,
    get_terminal_status,
)

__all__ = [
    "cancel_terminal_payment",
    "create_card_payment",
    "create_checkout_link",
    "create_connection_token",
    "create_counter_order",
    "create_terminal_payment",
    "get_terminal_status",
]
