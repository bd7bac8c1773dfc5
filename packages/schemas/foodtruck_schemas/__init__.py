"""Foodtruck Schemas - Pydantic models for stored documents and provider contracts."""

from foodtruck_schemas.base import CamelModel, Money
from foodtruck_schemas.bookings import Booking, BookingStatus, BookingSubmission
from foodtruck_schemas.menu import CartItem, MenuCategory, MenuData, MenuItem
from foodtruck_schemas.orders import (
    Order,
    OrderLineItem,
    OrderSource,
    OrderStatus,
    PaymentMethod,
    PrepStatus,
)
from foodtruck_schemas.payments import (
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

__all__ = [
    # Base
    "CamelModel",
    "Money",
    # Bookings
    "Booking",
    "BookingStatus",
    "BookingSubmission",
    # Menu
    "CartItem",
    "MenuCategory",
    "MenuData",
    "MenuItem",
    # Orders
    "Order",
    "OrderLineItem",
    "OrderSource",
    "OrderStatus",
    "PaymentMethod",
    "PrepStatus",
    # Payments
    "OnlineCheckoutResult",
    "PaymentCompletedEvent",
    "PaymentProviderName",
    "PosCheckoutLinkResult",
    "PosPaymentResult",
    "ProviderLineItem",
    "TerminalPaymentResult",
    "TerminalPaymentStatus",
    "TerminalStatus",
    "WebhookValidationResult",
]
