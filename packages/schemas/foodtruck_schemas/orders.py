"""Order schemas - the records held in the `orders` collection document."""

from datetime import datetime
from enum import Enum

from pydantic import ConfigDict, Field

from foodtruck_schemas.base import CamelModel, Money


class OrderStatus(str, Enum):
    """Order lifecycle status."""

    PENDING = "pending"
    PAID = "paid"
    FULFILLED = "fulfilled"
    CANCELLED = "cancelled"


class OrderSource(str, Enum):
    """Where the order was placed."""

    ONLINE = "online"
    POS = "pos"


class PaymentMethod(str, Enum):
    """Payment channel used for an order."""

    ONLINE = "online"
    POS_CARD = "pos_card"
    POS_LINK = "pos_link"
    POS_TERMINAL = "pos_terminal"
    CASH = "cash"
    CARD_EXTERNAL = "card_external"
    # Written by releases that only supported Stripe
    STRIPE_POS = "stripe_pos"
    STRIPE_TERMINAL = "stripe_terminal"


class PrepStatus(str, Enum):
    """Kitchen preparation status of a single unit."""

    QUEUED = "queued"
    STARTED = "started"
    DONE = "done"


class OrderLineItem(CamelModel):
    """A priced line. `unit_price` is a snapshot taken at order creation."""

    model_config = ConfigDict(extra="allow")

    category_id: str
    item_name: str
    quantity: int = Field(..., ge=1)
    unit_price: Money
    notes: list[str] | None = None
    prep_statuses: list[PrepStatus] | None = None

    def unit_status(self, unit_index: int) -> PrepStatus:
        """Prep status of one unit; unset units are queued."""
        if self.prep_statuses is None or unit_index >= len(self.prep_statuses):
            return PrepStatus.QUEUED
        return self.prep_statuses[unit_index]

    def unit_statuses(self) -> list[PrepStatus]:
        return [self.unit_status(i) for i in range(self.quantity)]


class Order(CamelModel):
    """
    An order record.

    Unknown keys are preserved so records written by older releases
    survive a read-modify-write of the collection.
    """

    model_config = ConfigDict(extra="allow")

    id: str
    items: list[OrderLineItem]
    total: Money
    status: OrderStatus
    source: OrderSource | None = None
    payment_method: PaymentMethod | None = None

    customer_name: str | None = None
    customer_email: str | None = None

    provider_session_id: str | None = None
    provider_payment_id: str | None = None
    terminal_payment_id: str | None = None

    # Legacy linkage, only present on records created before
    # provider_session_id / provider_payment_id existed.
    stripe_session_id: str | None = None
    stripe_payment_intent_id: str | None = None

    cash_tendered: Money | None = None
    change_due: Money | None = None

    admin_notes: str | None = None
    created_at: datetime
    updated_at: datetime

    @property
    def session_id(self) -> str | None:
        """Provider session id, falling back to the legacy Stripe field."""
        return self.provider_session_id or self.stripe_session_id

    @property
    def payment_id(self) -> str | None:
        """Provider payment id, falling back to the legacy Stripe field."""
        return self.provider_payment_id or self.stripe_payment_intent_id

    def public_view(self) -> dict:
        """Customer-facing subset of the order (no admin fields)."""
        data = self.to_json_dict()
        keys = (
            "id",
            "items",
            "total",
            "customerName",
            "customerEmail",
            "status",
            "createdAt",
        )
        return {key: data.get(key) for key in keys}
