"""Payment provider contracts - provider-neutral request and result shapes."""

from enum import Enum
from typing import Literal

from pydantic import Field

from foodtruck_schemas.base import CamelModel


class PaymentProviderName(str, Enum):
    """Supported payment providers."""

    STRIPE = "stripe"
    SQUARE = "square"


class ProviderLineItem(CamelModel):
    """A line item formatted for a payment provider."""

    name: str
    unit_amount_cents: int = Field(..., ge=0)
    quantity: int = Field(..., ge=1)


class OnlineCheckoutResult(CamelModel):
    """Embedded checkout (client_secret) or hosted checkout (checkout_url)."""

    client_secret: str | None = None
    checkout_url: str | None = None
    provider_session_id: str


class PosPaymentResult(CamelModel):
    """In-person card charge. No client_secret means it is already captured."""

    client_secret: str | None = None
    provider_payment_id: str


class PosCheckoutLinkResult(CamelModel):
    checkout_url: str
    provider_session_id: str


class TerminalPaymentResult(CamelModel):
    terminal_payment_id: str
    provider_payment_id: str
    client_secret: str | None = None


class TerminalStatus(str, Enum):
    """Normalized card-present payment status."""

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    ERROR = "error"


class TerminalPaymentStatus(CamelModel):
    status: TerminalStatus
    provider_payment_id: str | None = None


class PaymentCompletedEvent(CamelModel):
    """A provider payment that settled an internal order."""

    type: Literal["payment_completed"] = "payment_completed"
    order_id: str
    provider_payment_id: str
    customer_name: str | None = None
    customer_email: str | None = None


class WebhookValidationResult(CamelModel):
    """Outcome of verifying an inbound webhook. Invalid results carry no events."""

    valid: bool
    events: list[PaymentCompletedEvent] = Field(default_factory=list)

    @classmethod
    def invalid(cls) -> "WebhookValidationResult":
        return cls(valid=False, events=[])
