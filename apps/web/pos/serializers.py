"""
Request schemas for point-of-sale endpoints.
"""

from decimal import Decimal

from foodtruck_schemas import CamelModel, CartItem
from pydantic import Field


class PosCartRequest(CamelModel):
    items: list[CartItem] = Field(default_factory=list)
    customer_name: str | None = None


class PosOrderRequest(PosCartRequest):
    """Cash or externally-processed card order, paid at the counter."""

    payment_method: str | None = None
    cash_tendered: Decimal | None = None


class PosPaymentRequest(PosCartRequest):
    # Tokenized card from the Web Payments SDK; Square only
    source_id: str | None = None


class TerminalCancelRequest(CamelModel):
    id: str = Field(..., min_length=1)
