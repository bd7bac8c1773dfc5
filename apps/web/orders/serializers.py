"""
Request schemas for order endpoints.
"""

from foodtruck_schemas import CamelModel, CartItem
from pydantic import Field


class CheckoutRequest(CamelModel):
    """Online checkout cart."""

    items: list[CartItem] = Field(default_factory=list)


class ItemPrepStatusPatch(CamelModel):
    item_index: int
    unit_index: int
    status: str


class OrderPatchRequest(CamelModel):
    """
    Admin edit of one order.

    adminNotes is only applied when the key is present, so it is read
    through ``model_fields_set``.
    """

    id: str = Field(..., min_length=1)
    status: str | None = None
    admin_notes: str | None = None
    item_prep_status: ItemPrepStatusPatch | None = None
