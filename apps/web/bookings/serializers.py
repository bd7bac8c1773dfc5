"""
Request schemas for booking endpoints.
"""

from foodtruck_schemas import CamelModel
from pydantic import Field


class BookingUpdateRequest(CamelModel):
    id: str = Field(..., min_length=1)
    status: str = Field(..., min_length=1)
    admin_notes: str | None = None
    private: bool | None = None
