"""Booking schemas - catering and event requests."""

from datetime import datetime
from enum import Enum

from pydantic import ConfigDict, EmailStr, Field

from foodtruck_schemas.base import CamelModel


class BookingStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    DENIED = "denied"


class BookingSubmission(CamelModel):
    """Public booking form submission."""

    name: str = Field(..., min_length=1)
    email: EmailStr
    phone: str = Field(..., min_length=1)
    event_date: str = Field(..., min_length=1)
    event_time: str = Field(..., min_length=1)
    location: str = Field(..., min_length=1)
    address: str = Field(..., min_length=1)
    event_type: str = Field(..., min_length=1)
    guest_count: int = Field(..., ge=1, strict=True)
    message: str | None = None


class Booking(BookingSubmission):
    """A stored booking request."""

    model_config = ConfigDict(extra="allow")

    # Stored records are not re-validated against the submission rules
    email: str  # type: ignore[assignment]
    guest_count: int

    id: str
    status: BookingStatus = BookingStatus.PENDING
    created_at: datetime
    admin_notes: str | None = None
    private: bool | None = None
