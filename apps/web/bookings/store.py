"""Booking store - the `bookings` collection document."""

from __future__ import annotations

import logging
from datetime import UTC, datetime

from foodtruck_schemas import Booking, BookingStatus, BookingSubmission
from pydantic import ValidationError as PydanticValidationError

from apps.web.core.exceptions import (
    BookingNotFoundError,
    InvalidStatusError,
    PersistenceError,
)
from apps.web.core.ids import generate_id
from apps.web.core.stores import DocumentStore

logger = logging.getLogger(__name__)

BOOKINGS_KEY = "bookings"

_UNSET = object()


class BookingStore:
    def __init__(self, documents: DocumentStore | None = None) -> None:
        self._documents = documents or DocumentStore()

    def list(self) -> list[Booking]:
        raw = self._documents.get(BOOKINGS_KEY) or []
        if not isinstance(raw, list):
            raise PersistenceError("Bookings collection is corrupt")
        try:
            return [Booking.model_validate(entry) for entry in raw]
        except PydanticValidationError as e:
            logger.error("Stored booking failed validation: %s", e)
            raise PersistenceError("Bookings collection is corrupt") from e

    def _save(self, bookings: list[Booking]) -> None:
        self._documents.put(BOOKINGS_KEY, [b.to_json_dict() for b in bookings])

    def create(self, submission: BookingSubmission) -> Booking:
        booking = Booking(
            **submission.model_dump(),
            id=generate_id("booking"),
            status=BookingStatus.PENDING,
            created_at=datetime.now(UTC),
        )
        bookings = self.list()
        bookings.append(booking)
        self._save(bookings)
        logger.info("Booking received: booking_id=%s", booking.id)
        return booking

    def update(
        self,
        booking_id: str,
        status: str,
        admin_notes: str | None | object = _UNSET,
        private: bool | None = None,
    ) -> Booking:
        """
        Set a booking's status and optionally its notes and privacy flag.

        Raises:
            InvalidStatusError: If status is not pending, confirmed or denied.
            BookingNotFoundError: If no booking has this id.
        """
        try:
            new_status = BookingStatus(status)
        except ValueError as e:
            raise InvalidStatusError("Invalid status") from e

        bookings = self.list()
        booking = next((b for b in bookings if b.id == booking_id), None)
        if booking is None:
            raise BookingNotFoundError()

        booking.status = new_status
        if admin_notes is not _UNSET:
            booking.admin_notes = admin_notes  # type: ignore[assignment]
        if private is not None:
            booking.private = private

        self._save(bookings)
        logger.info(
            "Booking updated: booking_id=%s status=%s", booking_id, new_status.value
        )
        return booking
