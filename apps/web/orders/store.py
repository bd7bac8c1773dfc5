"""
Order store - the `orders` collection document.

All orders live in one JSON list. Every mutation loads the whole list,
changes it in memory and writes the whole list back, so concurrent writers
are last-writer-wins at the document level.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime

from foodtruck_schemas import Order, OrderStatus, PrepStatus
from pydantic import ValidationError as PydanticValidationError

from apps.web.core.exceptions import (
    InvalidItemIndexError,
    InvalidStatusError,
    InvalidUnitIndexError,
    OrderNotFoundError,
    PersistenceError,
)
from apps.web.core.stores import DocumentStore

logger = logging.getLogger(__name__)

ORDERS_KEY = "orders"

# Prefix of the session_id Square redirects carry, followed by the order id
SQUARE_REDIRECT_PREFIX = "sq_"

_UNSET = object()


def _now() -> datetime:
    return datetime.now(UTC)


class OrderStore:
    """Read-modify-write access to the orders collection."""

    def __init__(self, documents: DocumentStore | None = None) -> None:
        self._documents = documents or DocumentStore()

    def list(self) -> list[Order]:
        """All orders in insertion order."""
        raw = self._documents.get(ORDERS_KEY) or []
        if not isinstance(raw, list):
            raise PersistenceError("Orders collection is corrupt")
        try:
            return [Order.model_validate(entry) for entry in raw]
        except PydanticValidationError as e:
            logger.error("Stored order failed validation: %s", e)
            raise PersistenceError("Orders collection is corrupt") from e

    def _save(self, orders: list[Order]) -> None:
        self._documents.put(ORDERS_KEY, [order.to_json_dict() for order in orders])

    def create_pending(self, order: Order) -> Order:
        """Append a new order to the collection, in whatever status it carries."""
        orders = self.list()
        orders.append(order)
        self._save(orders)
        logger.info(
            "Order created: order_id=%s status=%s total=%s",
            order.id,
            order.status.value,
            order.total,
        )
        return order

    def get(self, order_id: str) -> Order:
        for order in self.list():
            if order.id == order_id:
                return order
        raise OrderNotFoundError()

    def find_by_session_id(self, session_id: str) -> Order:
        """
        Find an order by its provider checkout session id.

        Records created before the provider abstraction only carry
        stripeSessionId, so that field is checked when the current one
        is absent.

        Square payment links redirect with `sq_<order id>` instead of a
        session id, so that form is matched against the order id.
        """
        order_id = session_id.removeprefix(SQUARE_REDIRECT_PREFIX)
        is_square_redirect = order_id != session_id
        for order in self.list():
            if order.session_id == session_id:
                return order
            if is_square_redirect and order.id == order_id:
                return order
        raise OrderNotFoundError()

    def patch(
        self,
        order_id: str,
        status: str | None = None,
        admin_notes: str | None | object = _UNSET,
        item_prep_status: tuple[int, int, str] | None = None,
    ) -> Order:
        """
        Apply an admin edit and stamp updatedAt.

        Only status, adminNotes and one per-unit prep status are mutable.
        Everything is validated before the collection is written.

        Args:
            order_id: Order to edit.
            status: New order status.
            admin_notes: New admin notes; omit to leave unchanged.
            item_prep_status: (item_index, unit_index, prep_status).

        Raises:
            OrderNotFoundError: If no order has this id.
            InvalidStatusError: If a status is outside its enum.
            InvalidItemIndexError / InvalidUnitIndexError: If the prep
                target is out of range.
        """
        new_status = None
        if status is not None:
            try:
                new_status = OrderStatus(status)
            except ValueError as e:
                raise InvalidStatusError("Invalid status") from e

        orders = self.list()
        order = next((o for o in orders if o.id == order_id), None)
        if order is None:
            raise OrderNotFoundError()

        if item_prep_status is not None:
            item_index, unit_index, prep_status = item_prep_status
            self._apply_prep_status(order, item_index, unit_index, prep_status)

        if new_status is not None:
            order.status = new_status
        if admin_notes is not _UNSET:
            order.admin_notes = admin_notes  # type: ignore[assignment]
        order.updated_at = _now()

        self._save(orders)
        logger.info("Order patched: order_id=%s status=%s", order.id, order.status.value)
        return order

    def set_item_prep_status(
        self, order_id: str, item_index: int, unit_index: int, status: str
    ) -> Order:
        """Set one unit's prep status; other units keep theirs (default queued)."""
        return self.patch(order_id, item_prep_status=(item_index, unit_index, status))

    @staticmethod
    def _apply_prep_status(
        order: Order, item_index: int, unit_index: int, status: str
    ) -> None:
        try:
            prep_status = PrepStatus(status)
        except ValueError as e:
            raise InvalidStatusError("Invalid prep status") from e

        if not 0 <= item_index < len(order.items):
            raise InvalidItemIndexError("Invalid item index")
        item = order.items[item_index]
        if not 0 <= unit_index < item.quantity:
            raise InvalidUnitIndexError("Invalid unit index")

        statuses = item.unit_statuses()
        statuses[unit_index] = prep_status
        item.prep_statuses = statuses

    def mark_paid(
        self,
        order_id: str,
        provider_payment_id: str,
        customer_name: str | None = None,
        customer_email: str | None = None,
    ) -> bool:
        """
        Transition a pending order to paid.

        A no-op for any order that is not pending, so redelivered or
        out-of-order webhooks never touch a settled or cancelled order.

        Returns:
            True if the order was updated.

        Raises:
            OrderNotFoundError: If no order has this id.
        """
        orders = self.list()
        order = next((o for o in orders if o.id == order_id), None)
        if order is None:
            raise OrderNotFoundError()

        if order.status != OrderStatus.PENDING:
            logger.info(
                "Order already processed, skipping: order_id=%s status=%s",
                order_id,
                order.status.value,
            )
            return False

        order.status = OrderStatus.PAID
        order.updated_at = _now()
        if provider_payment_id:
            order.provider_payment_id = provider_payment_id
        if customer_name:
            order.customer_name = customer_name
        if customer_email:
            order.customer_email = customer_email

        self._save(orders)
        logger.info(
            "Order paid: order_id=%s provider_payment_id=%s",
            order_id,
            provider_payment_id,
        )
        return True
