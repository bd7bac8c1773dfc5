"""Kitchen prep queue - a view derived from paid orders on every request."""

from datetime import datetime, timedelta

from foodtruck_schemas import Order, OrderStatus, PrepStatus

# How long a fully prepared order stays on screen for handoff
DONE_VISIBILITY = timedelta(minutes=15)

ACTIVE_STATUSES = frozenset({PrepStatus.QUEUED, PrepStatus.STARTED})


def _unit_statuses(order: Order) -> list[PrepStatus]:
    return [status for item in order.items for status in item.unit_statuses()]


def is_visible(order: Order, now: datetime) -> bool:
    if order.status != OrderStatus.PAID:
        return False
    statuses = _unit_statuses(order)
    if any(status in ACTIVE_STATUSES for status in statuses):
        return True
    if all(status == PrepStatus.DONE for status in statuses):
        return now - order.updated_at < DONE_VISIBILITY
    return False


def build_prep_queue(orders: list[Order], now: datetime) -> list[Order]:
    """Paid orders still in the kitchen, oldest first."""
    return sorted(
        (order for order in orders if is_visible(order, now)),
        key=lambda order: order.created_at,
    )
