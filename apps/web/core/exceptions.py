"""Application error taxonomy. Each error maps to one HTTP status."""


class FoodtruckError(Exception):
    """Base exception for request-level failures."""

    status_code = 500

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InvalidInputError(FoodtruckError):
    """Malformed or missing request fields."""

    status_code = 400


class InvalidItemError(InvalidInputError):
    """A cart line is missing its category, name or a positive quantity."""


class ItemNotFoundError(InvalidInputError):
    """A cart line references an item that is not on the current menu."""


class InvalidStatusError(InvalidInputError):
    """A status value outside the allowed set."""


class InvalidItemIndexError(InvalidInputError):
    """Line item index out of range."""


class InvalidUnitIndexError(InvalidInputError):
    """Unit index out of range for a line item."""


class InsufficientCashError(InvalidInputError):
    """Cash tendered does not cover the order total."""


class WebhookInvalidError(InvalidInputError):
    """Webhook signature could not be verified."""


class FeatureDisabledError(FoodtruckError):
    """A feature is switched off in site settings."""

    status_code = 403


class NotFoundError(FoodtruckError):
    """Referenced record does not exist."""

    status_code = 404


class OrderNotFoundError(NotFoundError):
    def __init__(self, message: str = "Order not found") -> None:
        super().__init__(message)


class BookingNotFoundError(NotFoundError):
    def __init__(self, message: str = "Booking not found") -> None:
        super().__init__(message)


class PersistenceError(FoodtruckError):
    """Document or blob store read/write failed."""


class MenuUnavailableError(FoodtruckError):
    """No menu document is stored."""

    def __init__(self, message: str = "Menu not available") -> None:
        super().__init__(message)
