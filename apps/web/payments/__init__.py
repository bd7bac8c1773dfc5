"""Payments module - Stripe and Square behind one provider protocol."""

from apps.web.payments.exceptions import (
    MissingSourceError,
    ProviderError,
    UnsupportedOperationError,
)

__all__ = [
    "MissingSourceError",
    "ProviderError",
    "UnsupportedOperationError",
]
