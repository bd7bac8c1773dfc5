"""
Pytest configuration for Django app tests.
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from foodtruck_schemas import PaymentProviderName

from apps.web.core.stores import DocumentStore

MENU = {
    "categories": [
        {
            "id": "drinks",
            "name": "Drinks",
            "items": [
                {"name": "Milk Tea", "price": 5.00},
                {"name": "Lemonade", "price": 3.25},
            ],
        },
        {
            "id": "food",
            "name": "Food",
            "items": [
                {"name": "Bao", "price": 2.50, "description": "Steamed bun"},
                {"name": "Seasonal Special"},
            ],
        },
    ]
}


@pytest.fixture
def documents(db) -> DocumentStore:
    return DocumentStore()


@pytest.fixture
def menu(documents: DocumentStore) -> dict:
    """Store the sample menu document."""
    documents.put("menu", MENU)
    return MENU


@pytest.fixture
def online_ordering(documents: DocumentStore) -> None:
    documents.put("settings", {"onlineOrderingEnabled": True})


@pytest.fixture
def fake_provider():
    """
    Replace the configured payment provider with an async mock.

    Each test sets the return value of the provider method it exercises.
    """
    provider = MagicMock()
    provider.name = PaymentProviderName.STRIPE
    for method in (
        "create_online_checkout",
        "create_pos_payment",
        "create_pos_checkout_link",
        "create_terminal_payment",
        "get_terminal_payment_status",
        "cancel_terminal_payment",
        "create_terminal_connection_token",
        "validate_webhook",
        "close",
    ):
        setattr(provider, method, AsyncMock())

    with patch("apps.web.payments.services.get_provider", return_value=provider):
        yield provider
