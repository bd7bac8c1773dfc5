"""
Menu price resolver.

Every flow that creates money (online checkout, POS cash orders, POS card
payments, terminal payments, counter payment links) prices its cart here.
Prices always come from the stored menu document; any client-supplied
price on a cart line is ignored.
"""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from foodtruck_schemas import CartItem, MenuData, OrderLineItem, ProviderLineItem
from pydantic import ValidationError as PydanticValidationError

from apps.web.core.exceptions import (
    InvalidInputError,
    InvalidItemError,
    ItemNotFoundError,
    MenuUnavailableError,
)
from apps.web.core.ids import generate_id
from apps.web.core.stores import DocumentStore

MENU_KEY = "menu"
CENTS = Decimal("0.01")


@dataclass(frozen=True)
class PricedCart:
    """Validated cart: persisted line items, provider line items and totals."""

    line_items: list[OrderLineItem]
    provider_line_items: list[ProviderLineItem]
    total: Decimal
    total_cents: int


def to_cents(amount: Decimal) -> int:
    """Convert a currency amount to integer cents, rounding half up."""
    return int((amount * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def round_money(amount: Decimal) -> Decimal:
    return amount.quantize(CENTS, rounding=ROUND_HALF_UP)


def generate_order_id() -> str:
    return generate_id("order")


def load_menu(store: DocumentStore | None = None) -> MenuData:
    """
    Load the stored menu document.

    Raises:
        MenuUnavailableError: If no menu is stored or it cannot be parsed.
    """
    data = (store or DocumentStore()).get(MENU_KEY)
    if not isinstance(data, dict) or "categories" not in data:
        raise MenuUnavailableError()
    try:
        return MenuData.model_validate(data)
    except PydanticValidationError as e:
        raise MenuUnavailableError() from e


def resolve_cart(
    menu: MenuData,
    cart_items: list[CartItem],
    max_quantity: int | None = None,
) -> PricedCart:
    """
    Price cart lines against the menu.

    Args:
        menu: The authoritative menu.
        cart_items: Requested lines. Must not be empty.
        max_quantity: Optional per-line quantity cap.

    Returns:
        PricedCart with the total rounded to cents.

    Raises:
        InvalidInputError: If the cart is empty.
        InvalidItemError: If a line lacks a category, name or quantity >= 1,
            exceeds max_quantity, or carries notes that do not match its
            quantity.
        ItemNotFoundError: If a line's (category id, item name) is not on
            the menu.
    """
    if not cart_items:
        raise InvalidInputError("No items in order")

    # "categoryId:itemName" -> (price, display name)
    lookup: dict[str, tuple[Decimal, str]] = {}
    for category in menu.categories:
        for item in category.items:
            if item.price is None:
                continue
            lookup[f"{category.id}:{item.name}"] = (
                item.price,
                f"{item.name} ({category.name})",
            )

    line_items: list[OrderLineItem] = []
    provider_line_items: list[ProviderLineItem] = []

    for cart_item in cart_items:
        if (
            not cart_item.category_id
            or not cart_item.item_name
            or not cart_item.quantity
            or cart_item.quantity < 1
        ):
            raise InvalidItemError(f"Invalid item: {cart_item.item_name}")

        if max_quantity is not None and cart_item.quantity > max_quantity:
            raise InvalidItemError(f"Invalid quantity for {cart_item.item_name}")

        notes = cart_item.notes or None
        if notes is not None and len(notes) != cart_item.quantity:
            raise InvalidItemError(f"Invalid notes for {cart_item.item_name}")

        key = f"{cart_item.category_id}:{cart_item.item_name}"
        if key not in lookup:
            raise ItemNotFoundError(f"Item not found: {cart_item.item_name}")
        price, display_name = lookup[key]

        line_items.append(
            OrderLineItem(
                category_id=cart_item.category_id,
                item_name=cart_item.item_name,
                quantity=cart_item.quantity,
                unit_price=price,
                notes=notes,
            )
        )
        provider_line_items.append(
            ProviderLineItem(
                name=display_name,
                unit_amount_cents=to_cents(price),
                quantity=cart_item.quantity,
            )
        )

    total = round_money(sum((li.unit_price * li.quantity for li in line_items), Decimal(0)))
    return PricedCart(
        line_items=line_items,
        provider_line_items=provider_line_items,
        total=total,
        total_cents=to_cents(total),
    )


def price_cart(
    cart_items: list[CartItem],
    max_quantity: int | None = None,
    store: DocumentStore | None = None,
) -> PricedCart:
    """Load the current menu and price the cart against it."""
    if not cart_items:
        raise InvalidInputError("No items in order")
    return resolve_cart(load_menu(store), cart_items, max_quantity=max_quantity)
