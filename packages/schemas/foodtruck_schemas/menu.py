"""Menu schemas - the stored menu document and cart line requests."""

from pydantic import ConfigDict, Field, field_validator

from foodtruck_schemas.base import CamelModel, Money


class MenuItem(CamelModel):
    """An item on the menu. Items without a price cannot be ordered."""

    model_config = ConfigDict(extra="allow")

    name: str = Field(..., min_length=1)
    price: Money | None = Field(default=None, ge=0)
    description: str = ""


class MenuCategory(CamelModel):
    """A menu section. `id` is the stable key carts refer to."""

    model_config = ConfigDict(extra="allow")

    id: str = Field(..., min_length=1)
    name: str
    items: list[MenuItem] = Field(default_factory=list)

    @field_validator("items")
    @classmethod
    def item_names_unique(cls, items: list[MenuItem]) -> list[MenuItem]:
        seen: set[str] = set()
        for item in items:
            if item.name in seen:
                raise ValueError(f"Duplicate item name: {item.name}")
            seen.add(item.name)
        return items


class MenuData(CamelModel):
    """The `menu` document."""

    model_config = ConfigDict(extra="allow")

    categories: list[MenuCategory] = Field(default_factory=list)

    @field_validator("categories")
    @classmethod
    def category_ids_unique(cls, categories: list[MenuCategory]) -> list[MenuCategory]:
        seen: set[str] = set()
        for category in categories:
            if category.id in seen:
                raise ValueError(f"Duplicate category id: {category.id}")
            seen.add(category.id)
        return categories


class CartItem(CamelModel):
    """
    A requested cart line.

    Fields are loose on purpose so the price resolver can report which
    line is incomplete. Any client-supplied price is ignored.
    """

    model_config = ConfigDict(extra="ignore")

    category_id: str | None = None
    item_name: str | None = None
    quantity: int | None = None
    notes: list[str] | None = None
