"""Menu data models.

These models represent menu items as served by the catering application's
menu-item endpoint. Prices are stored per kitchen location as integer
amounts in euro cents.
"""

from enum import Enum
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Whole euro cents; floats and numeric strings are rejected rather than coerced
Cents = Annotated[int, Field(strict=True, ge=0)]


class Location(str, Enum):
    """Kitchen locations an order can be prepared and delivered from."""

    THESSALONIKI = "Thessaloniki"
    MYKONOS = "Mykonos"


class MenuCategory(str, Enum):
    """Standard menu categories used for grouping items in the order form.

    The menu service stores categories as free text, so MenuItem.category is a
    plain string and may hold values outside this list.
    """

    BREADS = "breads"
    BREAKFAST = "breakfast"
    FRUITS = "fruits"
    SALAD = "salad"
    SOUP = "soup"
    STARTER = "starter"
    SANDWICH = "sandwich"
    PLATTER = "platter"
    MAIN = "main"
    SIDE = "side"
    DESSERT = "dessert"
    BEVERAGE = "beverage"


class MenuItem(BaseModel):
    """Menu item with location-scoped unit prices."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(..., description="Unique identifier for the menu item")
    name: str = Field(..., description="Item name")
    description: str | None = Field(None, description="Item description")
    category: str = Field(..., description="Category the item is grouped under (display only)")
    unit_price_by_location: dict[Location, Cents] = Field(
        default_factory=dict,
        description="Unit price in euro cents for each kitchen location",
    )
    available: bool = Field(default=True, description="Whether item can be added to a cart")
    unit: str | None = Field(None, description="Display unit, e.g. 'per piece'")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Validate that the item name is not blank."""
        if not v.strip():
            raise ValueError("name must not be blank")
        return v

    @field_validator("category", mode="before")
    @classmethod
    def validate_category(cls, v: object) -> object:
        """Store standard categories as their plain string value."""
        if isinstance(v, MenuCategory):
            return v.value
        return v

    def missing_locations(self) -> list[Location]:
        """Return the supported locations this item has no price for."""
        return [location for location in Location if location not in self.unit_price_by_location]

    @classmethod
    def from_api_item(cls, item: dict) -> "MenuItem":
        """Create a MenuItem from a menu-item API record.

        The API exposes one integer cent column per location
        (``priceThessaloniki``, ``priceMykonos``).

        Args:
            item: Menu item dictionary as returned by the API

        Returns:
            MenuItem: Parsed model instance
        """
        prices: dict[Location, int] = {}
        for location in Location:
            price = item.get(f"price{location.value}")
            if price is not None:
                prices[location] = price

        return cls(
            id=item["id"],
            name=item["name"],
            description=item.get("description"),
            category=item["category"],
            unit_price_by_location=prices,
            available=item.get("available", True) is not False,
            unit=item.get("unit"),
        )
