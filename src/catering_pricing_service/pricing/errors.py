"""Pricing error hierarchy.

Pricing failures are deterministic: they mean the cart references stale
catalog data, the caller passed a bad value, or the catalog itself is
inconsistent. They are raised here and mapped to responses by the API layer.
"""


class PricingError(Exception):
    """Base class for errors raised while pricing an order."""


class UnknownMenuItemError(PricingError):
    """A line item references a menu item id that is not in the catalog."""

    def __init__(self, menu_item_id: int) -> None:
        self.menu_item_id = menu_item_id
        super().__init__(f"Menu item {menu_item_id} does not exist in the catalog")


class UnsupportedLocationError(PricingError):
    """A location value other than a supported kitchen location was supplied."""

    def __init__(self, location: object) -> None:
        self.location = location
        super().__init__(f"Unsupported kitchen location: {location!r}")


class MissingPriceError(PricingError):
    """A catalog entry has no price for the requested location."""

    def __init__(self, menu_item_id: int, location: str) -> None:
        self.menu_item_id = menu_item_id
        self.location = location
        super().__init__(f"Menu item {menu_item_id} has no price for {location}")


class UnavailableMenuItemError(PricingError):
    """An unavailable menu item was added to a cart."""

    def __init__(self, menu_item_id: int) -> None:
        self.menu_item_id = menu_item_id
        super().__init__(f"Menu item {menu_item_id} is not available")


class InvalidQuantityError(PricingError):
    """A line item with a quantity below one reached the calculator."""

    def __init__(self, menu_item_id: int, quantity: int) -> None:
        self.menu_item_id = menu_item_id
        self.quantity = quantity
        super().__init__(f"Quantity for menu item {menu_item_id} must be at least 1, got {quantity}")
