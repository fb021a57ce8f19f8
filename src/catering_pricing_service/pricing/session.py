"""Order session: the cart, its location and its price cache."""

import logging
from collections.abc import Iterable

from catering_pricing_service.models.menu_models import Location
from catering_pricing_service.models.order_models import (
    CartLine,
    OrderLineItem,
    OrderTotals,
    TotalsMode,
)
from catering_pricing_service.pricing.calculator import OrderTotalCalculator
from catering_pricing_service.pricing.catalog import MenuCatalog
from catering_pricing_service.pricing.errors import UnavailableMenuItemError
from catering_pricing_service.pricing.resolver import PriceCache, PricingResolver, parse_location
from catering_pricing_service.pricing.rules import PricingRules

logger = logging.getLogger(__name__)


class OrderSession:
    """A single customer's order in progress.

    The session exclusively owns its line items and its price cache. Any
    change of kitchen location invalidates both the cache and every line's
    resolved price before anything can read them again.
    """

    def __init__(
        self,
        catalog: MenuCatalog,
        location: Location | str,
        rules: PricingRules | None = None,
    ) -> None:
        """Start a session.

        Args:
            catalog: Menu catalog loaded for this session
            location: Initial kitchen location
            rules: Delivery fee and VAT rules

        Raises:
            UnsupportedLocationError: If location is not supported
        """
        self.catalog = catalog
        self.location = parse_location(location)
        self.cache = PriceCache(self.location)
        self.resolver = PricingResolver(catalog, self.cache)
        self.calculator = OrderTotalCalculator(self.resolver, rules)
        self._lines: list[OrderLineItem] = []

    @property
    def line_items(self) -> list[OrderLineItem]:
        return list(self._lines)

    def add_item(
        self,
        menu_item_id: int,
        quantity: int = 1,
        special_instructions: str | None = None,
    ) -> OrderLineItem:
        """Add a menu item to the cart.

        Adding an item that is already in the cart increases its quantity;
        new special instructions replace the previous ones.

        Raises:
            UnknownMenuItemError: If the item is not in the catalog
            UnavailableMenuItemError: If the item cannot currently be ordered
            ValueError: If quantity is below one
        """
        if quantity < 1:
            raise ValueError(f"quantity must be at least 1, got {quantity}")

        menu_item = self.catalog.get(menu_item_id)
        if not menu_item.available:
            raise UnavailableMenuItemError(menu_item_id)

        # Same item twice merges into one line
        existing = self._find(menu_item_id)
        if existing is not None:
            existing.quantity += quantity
            if special_instructions is not None:
                existing.special_instructions = special_instructions
            return existing

        line = OrderLineItem(
            menu_item_id=menu_item_id,
            quantity=quantity,
            special_instructions=special_instructions,
        )
        self._lines.append(line)
        return line

    def set_quantity(self, menu_item_id: int, quantity: int) -> OrderLineItem | None:
        """Change a line's quantity; zero or less removes the line.

        Returns:
            The updated line, or None if it was removed or not in the cart
        """
        line = self._find(menu_item_id)
        if line is None:
            return None

        if quantity <= 0:
            self._lines.remove(line)
            return None

        line.quantity = quantity
        return line

    def remove_item(self, menu_item_id: int) -> bool:
        """Remove a line from the cart. Returns False if it was not in the cart."""
        line = self._find(menu_item_id)
        if line is None:
            return False
        self._lines.remove(line)
        return True

    def load_cart(self, lines: Iterable[CartLine]) -> None:
        """Add submitted cart lines, skipping lines with a quantity of zero or less."""
        for line in lines:
            if line.quantity <= 0:
                logger.debug(f"Dropping cart line for menu item {line.menu_item_id} with quantity {line.quantity}")
                continue
            self.add_item(line.menu_item_id, line.quantity, line.special_instructions)

    def clear(self) -> None:
        self._lines.clear()

    def change_location(self, location: Location | str) -> None:
        """Switch kitchen location, invalidating every cached and resolved price.

        Raises:
            UnsupportedLocationError: If location is not supported
        """
        location = parse_location(location)
        if location == self.location:
            return

        # Drop every price resolved for the old location
        self.cache.switch_location(location)
        for line in self._lines:
            line.resolved_unit_price = None

        logger.info(f"Order session location changed from {self.location.value} to {location.value}")
        self.location = location

    def totals(self, mode: TotalsMode | None = None) -> OrderTotals:
        """Recompute totals for the current cart and location."""
        return self.calculator.calculate(self._lines, self.location, mode)

    def _find(self, menu_item_id: int) -> OrderLineItem | None:
        for line in self._lines:
            if line.menu_item_id == menu_item_id:
                return line
        return None
