"""Location-based unit price resolution.

The resolver is the only place a menu item's unit price is looked up. Prices
come from the catalog loaded for the order session; there is no fallback
table and no default price.
"""

import logging

from catering_pricing_service.models.menu_models import Location
from catering_pricing_service.observability.metrics import record_price_cache_lookup
from catering_pricing_service.pricing.catalog import MenuCatalog
from catering_pricing_service.pricing.errors import MissingPriceError, UnsupportedLocationError

logger = logging.getLogger(__name__)


def parse_location(value: Location | str) -> Location:
    """Parse a kitchen location.

    Accepts a Location member or its name, ignoring case and surrounding
    whitespace ("mykonos", " Thessaloniki ").

    Raises:
        UnsupportedLocationError: If the value is not a supported location
    """
    if isinstance(value, Location):
        return value

    if isinstance(value, str):
        normalized = value.strip().lower()
        for location in Location:
            if location.value.lower() == normalized:
                return location

    raise UnsupportedLocationError(value)


class PriceCache:
    """Memoized unit prices for a single order session.

    Entries are keyed by (location, menu_item_id) and are only valid for the
    cache's current location. Switching location drops every entry.
    """

    def __init__(self, location: Location | None = None) -> None:
        self.location = location
        self._prices: dict[tuple[Location, int], int] = {}

    def switch_location(self, location: Location) -> None:
        """Set the current location, clearing all cached prices if it changed."""
        if location == self.location:
            return

        if self._prices:
            logger.debug(
                f"Kitchen location changed from {self.location} to {location.value}, "
                f"dropping {len(self._prices)} cached prices"
            )
        self._prices.clear()
        self.location = location

    def get(self, location: Location, menu_item_id: int) -> int | None:
        return self._prices.get((location, menu_item_id))

    def put(self, location: Location, menu_item_id: int, price: int) -> None:
        self._prices[(location, menu_item_id)] = price

    def clear(self) -> None:
        self._prices.clear()

    def __len__(self) -> int:
        return len(self._prices)


class PricingResolver:
    """Resolves the authoritative unit price of a menu item at a location."""

    def __init__(self, catalog: MenuCatalog, cache: PriceCache | None = None) -> None:
        """Initialize the resolver.

        Args:
            catalog: Menu catalog loaded for the order session
            cache: Session-owned price cache (a private one is created if omitted)
        """
        self.catalog = catalog
        self.cache = cache if cache is not None else PriceCache()

    def resolve(self, menu_item_id: int, location: Location | str) -> int:
        """Resolve the unit price of a menu item in euro cents.

        Args:
            menu_item_id: Catalog id of the menu item
            location: Kitchen location the order is prepared at

        Returns:
            Non-negative unit price in cents

        Raises:
            UnsupportedLocationError: If location is not a supported kitchen
            UnknownMenuItemError: If the id is not in the catalog
            MissingPriceError: If the item has no price for the location
        """
        location = parse_location(location)
        self.cache.switch_location(location)

        cached = self.cache.get(location, menu_item_id)
        if cached is not None:
            record_price_cache_lookup(hit=True)
            return cached

        record_price_cache_lookup(hit=False)
        # No fallback price: a missing location price is a catalog fault
        item = self.catalog.get(menu_item_id)
        price = item.unit_price_by_location.get(location)
        if price is None:
            raise MissingPriceError(menu_item_id, location.value)

        self.cache.put(location, menu_item_id, price)
        return price
