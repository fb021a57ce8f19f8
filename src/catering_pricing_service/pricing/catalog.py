"""Read-only menu catalog for one order session."""

import logging
from collections.abc import Iterable, Iterator
from types import MappingProxyType

from catering_pricing_service.models.menu_models import MenuCategory, MenuItem
from catering_pricing_service.pricing.errors import UnknownMenuItemError

logger = logging.getLogger(__name__)


class MenuCatalog:
    """Immutable lookup of menu items by id.

    The catalog is loaded once per order session and never mutated afterwards.
    Items missing a price for a supported location are kept so the rest of the
    menu stays usable, but resolving the missing price raises MissingPriceError.
    """

    def __init__(self, items: Iterable[MenuItem]) -> None:
        """Build the catalog.

        Args:
            items: Menu items in display order

        Raises:
            ValueError: If two items share the same id
        """
        by_id: dict[int, MenuItem] = {}
        for item in items:
            if item.id in by_id:
                raise ValueError(f"Duplicate menu item id {item.id} in catalog")

            missing = item.missing_locations()
            if missing:
                logger.warning(
                    f"Menu item {item.id} ({item.name}) has no price for "
                    f"{', '.join(location.value for location in missing)}"
                )

            by_id[item.id] = item

        self._items = MappingProxyType(by_id)

    def get(self, menu_item_id: int) -> MenuItem:
        """Get a menu item by id.

        Raises:
            UnknownMenuItemError: If the id is not in the catalog
        """
        try:
            return self._items[menu_item_id]
        except KeyError:
            raise UnknownMenuItemError(menu_item_id) from None

    def by_category(self, category: MenuCategory | str) -> list[MenuItem]:
        """Return the items of one category, in load order."""
        # MenuCategory members compare equal to their string values
        return [item for item in self._items.values() if item.category == category]

    def available_items(self) -> list[MenuItem]:
        """Return the items that can currently be ordered."""
        return [item for item in self._items.values() if item.available]

    def __contains__(self, menu_item_id: object) -> bool:
        return menu_item_id in self._items

    def __iter__(self) -> Iterator[MenuItem]:
        return iter(self._items.values())

    def __len__(self) -> int:
        return len(self._items)
