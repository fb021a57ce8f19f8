"""Client for loading the menu catalog from the catering application API."""

import logging

import httpx

from catering_pricing_service.models.menu_models import Location, MenuItem
from catering_pricing_service.pricing.catalog import MenuCatalog

logger = logging.getLogger(__name__)


class MenuServiceClient:
    """HTTP client for fetching menu items from the catering application.

    Menu items are read from the application's menu-item endpoint, which
    returns a JSON array of records with integer cent prices per location.
    """

    def __init__(self, base_url: str, api_key: str, timeout_seconds: float = 10.0) -> None:
        """Initialize the client.

        Args:
            base_url: Base URL of the catering application (e.g., "https://app.example.com")
            api_key: API key for service-to-service authentication
            timeout_seconds: Request timeout
        """
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout_seconds = timeout_seconds

    async def get_menu_items(self, kitchen: Location | None = None) -> list[MenuItem] | None:
        """Fetch menu items, optionally filtered to one kitchen.

        Args:
            kitchen: Only return items served from this kitchen location

        Returns:
            List of valid MenuItem objects (invalid records are skipped), or None on failure
        """
        url = f"{self.base_url}/api/menu-items"
        headers = {"X-API-Key": self.api_key}
        params = {"kitchen": kitchen.value} if kitchen is not None else None

        try:
            async with httpx.AsyncClient(timeout=self.timeout_seconds) as client:
                response = await client.get(url, headers=headers, params=params)
                response.raise_for_status()
                data = response.json()

        except (httpx.HTTPStatusError, httpx.RequestError) as e:
            logger.error(f"Failed to fetch menu items: {e}")
            return None

        items = []
        for item_data in data:
            # One malformed record must not take the rest of the menu down
            try:
                items.append(MenuItem.from_api_item(item_data))
            except (KeyError, TypeError, ValueError) as e:
                item_id = item_data.get("id") if isinstance(item_data, dict) else None
                logger.warning(f"Skipping invalid menu item {item_id}: {e}")

        return items

    async def get_menu_catalog(self, kitchen: Location | None = None) -> MenuCatalog | None:
        """Load a catalog snapshot for an order session.

        Args:
            kitchen: Only include items served from this kitchen location

        Returns:
            MenuCatalog, or None if the menu items could not be fetched
        """
        items = await self.get_menu_items(kitchen)
        if items is None:
            return None

        logger.info(f"Loaded menu catalog with {len(items)} items")
        return MenuCatalog(items)
