"""Shared pytest fixtures and configuration for all tests."""

import os

# Keep src/main.py from building the real application on import
os.environ.setdefault("ENVIRONMENT", "test")

import pytest  # noqa: E402

from catering_pricing_service.models.menu_models import Location, MenuCategory, MenuItem  # noqa: E402
from catering_pricing_service.pricing.catalog import MenuCatalog  # noqa: E402


@pytest.fixture
def bread_rolls() -> MenuItem:
    """Menu item priced 300 cents in Thessaloniki and 320 in Mykonos."""
    return MenuItem(
        id=1,
        name="Assorted bread rolls",
        description="Selection of freshly baked bread rolls",
        category=MenuCategory.BREADS,
        unit_price_by_location={Location.THESSALONIKI: 300, Location.MYKONOS: 320},
        available=True,
        unit="per piece",
    )


@pytest.fixture
def greek_salad() -> MenuItem:
    """Menu item with a larger location price gap."""
    return MenuItem(
        id=2,
        name="Greek salad",
        category=MenuCategory.SALAD,
        unit_price_by_location={Location.THESSALONIKI: 1850, Location.MYKONOS: 2400},
        unit="per portion",
    )


@pytest.fixture
def seasonal_fruit() -> MenuItem:
    """Menu item that is currently unavailable."""
    return MenuItem(
        id=3,
        name="Seasonal fruit platter",
        category=MenuCategory.FRUITS,
        unit_price_by_location={Location.THESSALONIKI: 2500, Location.MYKONOS: 2900},
        available=False,
    )


@pytest.fixture
def mykonos_only_caviar() -> MenuItem:
    """Menu item missing its Thessaloniki price."""
    return MenuItem(
        id=4,
        name="Caviar service",
        category=MenuCategory.STARTER,
        unit_price_by_location={Location.MYKONOS: 18000},
    )


@pytest.fixture
def menu_items(
    bread_rolls: MenuItem,
    greek_salad: MenuItem,
    seasonal_fruit: MenuItem,
    mykonos_only_caviar: MenuItem,
) -> list[MenuItem]:
    """All sample menu items."""
    return [bread_rolls, greek_salad, seasonal_fruit, mykonos_only_caviar]


@pytest.fixture
def catalog(menu_items: list[MenuItem]) -> MenuCatalog:
    """Catalog built from the sample menu items."""
    return MenuCatalog(menu_items)


@pytest.fixture
def menu_items_api_payload() -> list[dict]:
    """Menu items as returned by the menu-item endpoint."""
    return [
        {
            "id": 1,
            "name": "Assorted bread rolls",
            "description": "Selection of freshly baked bread rolls",
            "category": "breads",
            "dietaryOptions": ["regular"],
            "priceThessaloniki": 300,
            "priceMykonos": 320,
            "available": True,
            "imageUrl": None,
            "unit": "per piece",
        },
        {
            "id": 2,
            "name": "Greek salad",
            "description": None,
            "category": "salad",
            "dietaryOptions": ["vegetarian"],
            "priceThessaloniki": 1850,
            "priceMykonos": 2400,
            "available": True,
            "imageUrl": None,
            "unit": "per portion",
        },
    ]
