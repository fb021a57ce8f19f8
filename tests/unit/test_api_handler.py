"""Unit tests for the pricing API endpoints."""

from datetime import UTC, datetime
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from catering_pricing_service.handlers.api_handler import create_app
from catering_pricing_service.models.menu_models import Location
from catering_pricing_service.models.order_models import OrderSubmission, OrderTotals, TotalsMode
from catering_pricing_service.pricing.catalog import MenuCatalog
from catering_pricing_service.pricing.errors import (
    InvalidQuantityError,
    MissingPriceError,
    UnavailableMenuItemError,
    UnknownMenuItemError,
    UnsupportedLocationError,
)
from catering_pricing_service.pricing.session import OrderSession
from catering_pricing_service.services.checkout_service import (
    CatalogUnavailableError,
    CheckoutService,
    EmptyOrderError,
    OrderPersistenceError,
)

HEADERS = {"X-API-Key": "test-api-key"}


@pytest.fixture
def totals() -> OrderTotals:
    """Totals for 2 bread rolls at Mykonos."""
    return OrderTotals(
        location=Location.MYKONOS,
        mode=TotalsMode.DELIVERY_FEE_ONLY,
        lines=[],
        subtotal_minor_units=640,
        delivery_fee_minor_units=15000,
        vat_rate=Decimal("0.13"),
        vat_minor_units=2033,
        vat_included=False,
        total_minor_units=15640,
    )


@pytest.fixture
def client() -> TestClient:
    """Create a test client with a mocked checkout service."""
    app = create_app(
        checkout_service=MagicMock(spec=CheckoutService),
        api_keys=["test-api-key"],
    )
    return TestClient(app)


@pytest.mark.unit
class TestHealthEndpoint:
    """Test suite for health check endpoint."""

    def test_health_check(self, client: TestClient) -> None:
        """Test health check needs no API key."""
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}


@pytest.mark.unit
class TestAuthentication:
    """Test suite for API key checks."""

    def test_missing_api_key(self, client: TestClient) -> None:
        """Test requests without an API key are rejected."""
        response = client.post("/pricing/quote", json={"location": "Mykonos", "items": []})

        assert response.status_code == 401

    def test_invalid_api_key(self, client: TestClient) -> None:
        """Test requests with an unknown API key are rejected."""
        response = client.get("/orders/AGH-2025-00000001", headers={"X-API-Key": "wrong"})

        assert response.status_code == 401


@pytest.mark.unit
class TestPricingEndpoints:
    """Test suite for pricing endpoints."""

    def test_get_unit_price(self, client: TestClient, catalog: MenuCatalog) -> None:
        """Test reading a unit price at a location."""
        client.app.state.checkout_service.open_session = AsyncMock(
            return_value=OrderSession(catalog, Location.MYKONOS)
        )

        response = client.get(
            "/pricing/menu-items/1", params={"location": "Mykonos"}, headers=HEADERS
        )

        assert response.status_code == 200
        assert response.json() == {
            "menu_item_id": 1,
            "name": "Assorted bread rolls",
            "location": "Mykonos",
            "unit_price_minor_units": 320,
            "unit_price": "€3.20",
        }

    def test_get_unit_price_unknown_item(self, client: TestClient, catalog: MenuCatalog) -> None:
        """Test that an unknown item is a 404."""
        client.app.state.checkout_service.open_session = AsyncMock(
            return_value=OrderSession(catalog, Location.MYKONOS)
        )

        response = client.get(
            "/pricing/menu-items/999", params={"location": "Mykonos"}, headers=HEADERS
        )

        assert response.status_code == 404
        assert response.json()["error"] == "UnknownMenuItemError"

    def test_get_unit_price_missing_price(self, client: TestClient, catalog: MenuCatalog) -> None:
        """Test that a catalog integrity fault is a server error."""
        client.app.state.checkout_service.open_session = AsyncMock(
            return_value=OrderSession(catalog, Location.THESSALONIKI)
        )

        response = client.get(
            "/pricing/menu-items/4", params={"location": "Thessaloniki"}, headers=HEADERS
        )

        assert response.status_code == 500
        assert response.json()["error"] == "MissingPriceError"

    def test_quote(self, client: TestClient, totals: OrderTotals) -> None:
        """Test quoting a cart returns cents and display strings."""
        client.app.state.checkout_service.quote = AsyncMock(return_value=totals)

        response = client.post(
            "/pricing/quote",
            json={"location": "Mykonos", "items": [{"menu_item_id": 1, "quantity": 2}]},
            headers=HEADERS,
        )

        assert response.status_code == 200
        data = response.json()
        assert data["totals"]["subtotal_minor_units"] == 640
        assert data["totals"]["total_minor_units"] == 15640
        assert data["totals"]["location"] == "Mykonos"
        assert data["formatted"]["total"] == "€156.40"

        request = client.app.state.checkout_service.quote.call_args[0][0]
        assert request.items[0].menu_item_id == 1
        assert request.items[0].quantity == 2

    def test_quote_invalid_body(self, client: TestClient) -> None:
        """Test that malformed carts fail request validation."""
        response = client.post(
            "/pricing/quote",
            json={"location": "Mykonos", "items": [{"menu_item_id": "bread"}]},
            headers=HEADERS,
        )

        assert response.status_code == 422

    @pytest.mark.parametrize(
        "error,status_code",
        [
            (UnknownMenuItemError(999), 404),
            (UnsupportedLocationError("Athens"), 422),
            (InvalidQuantityError(1, 0), 422),
            (UnavailableMenuItemError(3), 409),
            (MissingPriceError(4, "Thessaloniki"), 500),
            (CatalogUnavailableError("down"), 503),
        ],
    )
    def test_quote_error_mapping(
        self, client: TestClient, error: Exception, status_code: int
    ) -> None:
        """Test that pricing failures surface with a matching status code."""
        client.app.state.checkout_service.quote = AsyncMock(side_effect=error)

        response = client.post(
            "/pricing/quote", json={"location": "Mykonos", "items": []}, headers=HEADERS
        )

        assert response.status_code == status_code
        assert response.json() == {"error": type(error).__name__, "detail": str(error)}


@pytest.mark.unit
class TestOrderEndpoints:
    """Test suite for order endpoints."""

    @pytest.fixture
    def submission(self, totals: OrderTotals) -> OrderSubmission:
        """Create a sample stored order."""
        return OrderSubmission(
            order_number="AGH-2025-ABCDEF12",
            created_at=datetime(2025, 6, 1, 9, 30, tzinfo=UTC),
            customer_reference="SX-ABC",
            totals=totals,
        )

    def test_checkout(self, client: TestClient, submission: OrderSubmission) -> None:
        """Test submitting an order."""
        client.app.state.checkout_service.checkout = AsyncMock(return_value=submission)

        response = client.post(
            "/orders/checkout",
            json={
                "location": "Mykonos",
                "items": [{"menu_item_id": 1, "quantity": 2}],
                "customer_reference": "SX-ABC",
            },
            headers=HEADERS,
        )

        assert response.status_code == 201
        data = response.json()
        assert data["order_number"] == "AGH-2025-ABCDEF12"
        assert data["customer_reference"] == "SX-ABC"
        assert data["totals"]["total_minor_units"] == 15640
        assert data["formatted"]["delivery_fee"] == "€150.00"

    @pytest.mark.parametrize(
        "error,status_code",
        [
            (EmptyOrderError("empty"), 422),
            (OrderPersistenceError("write failed"), 502),
        ],
    )
    def test_checkout_failures(
        self, client: TestClient, error: Exception, status_code: int
    ) -> None:
        """Test checkout failure status codes."""
        client.app.state.checkout_service.checkout = AsyncMock(side_effect=error)

        response = client.post(
            "/orders/checkout", json={"location": "Mykonos", "items": []}, headers=HEADERS
        )

        assert response.status_code == status_code

    def test_get_order(self, client: TestClient, submission: OrderSubmission) -> None:
        """Test reading a stored order."""
        client.app.state.checkout_service.get_order = AsyncMock(return_value=submission)

        response = client.get("/orders/AGH-2025-ABCDEF12", headers=HEADERS)

        assert response.status_code == 200
        assert response.json()["formatted"]["total"] == "€156.40"

    def test_get_order_not_found(self, client: TestClient) -> None:
        """Test reading a missing order."""
        client.app.state.checkout_service.get_order = AsyncMock(return_value=None)

        response = client.get("/orders/AGH-2025-MISSING0", headers=HEADERS)

        assert response.status_code == 404
