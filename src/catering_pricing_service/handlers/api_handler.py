"""FastAPI application exposing order pricing and checkout."""

import logging
from datetime import datetime

from fastapi import Depends, FastAPI, Header, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from catering_pricing_service.auth.api_dependencies import require_api_key
from catering_pricing_service.auth.api_key_validator import APIKeyValidator
from catering_pricing_service.models.order_models import (
    CartRequest,
    CheckoutRequest,
    FormattedTotals,
    OrderSubmission,
    OrderTotals,
)
from catering_pricing_service.pricing.errors import (
    InvalidQuantityError,
    MissingPriceError,
    PricingError,
    UnavailableMenuItemError,
    UnknownMenuItemError,
    UnsupportedLocationError,
)
from catering_pricing_service.pricing.formatting import format_minor_units
from catering_pricing_service.services.checkout_service import (
    CatalogUnavailableError,
    CheckoutService,
    EmptyOrderError,
    OrderPersistenceError,
)

logger = logging.getLogger(__name__)

ERROR_STATUS_CODES: dict[type[Exception], int] = {
    UnknownMenuItemError: 404,
    UnsupportedLocationError: 422,
    InvalidQuantityError: 422,
    EmptyOrderError: 422,
    UnavailableMenuItemError: 409,
    MissingPriceError: 500,
    OrderPersistenceError: 502,
    CatalogUnavailableError: 503,
}


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str


class UnitPriceResponse(BaseModel):
    """Authoritative unit price of one menu item at a location."""

    menu_item_id: int
    name: str
    location: str
    unit_price_minor_units: int
    unit_price: str


class QuoteResponse(BaseModel):
    """Totals for a cart, in cents and formatted for display."""

    totals: OrderTotals
    formatted: FormattedTotals


class OrderResponse(BaseModel):
    """A submitted order with its authoritative totals."""

    order_number: str
    created_at: datetime
    customer_reference: str | None = None
    totals: OrderTotals
    formatted: FormattedTotals


def to_order_response(submission: OrderSubmission) -> OrderResponse:
    return OrderResponse(
        order_number=submission.order_number,
        created_at=submission.created_at,
        customer_reference=submission.customer_reference,
        totals=submission.totals,
        formatted=submission.totals.formatted(),
    )


def create_app(checkout_service: CheckoutService, api_keys: list[str]) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        checkout_service: Service for pricing carts and submitting orders
        api_keys: List of valid API keys for authentication

    Returns:
        Configured FastAPI application
    """
    app = FastAPI(
        title="Flight Catering Pricing API",
        description="Authoritative menu pricing and order totals for flight catering orders",
        version="1.0.0",
    )

    # Store dependencies in app state
    app.state.checkout_service = checkout_service
    app.state.api_key_validator = APIKeyValidator(api_keys=api_keys)

    async def handle_service_error(request: Request, exc: Exception) -> JSONResponse:
        status_code = next(
            (code for error_type, code in ERROR_STATUS_CODES.items() if isinstance(exc, error_type)),
            500,
        )
        if status_code >= 500:
            logger.error(f"{type(exc).__name__} on {request.url.path}: {exc}")
        else:
            logger.warning(f"{type(exc).__name__} on {request.url.path}: {exc}")

        return JSONResponse(
            status_code=status_code,
            content={"error": type(exc).__name__, "detail": str(exc)},
        )

    # Service errors become JSON bodies with a mapped status code
    for error_type in (PricingError, CatalogUnavailableError, EmptyOrderError, OrderPersistenceError):
        app.add_exception_handler(error_type, handle_service_error)

    def validate_api_key(x_api_key: str | None = Header(None)) -> str:
        """Dependency to validate API key."""
        return require_api_key(x_api_key=x_api_key, validator=app.state.api_key_validator)

    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health_check() -> HealthResponse:
        """Health check endpoint."""
        return HealthResponse(status="healthy")

    @app.get(
        "/pricing/menu-items/{menu_item_id}",
        response_model=UnitPriceResponse,
        tags=["Pricing"],
    )
    async def get_unit_price(
        menu_item_id: int,
        location: str,
        _api_key: str = Depends(validate_api_key),
    ) -> UnitPriceResponse:
        """Get the unit price of a menu item at a kitchen location.

        Args:
            menu_item_id: Catalog id of the menu item
            location: Kitchen location name

        Returns:
            Unit price in cents and formatted
        """
        session = await app.state.checkout_service.open_session(location)
        price = session.resolver.resolve(menu_item_id, session.location)
        menu_item = session.catalog.get(menu_item_id)

        return UnitPriceResponse(
            menu_item_id=menu_item_id,
            name=menu_item.name,
            location=session.location.value,
            unit_price_minor_units=price,
            unit_price=format_minor_units(price),
        )

    @app.post("/pricing/quote", response_model=QuoteResponse, tags=["Pricing"])
    async def quote_cart(
        cart: CartRequest,
        _api_key: str = Depends(validate_api_key),
    ) -> QuoteResponse:
        """Compute totals for a cart without submitting it.

        Returns:
            Totals in cents together with their display strings
        """
        totals: OrderTotals = await app.state.checkout_service.quote(cart)
        return QuoteResponse(totals=totals, formatted=totals.formatted())

    @app.post(
        "/orders/checkout",
        response_model=OrderResponse,
        status_code=201,
        tags=["Orders"],
    )
    async def checkout_order(
        order: CheckoutRequest,
        _api_key: str = Depends(validate_api_key),
    ) -> OrderResponse:
        """Price a cart and submit it as an order.

        Returns:
            The stored order with its authoritative totals
        """
        logger.info(f"Checkout requested for {len(order.items)} cart lines at {order.location}")
        submission: OrderSubmission = await app.state.checkout_service.checkout(order)
        return to_order_response(submission)

    @app.get("/orders/{order_number}", response_model=OrderResponse, tags=["Orders"])
    async def get_order(
        order_number: str,
        _api_key: str = Depends(validate_api_key),
    ) -> OrderResponse:
        """Get a submitted order.

        Raises:
            HTTPException: If the order does not exist
        """
        submission = await app.state.checkout_service.get_order(order_number)
        if submission is None:
            raise HTTPException(status_code=404, detail=f"Order {order_number} not found")
        return to_order_response(submission)

    return app
