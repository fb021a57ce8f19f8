"""Checkout service for pricing carts and submitting orders."""

import logging
import uuid
from datetime import UTC, datetime

from catering_pricing_service.models.order_models import (
    CartRequest,
    CheckoutRequest,
    OrderSubmission,
    OrderTotals,
)
from catering_pricing_service.observability.decorators import traced
from catering_pricing_service.observability.metrics import record_order_submission
from catering_pricing_service.pricing.rules import PricingRules
from catering_pricing_service.pricing.session import OrderSession
from catering_pricing_service.repositories.order_repository import OrderSubmissionRepository
from catering_pricing_service.services.menu_service_client import MenuServiceClient

logger = logging.getLogger(__name__)


class CatalogUnavailableError(Exception):
    """The menu catalog could not be loaded from the menu service."""


class OrderPersistenceError(Exception):
    """The priced order could not be stored."""


class EmptyOrderError(Exception):
    """An order was submitted without any line items."""


def generate_order_number(now: datetime) -> str:
    """Generate an order number such as AGH-2025-3F9A1C2B."""
    return f"AGH-{now.year}-{uuid.uuid4().hex[:8].upper()}"


class CheckoutService:
    """Prices carts against a fresh catalog and hands orders to persistence.

    Every call loads its own catalog and opens its own order session, so no
    cached price outlives the request that produced it. Prices sent by the
    client are never used.
    """

    def __init__(
        self,
        menu_service_client: MenuServiceClient,
        order_repository: OrderSubmissionRepository,
        pricing_rules: PricingRules | None = None,
    ) -> None:
        """Initialize the CheckoutService.

        Args:
            menu_service_client: Client for loading the menu catalog
            order_repository: Repository that stores submitted orders
            pricing_rules: Delivery fee and VAT rules in effect
        """
        self.menu_service_client = menu_service_client
        self.order_repository = order_repository
        self.pricing_rules = pricing_rules if pricing_rules is not None else PricingRules()

    async def open_session(self, location: str) -> OrderSession:
        """Load the catalog and start an order session at a location.

        Raises:
            CatalogUnavailableError: If the menu catalog cannot be fetched
            UnsupportedLocationError: If location is not supported
        """
        catalog = await self.menu_service_client.get_menu_catalog()
        if catalog is None:
            raise CatalogUnavailableError("Menu catalog is currently unavailable")

        return OrderSession(catalog, location, self.pricing_rules)

    @traced("quote_order", service_name="pricing-svc")
    async def quote(self, request: CartRequest) -> OrderTotals:
        """Compute authoritative totals for a cart without submitting it.

        Raises:
            CatalogUnavailableError: If the menu catalog cannot be fetched
            PricingError: If the cart cannot be priced
        """
        session = await self.open_session(request.location)
        # Client prices are never read; only ids, quantities and instructions
        session.load_cart(request.items)
        return session.totals(request.mode)

    @traced("checkout_order", service_name="pricing-svc")
    async def checkout(self, request: CheckoutRequest) -> OrderSubmission:
        """Price a cart and persist it as an order.

        Raises:
            CatalogUnavailableError: If the menu catalog cannot be fetched
            PricingError: If the cart cannot be priced
            EmptyOrderError: If the cart has no items after dropping empty lines
            OrderPersistenceError: If the order could not be stored
        """
        # Step 1: Price the cart against a fresh catalog
        totals = await self.quote(request)
        if not totals.lines:
            raise EmptyOrderError("Cannot submit an order without items")

        # Step 2: Build the submission around the server-side totals
        now = datetime.now(UTC)
        submission = OrderSubmission(
            order_number=generate_order_number(now),
            created_at=now,
            customer_reference=request.customer_reference,
            totals=totals,
        )

        # Step 3: Persist and record the outcome
        saved = self.order_repository.save_submission(submission)
        record_order_submission(totals.location.value, saved)
        if not saved:
            raise OrderPersistenceError(f"Failed to store order {submission.order_number}")

        logger.info(
            f"Order {submission.order_number} submitted from {totals.location.value} "
            f"with total {totals.total_minor_units} cents"
        )
        return submission

    async def get_order(self, order_number: str) -> OrderSubmission | None:
        """Get a submitted order by number.

        Returns:
            OrderSubmission if found, None otherwise
        """
        return self.order_repository.get_submission(order_number)
