"""Main application entry point for the catering pricing service.

This module provides the FastAPI application factory and the environment
configuration for running the service locally or in production.
"""

import logging
import os
from decimal import Decimal, InvalidOperation
from typing import Any

import boto3
from fastapi import FastAPI

from catering_pricing_service.handlers.api_handler import create_app
from catering_pricing_service.models.menu_models import Location
from catering_pricing_service.models.order_models import TotalsMode
from catering_pricing_service.observability import configure_logging, setup_observability
from catering_pricing_service.pricing.rules import (
    DEFAULT_DELIVERY_FEE_MINOR_UNITS,
    DEFAULT_VAT_RATE,
    PricingRules,
)
from catering_pricing_service.repositories.order_repository import OrderSubmissionRepository
from catering_pricing_service.services.checkout_service import CheckoutService
from catering_pricing_service.services.menu_service_client import MenuServiceClient

logger = logging.getLogger(__name__)


def get_dynamodb_resource() -> Any:
    """Create DynamoDB resource with appropriate configuration.

    Returns:
        Boto3 DynamoDB resource configured for environment
    """
    endpoint_url = os.getenv("DYNAMODB_ENDPOINT")
    region = os.getenv("AWS_REGION", "eu-central-1")

    if endpoint_url:
        logger.info(f"Using local DynamoDB at {endpoint_url}")
        return boto3.resource(
            "dynamodb",
            endpoint_url=endpoint_url,
            region_name=region,
            aws_access_key_id=os.getenv("AWS_ACCESS_KEY_ID", "dummy"),
            aws_secret_access_key=os.getenv("AWS_SECRET_ACCESS_KEY", "dummy"),
        )

    logger.info(f"Using AWS DynamoDB in region {region}")
    return boto3.resource("dynamodb", region_name=region)


def _int_from_env(name: str, default: int | None = None) -> int | None:
    value = os.getenv(name, "").strip()
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{name} must be an integer number of cents, got {value!r}") from None


def load_pricing_rules() -> PricingRules:
    """Build the pricing rules from environment variables.

    DELIVERY_FEE_MINOR_UNITS sets the flat delivery fee in cents;
    DELIVERY_FEE_THESSALONIKI / DELIVERY_FEE_MYKONOS override it per kitchen.
    VAT_RATE is a fraction such as 0.13. DEFAULT_TOTALS_MODE is
    "delivery_fee_only" or "vat_inclusive".

    Raises:
        ValueError: If a configured value cannot be parsed
    """
    delivery_fee = _int_from_env("DELIVERY_FEE_MINOR_UNITS", DEFAULT_DELIVERY_FEE_MINOR_UNITS)

    overrides: dict[Location, int] = {}
    for location in Location:
        override = _int_from_env(f"DELIVERY_FEE_{location.name}")
        if override is not None:
            overrides[location] = override

    vat_rate_str = os.getenv("VAT_RATE", "").strip()
    try:
        vat_rate = Decimal(vat_rate_str) if vat_rate_str else DEFAULT_VAT_RATE
    except InvalidOperation:
        raise ValueError(f"VAT_RATE must be a decimal fraction, got {vat_rate_str!r}") from None

    default_mode = TotalsMode(os.getenv("DEFAULT_TOTALS_MODE", TotalsMode.DELIVERY_FEE_ONLY.value))

    rules = PricingRules(
        delivery_fee_minor_units=delivery_fee,
        delivery_fee_overrides=overrides,
        vat_rate=vat_rate,
        default_mode=default_mode,
    )
    logger.info(
        f"Pricing rules - delivery fee: {rules.delivery_fee_minor_units}, "
        f"overrides: {len(overrides)}, VAT: {rules.vat_rate}, mode: {rules.default_mode.value}"
    )
    return rules


def create_application() -> FastAPI:
    """Create and configure the FastAPI application with all dependencies.

    Returns:
        Configured FastAPI application instance

    Raises:
        ValueError: If required configuration is missing or invalid
    """
    configure_logging(os.getenv("LOG_LEVEL", "INFO"))

    logger.info("Initializing catering pricing service...")

    # Get configuration from environment
    menu_service_url = os.getenv("MENU_SERVICE_BASE_URL")
    menu_service_api_key = os.getenv("MENU_SERVICE_API_KEY")

    if not menu_service_url or not menu_service_api_key:
        raise ValueError(
            "MENU_SERVICE_BASE_URL and MENU_SERVICE_API_KEY must be set in environment"
        )

    # Initialize services
    menu_service_client = MenuServiceClient(base_url=menu_service_url, api_key=menu_service_api_key)
    logger.info(f"Menu service client configured - URL: {menu_service_url}")

    orders_table = os.getenv("DYNAMODB_ORDERS_TABLE", "catering-orders")
    order_repository = OrderSubmissionRepository(
        dynamodb_resource=get_dynamodb_resource(), table_name=orders_table
    )
    logger.info(f"Order repository configured - table: {orders_table}")

    checkout_service = CheckoutService(
        menu_service_client=menu_service_client,
        order_repository=order_repository,
        pricing_rules=load_pricing_rules(),
    )

    # Get API keys from environment (comma-separated)
    api_keys_str = os.getenv("ADMIN_API_KEY", "")
    api_keys = [key.strip() for key in api_keys_str.split(",") if key.strip()]

    if not api_keys:
        logger.warning("No ADMIN_API_KEY configured - using development key")
        api_keys = ["dummy-key-for-development"]

    # Create FastAPI app
    app = create_app(checkout_service=checkout_service, api_keys=api_keys)
    setup_observability(app)

    logger.info("Catering pricing service initialized successfully")
    return app


# Only build the real application outside of tests
if os.getenv("ENVIRONMENT") != "test":  # noqa: SIM108
    app = create_application()
else:
    app = FastAPI()


if __name__ == "__main__":
    import uvicorn

    port = int(os.getenv("PORT", "8001"))
    host = os.getenv("HOST", "0.0.0.0")

    logger.info(f"Starting development server on {host}:{port}")

    uvicorn.run(
        "main:app",
        host=host,
        port=port,
        reload=True,
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )
