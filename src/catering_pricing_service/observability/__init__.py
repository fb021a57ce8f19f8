"""Logging, tracing and metrics for the pricing service."""

from catering_pricing_service.observability.config import configure_logging, setup_observability
from catering_pricing_service.observability.decorators import traced

__all__ = ["setup_observability", "configure_logging", "traced"]
