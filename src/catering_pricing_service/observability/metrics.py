"""Custom metrics for the pricing service."""

from opentelemetry import metrics

meter = metrics.get_meter("pricing-svc")

quote_counter = meter.create_counter(
    name="order_quotes_total",
    description="Total number of order totals computed by location and VAT mode",
    unit="1",
)

pricing_failure_counter = meter.create_counter(
    name="order_pricing_failures_total",
    description="Total number of order total computations that failed, by error type",
    unit="1",
)

order_total_histogram = meter.create_histogram(
    name="order_total_minor_units",
    description="Distribution of computed order totals in euro cents",
    unit="cent",
)

price_cache_lookups = meter.create_counter(
    name="price_cache_lookups_total",
    description="Unit price lookups served from or missing the session price cache",
    unit="1",
)

order_submission_counter = meter.create_counter(
    name="order_submissions_total",
    description="Total number of order submissions by outcome",
    unit="1",
)


def record_quote(location: str, mode: str, total_minor_units: int) -> None:
    """Record a computed order total.

    Args:
        location: Kitchen location the order was priced at
        mode: VAT mode used for the total
        total_minor_units: Final total in cents
    """
    attributes = {"location": location, "mode": mode}
    quote_counter.add(1, attributes)
    order_total_histogram.record(total_minor_units, attributes)


def record_pricing_failure(error_type: str) -> None:
    """Record a failed order total computation.

    Args:
        error_type: Name of the pricing error raised
    """
    pricing_failure_counter.add(1, {"error_type": error_type})


def record_price_cache_lookup(hit: bool) -> None:
    """Record a session price cache lookup."""
    price_cache_lookups.add(1, {"result": "hit" if hit else "miss"})


def record_order_submission(location: str, success: bool) -> None:
    """Record the outcome of persisting an order submission."""
    order_submission_counter.add(
        1, {"location": location, "outcome": "success" if success else "failure"}
    )
