"""OpenTelemetry tracing decorators."""

import functools
import inspect
from collections.abc import Callable
from typing import Any, TypeVar

from opentelemetry import trace

# Type variable for generic function signatures
F = TypeVar("F", bound=Callable[..., Any])


def traced(span_name: str | None = None, service_name: str = "pricing-svc") -> Callable[[F], F]:
    """Decorator that runs a function inside its own span.

    Exceptions are recorded on the span and re-raised unchanged. Works for
    both plain and async functions.

    Args:
        span_name: Name for the span (defaults to the function name)
        service_name: Tracer name and service.name span attribute

    Returns:
        Decorated function with tracing

    Example:
        @traced("checkout_order")
        async def checkout(self, request: CheckoutRequest) -> OrderSubmission:
            ...
    """

    def decorator(func: F) -> F:
        # Use provided span name or default to function name
        name = span_name or func.__name__

        tracer = trace.get_tracer(service_name)

        @functools.wraps(func)
        async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
            with tracer.start_as_current_span(name) as span:
                span.set_attribute("service.name", service_name)
                span.set_attribute("function.name", func.__name__)

                try:
                    result = await func(*args, **kwargs)
                    span.set_attribute("success", True)
                    return result
                except Exception as e:
                    span.set_attribute("success", False)
                    span.set_attribute("error.type", type(e).__name__)
                    span.set_attribute("error.message", str(e))
                    span.record_exception(e)
                    raise

        @functools.wraps(func)
        def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
            with tracer.start_as_current_span(name) as span:
                span.set_attribute("service.name", service_name)
                span.set_attribute("function.name", func.__name__)

                try:
                    result = func(*args, **kwargs)
                    span.set_attribute("success", True)
                    return result
                except Exception as e:
                    span.set_attribute("success", False)
                    span.set_attribute("error.type", type(e).__name__)
                    span.set_attribute("error.message", str(e))
                    span.record_exception(e)
                    raise

        # Return appropriate wrapper based on function type
        if inspect.iscoroutinefunction(func):
            return async_wrapper  # type: ignore
        return sync_wrapper  # type: ignore

    return decorator
