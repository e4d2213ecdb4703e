"""Tracing decorator for service coroutines."""

import asyncio
import functools
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from opentelemetry import trace

TRACER_NAME = "restaurant_order_service"

F = TypeVar("F", bound=Callable[..., Awaitable[Any]])


def traced(span_name: str | None = None) -> Callable[[F], F]:
    """Wrap a service coroutine in an OpenTelemetry span.

    The span records the qualified function name and whether the call
    succeeded. Service errors such as NotFoundError are recorded on the span
    and re-raised unchanged.

    Args:
        span_name: Name for the span (defaults to the function name)

    Returns:
        Decorator for async functions

    Raises:
        TypeError: If applied to a function that is not a coroutine function

    Example:
        @traced("create_order")
        async def create_order(self, ...) -> Order:
            ...
    """

    def decorator(func: F) -> F:
        if not asyncio.iscoroutinefunction(func):
            raise TypeError(f"@traced only supports async functions, got {func.__qualname__}")

        name = span_name or func.__name__
        tracer = trace.get_tracer(TRACER_NAME)

        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            with tracer.start_as_current_span(name) as span:
                span.set_attribute("code.function", func.__qualname__)
                try:
                    result = await func(*args, **kwargs)
                except Exception as e:
                    span.set_attribute("success", False)
                    span.set_attribute("error.type", type(e).__name__)
                    span.record_exception(e)
                    raise
                span.set_attribute("success", True)
                return result

        return wrapper  # type: ignore

    return decorator
