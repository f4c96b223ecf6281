"""Tracing utilities and decorators.

Spans go through the OpenTelemetry API; they are no-ops until the deployment
installs and configures an SDK.
"""

import functools
import inspect
from collections.abc import Callable, Generator
from contextlib import contextmanager
from typing import Any, TypeVar

from opentelemetry import trace
from opentelemetry.trace import Span, StatusCode, Tracer

F = TypeVar("F", bound=Callable[..., Any])


def get_tracer(name: str = "admin_assistant") -> Tracer:
    """
    Get an OpenTelemetry tracer.

    Args:
        name: Tracer name (typically module name).
    """
    return trace.get_tracer(name)


def traced(
    name: str | None = None,
    attributes: dict[str, Any] | None = None,
    record_exception: bool = True,
) -> Callable[[F], F]:
    """
    Decorator to trace a function.

    Creates a span that wraps the function execution.
    Works with both sync and async functions.

    Args:
        name: Span name (defaults to function name).
        attributes: Static attributes to add to the span.
        record_exception: Whether to record exceptions.

    Example:
        @traced(name="catalog.list_products", attributes={"component": "tools"})
        async def list_products(catalog, count):
            ...
    """
    def decorator(func: F) -> F:
        span_name = name or func.__name__
        tracer = get_tracer(func.__module__)

        @functools.wraps(func)
        async def async_wrapper(*args, **kwargs):
            with tracer.start_as_current_span(span_name, record_exception=False) as span:
                if attributes:
                    span.set_attributes(attributes)
                try:
                    return await func(*args, **kwargs)
                except Exception as e:
                    if record_exception:
                        span.record_exception(e)
                        span.set_status(StatusCode.ERROR)
                    raise

        @functools.wraps(func)
        def sync_wrapper(*args, **kwargs):
            with tracer.start_as_current_span(span_name, record_exception=False) as span:
                if attributes:
                    span.set_attributes(attributes)
                try:
                    return func(*args, **kwargs)
                except Exception as e:
                    if record_exception:
                        span.record_exception(e)
                        span.set_status(StatusCode.ERROR)
                    raise

        if inspect.iscoroutinefunction(func):
            return async_wrapper  # type: ignore
        return sync_wrapper  # type: ignore

    return decorator


@contextmanager
def pipeline_span(
    stage_name: str,
    session_id: str | None = None,
    **attributes: Any,
) -> Generator[Span, None, None]:
    """
    Context manager for tracing one step of a conversation turn.

    Args:
        stage_name: Name of the step (e.g. "interpreter.text_turn").
        session_id: Optional conversation session id.
        **attributes: Additional span attributes.

    Example:
        with pipeline_span("image_analysis", session_id=sid):
            result = await analyze_product_image(provider, data_uri)
    """
    tracer = get_tracer("admin_assistant.pipeline")

    span_attrs: dict[str, Any] = {"pipeline.stage": stage_name}
    if session_id:
        span_attrs["session.id"] = session_id
    span_attrs.update(attributes)

    with tracer.start_as_current_span(
        f"admin_assistant.{stage_name}", record_exception=False
    ) as span:
        span.set_attributes(span_attrs)
        try:
            yield span
        except Exception as e:
            span.record_exception(e)
            span.set_status(StatusCode.ERROR)
            raise


def add_span_attribute(key: str, value: Any) -> None:
    """Add an attribute to the current span."""
    trace.get_current_span().set_attribute(key, value)


def get_current_trace_id() -> str | None:
    """
    Get the current trace ID.

    Returns:
        Trace ID as hex string, or None if not in a trace.
    """
    ctx = trace.get_current_span().get_span_context()
    if ctx.is_valid:
        return format(ctx.trace_id, "032x")
    return None


def get_current_span_id() -> str | None:
    """
    Get the current span ID.

    Returns:
        Span ID as hex string, or None if not in a span.
    """
    ctx = trace.get_current_span().get_span_context()
    if ctx.is_valid:
        return format(ctx.span_id, "016x")
    return None
