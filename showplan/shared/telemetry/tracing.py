"""Span helpers for application services."""

import inspect
from collections.abc import Callable
from functools import wraps
from typing import Any

from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode

AttributeValue = str | int | float | bool

# Only these kwarg names are copied onto spans (as arg.<name>); plan documents
# and metadata never are.
_SAFE_SPAN_ATTR_KEYS = frozenset({
    "schedule_id", "schedule_uid", "show_id", "show_uid", "expected_version",
    "version", "reason", "limit", "offset", "kind", "status",
})


def _set_safe_span_attrs(span: trace.Span, kwargs: dict[str, Any]) -> None:
    for key, value in kwargs.items():
        if key.lower() in _SAFE_SPAN_ATTR_KEYS:
            span.set_attribute(f"arg.{key}", str(value))


def _mark_failed(span: trace.Span, exc: Exception) -> None:
    span.set_status(Status(StatusCode.ERROR, str(exc)))
    span.record_exception(exc)


def traced(
    operation_name: str | None = None,
    attributes: dict[str, AttributeValue] | None = None,
) -> Callable:
    """Run the decorated function (sync or async) inside a span.

    The span is marked ERROR and the exception recorded if the call raises;
    the exception still propagates.

    Args:
        operation_name: Span name; defaults to module.qualname.
        attributes: Static attributes set on every span.
    """

    def decorator(func: Callable) -> Callable:
        tracer = trace.get_tracer(func.__module__)
        span_name = operation_name or f"{func.__module__}.{func.__qualname__}"

        def start() -> Any:
            return tracer.start_as_current_span(
                span_name, record_exception=False, set_status_on_exception=False
            )

        def prepare(span: trace.Span, kwargs: dict[str, Any]) -> None:
            for key, value in (attributes or {}).items():
                span.set_attribute(key, value)
            _set_safe_span_attrs(span, kwargs)

        @wraps(func)
        async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
            with start() as span:
                prepare(span, kwargs)
                try:
                    result = await func(*args, **kwargs)
                except Exception as e:
                    _mark_failed(span, e)
                    raise
                span.set_status(Status(StatusCode.OK))
                return result

        @wraps(func)
        def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
            with start() as span:
                prepare(span, kwargs)
                try:
                    result = func(*args, **kwargs)
                except Exception as e:
                    _mark_failed(span, e)
                    raise
                span.set_status(Status(StatusCode.OK))
                return result

        if inspect.iscoroutinefunction(func):
            return async_wrapper
        return sync_wrapper

    return decorator


def add_span_attributes(**attributes: AttributeValue) -> None:
    """Set attributes on the current span, if one is recording."""
    span = trace.get_current_span()
    if span.is_recording():
        for key, value in attributes.items():
            span.set_attribute(key, value)


def add_span_event(name: str, attributes: dict[str, AttributeValue] | None = None) -> None:
    span = trace.get_current_span()
    if span.is_recording():
        span.add_event(name, attributes=attributes or {})


def get_trace_id() -> str | None:
    """Current trace id as 32 hex chars, or None outside a sampled span."""
    ctx = trace.get_current_span().get_span_context()
    if ctx.is_valid:
        return format(ctx.trace_id, "032x")
    return None
