"""Trace-id extractors.

An extractor is any callable taking the context passed to a logging call
and returning a trace id, or "" when there is none. The logger calls it
only for records that pass the level gate.

Example:
    >>> from opentelemetry import trace
    >>> from svclog import Level, new
    >>> from svclog.tracing import otel_trace_id
    >>>
    >>> logger = new(sink, Level.INFO, "api", otel_trace_id)
    >>> with tracer.start_as_current_span("handle") as span:
    ...     ctx = trace.set_span_in_context(span)
    ...     logger.info(ctx, "handled")
"""

from collections.abc import Mapping
from typing import Any, Callable

from opentelemetry import trace as otel_trace
from opentelemetry.context import Context

TraceExtractor = Callable[[Any], str]


def otel_trace_id(ctx: Any) -> str:
    """Extract the active span's trace id from an OpenTelemetry context.

    Only the explicitly passed context is inspected. A None context yields
    "" rather than falling back to the current ambient context.

    Args:
        ctx: OpenTelemetry Context, typically from trace.set_span_in_context().

    Returns:
        Trace id as 32 lowercase hex digits, or "" if there is no valid span.
    """
    if not isinstance(ctx, Context):
        return ""

    span_context = otel_trace.get_current_span(ctx).get_span_context()
    if not span_context.is_valid:
        return ""

    return format(span_context.trace_id, "032x")


def context_value(key: str) -> TraceExtractor:
    """Build an extractor that reads a trace id from a mapping context.

    Args:
        key: Mapping key holding the trace id, e.g. "X-Request-ID".

    Returns:
        Extractor returning the stringified value, or "" when ctx is not a
        mapping or the key is missing or empty.

    Example:
        >>> extract = context_value("x-trace-id")
        >>> extract({"x-trace-id": "abc123"})
        'abc123'
    """

    def extract(ctx: Any) -> str:
        if not isinstance(ctx, Mapping):
            return ""
        value = ctx.get(key)
        if value is None:
            return ""
        return str(value)

    return extract
