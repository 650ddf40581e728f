"""Pytest fixtures for svclog tests.

This module provides in-memory sinks, logger factories and OpenTelemetry
spans for testing the logger without touching real output streams.
"""

import io
import json
from typing import Any, Callable, Dict, Generator, List

import pytest
from opentelemetry import trace
from opentelemetry.sdk.trace import TracerProvider

from svclog import Level, StructuredLogger, new


def parse_records(data: bytes) -> List[Dict[str, Any]]:
    """Parse newline-delimited JSON records written to a sink."""
    return [json.loads(line) for line in data.decode("utf-8").splitlines()]


# ============================================================================
# Sinks and loggers
# ============================================================================


@pytest.fixture
def buf() -> io.BytesIO:
    """In-memory byte sink."""
    return io.BytesIO()


@pytest.fixture
def make_logger(buf) -> Callable[..., StructuredLogger]:
    """Factory for loggers writing to the buf fixture.

    Returns:
        Callable accepting level, service and trace_extractor overrides.
    """

    def factory(
        level: Level = Level.DEBUG,
        service: str = "test-service",
        trace_extractor=None,
    ) -> StructuredLogger:
        return new(buf, level, service, trace_extractor)

    return factory


@pytest.fixture
def records(buf) -> Callable[[], List[Dict[str, Any]]]:
    """Callable returning the records written to buf so far."""
    return lambda: parse_records(buf.getvalue())


# ============================================================================
# OpenTelemetry
# ============================================================================


@pytest.fixture
def tracer() -> Generator[trace.Tracer, None, None]:
    """Tracer from a private SDK provider, not installed globally."""
    provider = TracerProvider()
    yield provider.get_tracer("svclog-tests")
    provider.shutdown()


@pytest.fixture
def span_ctx(tracer):
    """OpenTelemetry context holding a started span.

    Returns:
        Tuple of (context, expected 32-hex trace id).
    """
    span = tracer.start_span("request")
    ctx = trace.set_span_in_context(span)
    yield ctx, format(span.get_span_context().trace_id, "032x")
    span.end()
