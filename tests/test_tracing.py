"""Unit tests for trace-id extractors.

Tests OpenTelemetry context extraction and mapping-based extraction, both
directly and through a logger.
"""

from opentelemetry import context as otel_context
from opentelemetry import trace
from opentelemetry.trace import NonRecordingSpan, SpanContext, TraceFlags

from svclog import Level, new
from svclog.tracing import context_value, otel_trace_id


class TestOtelTraceId:
    """Tests for otel_trace_id."""

    def test_span_in_context(self, span_ctx):
        """Test the trace id of the span in the context is returned."""
        ctx, expected = span_ctx

        trace_id = otel_trace_id(ctx)

        assert trace_id == expected
        assert len(trace_id) == 32

    def test_fixed_span_context(self):
        """Test formatting as 32 lowercase hex digits."""
        span = NonRecordingSpan(
            SpanContext(
                trace_id=0x12345678901234567890123456789012,
                span_id=0x1234567890123456,
                is_remote=True,
                trace_flags=TraceFlags(TraceFlags.SAMPLED),
            )
        )
        ctx = trace.set_span_in_context(span)

        assert otel_trace_id(ctx) == "12345678901234567890123456789012"

    def test_none_context(self):
        """Test None never falls back to the ambient context."""
        assert otel_trace_id(None) == ""

    def test_ambient_span_ignored(self, tracer):
        """Test a current span is ignored when the context is not passed."""
        with tracer.start_as_current_span("ambient"):
            assert otel_trace_id(None) == ""

    def test_empty_context(self):
        assert otel_trace_id(otel_context.Context()) == ""

    def test_invalid_span(self):
        ctx = trace.set_span_in_context(trace.INVALID_SPAN)
        assert otel_trace_id(ctx) == ""

    def test_non_context_value(self):
        assert otel_trace_id({"trace_id": "abc"}) == ""

    def test_with_logger(self, buf, records, span_ctx):
        """Test records logged with a span context carry its trace id."""
        ctx, expected = span_ctx
        logger = new(buf, Level.INFO, "svc", otel_trace_id)

        logger.info(ctx, "with span")
        logger.info(otel_context.Context(), "without span")

        with_span, without_span = records()
        assert with_span["trace_id"] == expected
        assert "trace_id" not in without_span


class TestContextValue:
    """Tests for context_value."""

    def test_reads_key(self):
        assert context_value("x-trace-id")({"x-trace-id": "abc123"}) == "abc123"

    def test_missing_key(self):
        assert context_value("x-trace-id")({}) == ""

    def test_none_value(self):
        assert context_value("t")({"t": None}) == ""

    def test_stringifies(self):
        assert context_value("t")({"t": 42}) == "42"

    def test_non_mapping(self):
        assert context_value("t")(None) == ""
        assert context_value("t")("t") == ""
