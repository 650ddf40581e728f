"""Leveled structured logger.

This module provides StructuredLogger, which writes one JSON object per
call to a byte sink. Each logger is configured once at construction and
passed explicitly to the components that log; there is no global logger.

Example:
    >>> import io
    >>> from svclog import Level, new
    >>>
    >>> buf = io.BytesIO()
    >>> logger = new(buf, Level.INFO, "api")
    >>> logger.info(None, "ready", "port", 8080)
    >>> buf.getvalue()
    b'{"port":8080,"time":"...","level":"INFO","msg":"ready","file":"...","service":"api"}\\n'
"""

import logging
import threading
from typing import Any, Dict, Optional, Tuple, Union

from svclog.exceptions import ConfigurationError
from svclog.levels import Level, should_log
from svclog.record import (
    build_record,
    encode_record,
    merge_attributes,
    pair_attributes,
)
from svclog.source import caller_location
from svclog.tracing import TraceExtractor

# Side channel for failures that must not reach the caller of a log method.
logger = logging.getLogger(__name__)

# Frames between _log and the application code: _log -> leveled method -> caller.
_CALLER_DEPTH = 2


class StructuredLogger:
    """JSON logger with a level gate, service name and trace correlation.

    Every record carries time, level, msg, file and service, plus trace_id
    when the extractor returns a non-empty value, plus the caller's
    attributes. Attributes never override those fixed fields.

    Logging methods return None and never raise. Encoding problems fall
    back to string representations; extractor and sink failures are
    reported through the "svclog.logger" stdlib logger and the record is
    dropped or emitted without trace_id.

    Instances are safe to share between threads. Only the sink write is
    serialized, under a lock shared with any loggers created by bind().
    Loggers built separately on the same stream each hold their own lock.
    """

    def __init__(
        self,
        sink: Any,
        level: Union[Level, str],
        service: str,
        trace_extractor: Optional[TraceExtractor] = None,
    ) -> None:
        """Initialize the logger.

        Args:
            sink: Object with a write(bytes) method. flush() is called after
                each record when present.
            level: Minimum level to emit.
            service: Service name added to every record.
            trace_extractor: Optional callable mapping the call context to a
                trace id.

        Raises:
            ConfigurationError: If any argument is invalid.
        """
        if sink is None:
            raise ConfigurationError("sink must not be None")
        if not callable(getattr(sink, "write", None)):
            raise ConfigurationError(
                f"sink must have a write() method, got {type(sink).__name__}"
            )
        if not isinstance(service, str):
            raise ConfigurationError(
                f"service must be a string, got {type(service).__name__}"
            )
        if trace_extractor is not None and not callable(trace_extractor):
            raise ConfigurationError("trace_extractor must be callable")

        self._sink = sink
        self._level = Level.parse(level)
        self._service = service
        self._trace_extractor = trace_extractor
        self._bound: Dict[str, Any] = {}
        self._lock = threading.Lock()

    @property
    def level(self) -> Level:
        """Minimum level emitted by this logger."""
        return self._level

    @property
    def service(self) -> str:
        """Service name added to every record."""
        return self._service

    @property
    def sink(self) -> Any:
        """Byte sink records are written to."""
        return self._sink

    @property
    def trace_extractor(self) -> Optional[TraceExtractor]:
        """Configured trace-id extractor, if any."""
        return self._trace_extractor

    def enabled(self, level: Level) -> bool:
        """Check whether a record at level would be emitted."""
        return should_log(level, self._level)

    # ------------------------------------------------------------------
    # Leveled methods
    # ------------------------------------------------------------------

    def debug(self, ctx: Any, msg: str, *args: Any) -> None:
        """Log at DEBUG level with alternating key/value attributes."""
        self._log(Level.DEBUG, ctx, msg, args)

    def info(self, ctx: Any, msg: str, *args: Any) -> None:
        """Log at INFO level with alternating key/value attributes."""
        self._log(Level.INFO, ctx, msg, args)

    def warn(self, ctx: Any, msg: str, *args: Any) -> None:
        """Log at WARN level with alternating key/value attributes."""
        self._log(Level.WARN, ctx, msg, args)

    def warning(self, ctx: Any, msg: str, *args: Any) -> None:
        """Alias for warn."""
        self._log(Level.WARN, ctx, msg, args)

    def error(self, ctx: Any, msg: str, *args: Any) -> None:
        """Log at ERROR level with alternating key/value attributes."""
        self._log(Level.ERROR, ctx, msg, args)

    def log(self, level: Union[Level, str], ctx: Any, msg: str, *args: Any) -> None:
        """Log at an explicit level.

        Args:
            level: Record severity.
            ctx: Call context passed to the trace extractor.
            msg: Message.
            *args: Alternating attribute keys and values.
        """
        try:
            level = Level.parse(level)
        except ConfigurationError as e:
            logger.warning(f"Dropping log record: {e}")
            return
        self._log(level, ctx, msg, args)

    def bind(self, *args: Any) -> "StructuredLogger":
        """Create a child logger that adds attributes to every record.

        The child shares the sink, write lock and configuration. Attributes
        given at the call site override bound ones with the same key.

        Example:
            >>> request_logger = logger.bind("request_id", "r-17")
            >>> request_logger.info(ctx, "accepted")
        """
        child = StructuredLogger.__new__(StructuredLogger)
        child._sink = self._sink
        child._level = self._level
        child._service = self._service
        child._trace_extractor = self._trace_extractor
        child._bound = merge_attributes(self._bound, pair_attributes(args))
        child._lock = self._lock
        return child

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _log(self, level: Level, ctx: Any, msg: str, args: Tuple[Any, ...]) -> None:
        if not should_log(level, self._level):
            return

        source = caller_location(_CALLER_DEPTH)
        trace_id = self._extract_trace_id(ctx)

        attrs = pair_attributes(args)
        if self._bound:
            attrs = merge_attributes(self._bound, attrs)

        entry = build_record(level, msg, source, self._service, trace_id, attrs)
        self._write(encode_record(entry))

    def _extract_trace_id(self, ctx: Any) -> str:
        if self._trace_extractor is None:
            return ""
        try:
            trace_id = self._trace_extractor(ctx)
            return str(trace_id) if trace_id else ""
        except Exception as e:
            logger.warning(f"Trace extractor failed, omitting trace_id: {e}")
            return ""

    def _write(self, data: bytes) -> None:
        try:
            with self._lock:
                self._sink.write(data)
                flush = getattr(self._sink, "flush", None)
                if flush is not None:
                    flush()
        except Exception as e:
            logger.warning(f"Failed to write log record to sink: {e}")


def new(
    sink: Any,
    level: Union[Level, str],
    service: str,
    trace_extractor: Optional[TraceExtractor] = None,
) -> StructuredLogger:
    """Create a StructuredLogger.

    Args:
        sink: Object with a write(bytes) method.
        level: Minimum level to emit.
        service: Service name added to every record.
        trace_extractor: Optional callable mapping the call context to a
            trace id.

    Returns:
        Configured logger.

    Raises:
        ConfigurationError: If any argument is invalid.
    """
    return StructuredLogger(sink, level, service, trace_extractor)
