"""Structured JSON logging for service processes.

This package provides a leveled logger that writes one JSON object per
record to a byte sink, with:
- a minimum level gate applied before any other work
- service name and call-site source location on every record
- optional trace correlation through an injected extractor
- key/value attributes from alternating call arguments

Example:
    >>> import sys
    >>> from svclog import Level, new
    >>> from svclog.tracing import otel_trace_id
    >>>
    >>> logger = new(sys.stdout.buffer, Level.INFO, "billing", otel_trace_id)
    >>> logger.info(ctx, "Invoice created", "invoice_id", 123, "amount", 49.5)
    >>> logger.debug(ctx, "Skipped")  # below INFO, writes nothing
"""

from svclog.config import LoggerConfig
from svclog.exceptions import ConfigurationError, SvclogError
from svclog.levels import Level, should_log
from svclog.logger import StructuredLogger, new
from svclog.manager import LoggerManager
from svclog.record import BAD_KEY, RESERVED_FIELDS

__version__ = "1.0.0"

__all__ = [
    "BAD_KEY",
    "ConfigurationError",
    "Level",
    "LoggerConfig",
    "LoggerManager",
    "RESERVED_FIELDS",
    "StructuredLogger",
    "SvclogError",
    "new",
    "should_log",
]
