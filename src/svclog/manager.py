"""Logger manager for wiring a structured logger to its sink.

This module provides a LoggerManager class that opens the configured
output, builds the StructuredLogger and closes owned sinks on shutdown.
The manager is an ordinary object; applications create one at startup and
pass its logger to the components that need it.
"""

import logging
import sys
from typing import IO, Optional

from svclog.config import LoggerConfig
from svclog.exceptions import ConfigurationError
from svclog.logger import StructuredLogger
from svclog.tracing import TraceExtractor, otel_trace_id

logger = logging.getLogger(__name__)


class LoggerManager:
    """Manager for a configured StructuredLogger.

    Example:
        >>> from svclog.config import LoggerConfig
        >>> config = LoggerConfig(level="DEBUG", service_name="billing")
        >>> manager = LoggerManager(config)
        >>> manager.configure()
        >>>
        >>> manager.logger.info(ctx, "Invoice created", "invoice_id", 123)
        >>> manager.shutdown()
    """

    def __init__(
        self,
        config: LoggerConfig,
        trace_extractor: Optional[TraceExtractor] = None,
    ) -> None:
        """Initialize the logger manager.

        Args:
            config: Logger configuration.
            trace_extractor: Extractor to use instead of the OpenTelemetry
                one. Applies even when trace_correlation is disabled.
        """
        self.config = config
        self._trace_extractor = trace_extractor
        self._sink: Optional[IO[bytes]] = None
        self._owns_sink = False
        self._logger: Optional[StructuredLogger] = None
        self._configured = False

    def configure(self) -> None:
        """Open the sink and build the logger.

        Safe to call more than once; later calls do nothing.

        Raises:
            ConfigurationError: If the configuration is invalid or the output
                file cannot be opened.
        """
        if self._configured:
            return

        self.config.validate()
        self._sink = self._open_sink()

        extractor = self._trace_extractor
        if extractor is None and self.config.trace_correlation:
            extractor = otel_trace_id
        self._logger = StructuredLogger(
            self._sink,
            self.config.level,
            self.config.service_name,
            extractor,
        )

        self._configured = True
        logger.debug(
            f"Structured logger configured for {self.config.service_name} "
            f"at {self.config.level} to {self.config.output}"
        )

    def shutdown(self) -> None:
        """Release the sink.

        Closes the output file if this manager opened one. Standard streams
        are flushed but left open.
        """
        if not self._configured:
            return

        if self._sink is not None:
            if self._owns_sink:
                self._sink.close()
            else:
                self._sink.flush()

        self._sink = None
        self._owns_sink = False
        self._logger = None
        self._configured = False

    @property
    def logger(self) -> StructuredLogger:
        """The configured logger.

        Raises:
            RuntimeError: If configure() has not been called.
        """
        if self._logger is None:
            raise RuntimeError("LoggerManager is not configured")
        return self._logger

    @property
    def is_configured(self) -> bool:
        """Check if the logger manager has been configured."""
        return self._configured

    def _open_sink(self) -> IO[bytes]:
        output = self.config.output
        if output.lower() == "stdout":
            return sys.stdout.buffer
        if output.lower() == "stderr":
            return sys.stderr.buffer

        try:
            sink = open(output, "ab")
        except OSError as e:
            raise ConfigurationError(f"Cannot open log output {output}: {e}", cause=e)
        self._owns_sink = True
        return sink
