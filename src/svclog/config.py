"""Logger configuration module.

This module provides the configuration used by LoggerManager to build a
StructuredLogger, loadable from SVCLOG_ environment variables.
"""

import os
from dataclasses import dataclass

from svclog.exceptions import ConfigurationError
from svclog.levels import Level

STREAM_OUTPUTS = ("stdout", "stderr")


@dataclass
class LoggerConfig:
    """Configuration for a structured logger.

    Example:
        >>> # Create from environment variables
        >>> config = LoggerConfig.from_env()
        >>>
        >>> # Create programmatically
        >>> config = LoggerConfig(level="DEBUG", service_name="billing")
        >>> config.validate()
    """

    level: str = "INFO"
    service_name: str = "service"
    output: str = "stdout"  # "stdout", "stderr" or a file path
    trace_correlation: bool = True

    @classmethod
    def from_env(cls) -> "LoggerConfig":
        """Create configuration from environment variables.

        Environment Variables:
            SVCLOG_LEVEL: Minimum level - DEBUG, INFO, WARN, ERROR (default: INFO)
            SVCLOG_SERVICE_NAME: Service name on every record (default: service)
            SVCLOG_OUTPUT: stdout, stderr or a file path (default: stdout)
            SVCLOG_TRACE_CORRELATION: Add OpenTelemetry trace ids (default: true)

        Returns:
            LoggerConfig populated from the environment.
        """
        return cls(
            level=os.getenv("SVCLOG_LEVEL", "INFO").upper(),
            service_name=os.getenv("SVCLOG_SERVICE_NAME", "service"),
            output=os.getenv("SVCLOG_OUTPUT", "stdout"),
            trace_correlation=os.getenv("SVCLOG_TRACE_CORRELATION", "true").lower()
            == "true",
        )

    @property
    def is_stream_output(self) -> bool:
        """Check if output goes to a standard stream rather than a file."""
        return self.output.lower() in STREAM_OUTPUTS

    def validate(self) -> None:
        """Validate configuration values.

        Raises:
            ConfigurationError: If configuration is invalid.
        """
        Level.parse(self.level)

        if not self.service_name:
            raise ConfigurationError("Service name must not be empty")
        if not self.output:
            raise ConfigurationError("Output must be stdout, stderr or a file path")
