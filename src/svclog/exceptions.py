"""Exceptions for svclog.

Only configuration problems are raised, and only at construction time.
Logging calls themselves never raise.

Example:
    >>> from svclog.exceptions import ConfigurationError
    >>> raise ConfigurationError("sink must not be None")
"""

from typing import Optional


class SvclogError(Exception):
    """Base exception for all svclog errors."""

    def __init__(self, message: str, cause: Optional[Exception] = None):
        """Initialize svclog error.

        Args:
            message: Error description.
            cause: Original exception that caused this error.
        """
        super().__init__(message)
        self.cause = cause


class ConfigurationError(SvclogError, ValueError):
    """Invalid logger configuration.

    Raised when a logger is constructed with an unknown level, a missing
    sink, a non-string service name or a non-callable trace extractor.

    Example:
        >>> raise ConfigurationError("Invalid log level: 'LOUD'")
    """

    pass
