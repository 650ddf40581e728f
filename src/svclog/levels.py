"""Severity levels and the level gate."""

from enum import IntEnum
from typing import Union

from svclog.exceptions import ConfigurationError

_ALIASES = {"WARNING": "WARN"}


class Level(IntEnum):
    """Ordered log severity.

    The integer values leave room between levels so that intermediate
    severities can be added without renumbering.
    """

    DEBUG = -4
    INFO = 0
    WARN = 4
    ERROR = 8

    @property
    def label(self) -> str:
        """Canonical uppercase name used in output."""
        return self.name

    def __str__(self) -> str:
        return self.name

    @classmethod
    def parse(cls, value: Union["Level", str]) -> "Level":
        """Parse a level from a Level or a case-insensitive name.

        Args:
            value: Level instance or name such as "info" or "WARNING".

        Returns:
            The matching Level.

        Raises:
            ConfigurationError: If the value is not a known level.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            name = value.strip().upper()
            name = _ALIASES.get(name, name)
            if name in cls.__members__:
                return cls[name]
        valid = ", ".join(cls.__members__)
        raise ConfigurationError(f"Invalid log level: {value!r}. Must be one of {valid}")


def should_log(record_level: Level, minimum: Level) -> bool:
    """Return True if a record at record_level passes the minimum."""
    return record_level >= minimum
