"""Severity levels understood by the durable logger.

Purpose
-------
Offer a domain-specific representation of the three severities a log record
may carry, with helpers to translate to and from the stdlib :mod:`logging`
constants.

Contents
--------
* :class:`LogLevel` enum with conversion helpers and presentation metadata.
* ``_ICON_TABLE`` constant mapping levels to console glyphs.

System Role
-----------
Used by the record builder to stamp severities, by level gates to filter them,
and by console adapters to present human-friendly icons.
"""

from __future__ import annotations

import logging
from enum import Enum


_ALIASES = {"WARNING": "WARN", "ERR": "ERROR"}


class LogLevel(Enum):
    """Enumerated severities attached to every :class:`LogRecord`."""

    INFO = 20
    WARN = 30
    ERROR = 40

    @property
    def severity(self) -> str:
        """Return the lowercase severity name for structured payloads."""

        return self.name.lower()

    @property
    def icon(self) -> str:
        """Return the unicode icon visualizing the level on colored consoles."""

        return _ICON_TABLE[self]

    def to_python_level(self) -> int:
        """Return the :mod:`logging` constant matching this level.

        Examples
        --------
        >>> LogLevel.WARN.to_python_level() == logging.WARNING
        True
        """

        return self.value

    @classmethod
    def from_name(cls, name: str) -> "LogLevel":
        """Resolve a case-insensitive level name (``warning`` maps to ``WARN``).

        Examples
        --------
        >>> LogLevel.from_name(" warning ") is LogLevel.WARN
        True
        """

        normalized = name.strip().upper()
        normalized = _ALIASES.get(normalized, normalized)
        try:
            return cls[normalized]
        except KeyError as exc:
            raise ValueError(f"Unknown log level: {name!r}") from exc

    @classmethod
    def from_python_level(cls, level: int) -> "LogLevel":
        """Translate a stdlib logging level integer into :class:`LogLevel`."""
        return cls.from_numeric(level)

    @classmethod
    def from_numeric(cls, level: int) -> "LogLevel":
        """Return the :class:`LogLevel` corresponding to ``level``."""
        try:
            return cls(level)
        except ValueError as exc:
            raise ValueError(f"Unsupported log level numeric: {level}") from exc


# Console glyphs displayed by the Rich sink per log level.
_ICON_TABLE = {
    LogLevel.INFO: "ℹ",
    LogLevel.WARN: "⚠",
    LogLevel.ERROR: "✖",
}


__all__ = ["LogLevel"]
