"""Severity model shared by every sink of the fan-out pipeline.

Purpose
-------
Offer the eight ordered severities understood by the console, syslog, and
file sinks together with their canonical display names.

Contents
--------
* :class:`LogLevel` enum with ordering and conversion helpers.
* ``_DISPLAY_NAMES`` presentation table.
* ``_ALIASES`` abbreviations accepted by :meth:`LogLevel.from_name`.

System Role
-----------
Every threshold comparison in the application layer goes through
:meth:`LogLevel.passes`; adapters only read the presentation metadata.
"""

from __future__ import annotations

from enum import Enum


class LogLevel(Enum):
    """Severities ordered from most severe (``FATAL``) to most verbose (``DEBUG``)."""

    FATAL = 0
    ALERT = 1
    CRITICAL = 2
    ERROR = 3
    WARNING = 4
    NOTICE = 5
    INFO = 6
    DEBUG = 7

    @property
    def display_name(self) -> str:
        """Return the capitalised name rendered inside ``[...]`` brackets."""

        return _DISPLAY_NAMES[self]

    @property
    def severity(self) -> str:
        """Return the lowercase severity name."""

        return self.name.lower()

    def passes(self, threshold: "LogLevel") -> bool:
        """Return ``True`` when this level is at least as severe as ``threshold``.

        Examples
        --------
        >>> LogLevel.ERROR.passes(LogLevel.WARNING)
        True
        >>> LogLevel.DEBUG.passes(LogLevel.INFO)
        False
        """

        return self.value <= threshold.value

    @classmethod
    def from_name(cls, name: str) -> "LogLevel":
        """Resolve a case-insensitive level name or common abbreviation.

        Examples
        --------
        >>> LogLevel.from_name("warn") is LogLevel.WARNING
        True
        >>> LogLevel.from_name(" Notice ") is LogLevel.NOTICE
        True
        """

        normalized = name.strip().upper()
        normalized = _ALIASES.get(normalized, normalized)
        try:
            return cls[normalized]
        except KeyError as exc:
            raise ValueError(f"Unknown log level: {name!r}") from exc

    @classmethod
    def from_numeric(cls, level: int) -> "LogLevel":
        """Return the :class:`LogLevel` whose value equals ``level``."""
        try:
            return cls(level)
        except ValueError as exc:
            raise ValueError(f"Unsupported log level numeric: {level}") from exc


_DISPLAY_NAMES = {level: level.name.capitalize() for level in LogLevel}

_ALIASES = {
    "EMERG": "FATAL",
    "EMERGENCY": "FATAL",
    "CRIT": "CRITICAL",
    "ERR": "ERROR",
    "WARN": "WARNING",
}


__all__ = ["LogLevel"]
