"""Exceptions surfaced by the dispatch pipeline and its configuration."""

from __future__ import annotations

from collections.abc import Mapping


class SinkError(Exception):
    """A single sink failed to write a line.

    Attributes
    ----------
    sink:
        ``"console"``, ``"syslog"`` or ``"file"``.
    original:
        The exception raised by the underlying adapter.
    """

    def __init__(self, sink: str, original: BaseException) -> None:
        super().__init__(f"{sink} sink failed: {original}")
        self.sink = sink
        self.original = original


class DispatchError(Exception):
    """One or more sinks failed while dispatching a single message."""

    def __init__(self, errors: Mapping[str, SinkError]) -> None:
        names = ", ".join(sorted(errors))
        super().__init__(f"log dispatch failed for: {names}")
        self.errors = dict(errors)


class SyslogUnavailableError(OSError):
    """The syslog connection could not be established."""


__all__ = ["DispatchError", "SinkError", "SyslogUnavailableError"]
