"""Console port describing terminal emission contracts.

Purpose
-------
Define the abstraction for adapters that write rendered lines to the
process's standard streams, letting the dispatcher depend on a narrow
protocol.

Contents
--------
* :class:`ConsolePort` – runtime-checkable protocol with a single ``emit``
  method.

System Role
-----------
The adapter decides which stream a level goes to; the dispatcher only decides
whether the console threshold lets the line through.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from lib_log_fanout.domain.levels import LogLevel


@runtime_checkable
class ConsolePort(Protocol):
    """Write an already collapsed line to an interactive console."""

    def emit(self, level: LogLevel, line: str) -> None:
        """Write ``line`` verbatim; ``level`` selects stream and style."""


__all__ = ["ConsolePort"]
