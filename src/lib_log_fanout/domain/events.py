"""Domain event describing one leveled log call.

Purpose
-------
Provide an immutable representation of a log call together with the textual
rendering shared by the console, syslog, and file sinks.

Contents
--------
* :class:`SourceLocation` – ``file:line`` of the call site.
* :class:`LogEvent` dataclass with :meth:`LogEvent.render`.
* :func:`format_timestamp` – the ``YYYY-MM-DD HH:MM:SS `` line prefix.

System Role
-----------
The rendered text is the key used by the repeat collapser, so it carries the
level and the call site but never the timestamp.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import datetime

from .levels import LogLevel

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S "


@dataclass(slots=True, frozen=True)
class SourceLocation:
    """Call site reported next to every message."""

    file: str
    line: int

    @classmethod
    def from_path(cls, path: str, line: int) -> "SourceLocation":
        """Keep only the base name of ``path``.

        Examples
        --------
        >>> str(SourceLocation.from_path("/srv/app/worker.py", 12))
        'worker.py:12'
        """

        return cls(os.path.basename(path) or path, line)

    def __str__(self) -> str:
        return f"{self.file}:{self.line}"


@dataclass(slots=True, frozen=True)
class LogEvent:
    """Immutable log call travelling through the dispatch pipeline.

    Attributes
    ----------
    level:
        :class:`LogLevel` of the call.
    message:
        Message text after argument formatting.
    source:
        :class:`SourceLocation` of the caller.
    timestamp:
        Wall-clock time sampled once for the whole dispatch.
    """

    level: LogLevel
    message: str
    source: SourceLocation
    timestamp: datetime

    def render(self) -> str:
        """Return ``[Level] file:line - message`` terminated by a newline.

        Examples
        --------
        >>> event = LogEvent(LogLevel.ERROR, 'disk full', SourceLocation('app.py', 7), datetime(2025, 1, 2, 3, 4, 5))
        >>> event.render()
        '[Error] app.py:7 - disk full\\n'
        """

        return f"[{self.level.display_name}] {self.source} - {self.message}\n"


def format_timestamp(ts: datetime) -> str:
    """Render ``ts`` as the line prefix written to console and file sinks.

    Examples
    --------
    >>> format_timestamp(datetime(2025, 1, 2, 3, 4, 5))
    '2025-01-02 03:04:05 '
    """

    return ts.strftime(TIMESTAMP_FORMAT)


__all__ = ["LogEvent", "SourceLocation", "TIMESTAMP_FORMAT", "format_timestamp"]
