"""Domain entities and value objects used by the fan-out pipeline."""

from __future__ import annotations

from .errors import DispatchError, SinkError, SyslogUnavailableError
from .events import LogEvent, SourceLocation, format_timestamp
from .levels import LogLevel
from .repeat import REPEAT_MARKER, RepeatCollapser

__all__ = [
    "DispatchError",
    "LogEvent",
    "LogLevel",
    "REPEAT_MARKER",
    "RepeatCollapser",
    "SinkError",
    "SourceLocation",
    "SyslogUnavailableError",
    "format_timestamp",
]
