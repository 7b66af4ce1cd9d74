"""Port for the optional syslog sink."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from lib_log_fanout.domain.levels import LogLevel


@runtime_checkable
class SyslogPort(Protocol):
    """Forward undecorated messages to the system logger."""

    def emit(self, level: LogLevel, text: str) -> None:
        """Send ``text`` at the native priority matching ``level``."""

    def close(self) -> None:
        """Release the underlying connection."""


__all__ = ["SyslogPort"]
