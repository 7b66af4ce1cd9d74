"""Port for the optional append-only file sink."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class FileSinkPort(Protocol):
    """Append lines to a file registered at runtime."""

    @property
    def active(self) -> bool:
        """``True`` while a usable path is registered."""

    def write(self, line: str) -> None:
        """Append ``line``; failures disable the sink and propagate."""


__all__ = ["FileSinkPort"]
