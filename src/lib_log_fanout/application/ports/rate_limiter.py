"""Port for rate limiting filters protecting downstream sinks."""

from __future__ import annotations

from datetime import datetime
from typing import Protocol, runtime_checkable


@runtime_checkable
class RateLimiterPort(Protocol):
    """Decide whether a message sampled at ``now`` may reach the sinks."""

    def allow(self, now: datetime) -> bool:
        """Return ``True`` when the message is permitted to proceed."""


__all__ = ["RateLimiterPort"]
