"""Fixed-window rate limiter admitting at most N messages per wall-clock second.

The window is the integer second of the timestamp the pipeline sampled for the
message, so the boundary check and the reset always agree on the second.
"""

from __future__ import annotations

from datetime import datetime

from lib_log_fanout.application.ports.rate_limiter import RateLimiterPort


class PerSecondRateLimiter(RateLimiterPort):
    """Limit messages per wall-clock second; ``max_per_second <= 0`` disables it.

    Examples
    --------
    >>> limiter = PerSecondRateLimiter(max_per_second=2)
    >>> now = datetime(2025, 1, 2, 3, 4, 5)
    >>> [limiter.allow(now) for _ in range(3)]
    [True, True, False]
    >>> limiter.allow(datetime(2025, 1, 2, 3, 4, 6))
    True
    """

    def __init__(self, *, max_per_second: int = 0) -> None:
        self.max_per_second = max_per_second
        self._second: int | None = None
        self._count = 0

    @property
    def enabled(self) -> bool:
        return self.max_per_second > 0

    def allow(self, now: datetime) -> bool:
        """Return ``True`` when the message sampled at ``now`` is within quota."""
        if not self.enabled:
            return True
        second = int(now.timestamp())
        if second != self._second:
            self._second = second
            self._count = 1
            return True
        if self._count < self.max_per_second:
            self._count += 1
            return True
        return False


__all__ = ["PerSecondRateLimiter"]
