"""Runtime state container and access helpers."""

from __future__ import annotations

from dataclasses import dataclass
from threading import RLock
from typing import Callable

from lib_log_fanout.adapters import AppendFileAdapter, ForeignStreamAdapter, PerSecondRateLimiter
from lib_log_fanout.application.ports import ConsolePort
from lib_log_fanout.application.use_cases import DispatchPipeline


@dataclass(slots=True)
class LoggingRuntime:
    """Aggregate of live collaborators assembled by the composition root.

    The pipeline owns the mutable thresholds, limiter counters, collapse state,
    and sink handles; the remaining attributes are shortcuts to the same
    objects for the configuration setters.
    """

    pipeline: DispatchPipeline
    console: ConsolePort
    rate_limiter: PerSecondRateLimiter
    file: AppendFileAdapter
    stream: ForeignStreamAdapter
    terminate: Callable[[], None]


_STATE: LoggingRuntime | None = None
_STATE_LOCK = RLock()


def set_runtime(runtime: LoggingRuntime) -> None:
    """Install ``runtime`` as the active singleton."""

    with _STATE_LOCK:
        global _STATE
        _STATE = runtime


def clear_runtime() -> None:
    """Remove the active runtime if present."""

    with _STATE_LOCK:
        global _STATE
        _STATE = None


def get_or_create_runtime(factory: Callable[[], LoggingRuntime]) -> LoggingRuntime:
    """Return the active runtime, installing ``factory()`` on first use."""

    with _STATE_LOCK:
        global _STATE
        if _STATE is None:
            _STATE = factory()
        return _STATE


def is_initialised() -> bool:
    """Return ``True`` once a runtime has been installed."""

    with _STATE_LOCK:
        return _STATE is not None


__all__ = [
    "LoggingRuntime",
    "clear_runtime",
    "get_or_create_runtime",
    "is_initialised",
    "set_runtime",
]
