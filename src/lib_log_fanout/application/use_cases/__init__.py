"""Use cases composed by the runtime."""

from __future__ import annotations

from .process_event import (
    DispatchPipeline,
    ProcessResult,
    SinkThresholds,
    create_process_log_event,
    raise_for_errors,
)

__all__ = [
    "DispatchPipeline",
    "ProcessResult",
    "SinkThresholds",
    "create_process_log_event",
    "raise_for_errors",
]
