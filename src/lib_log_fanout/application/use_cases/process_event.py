"""Use case orchestrating the dispatch pipeline for a single log call.

Purpose
-------
Tie together threshold pre-checks, rate limiting, repeat collapsing, and the
console/syslog/file fan-out.

Contents
--------
* :class:`SinkThresholds` – the three independently mutable thresholds.
* :class:`DispatchPipeline` – the serialised pipeline callable.
* :func:`create_process_log_event` factory used by the runtime composition.
* :func:`raise_for_errors` – turn a failed result into :class:`DispatchError`.

System Role
-----------
Application-layer orchestrator. All mutable pipeline state (thresholds,
limiter counters, collapse state, sink handles) is reached through one
:class:`DispatchPipeline` instance and mutated only while its lock is held.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from threading import RLock
from typing import Any

from lib_log_fanout.application.ports import (
    ClockPort,
    ConsolePort,
    FileSinkPort,
    RateLimiterPort,
    SyslogPort,
)
from lib_log_fanout.domain import (
    DispatchError,
    LogEvent,
    LogLevel,
    RepeatCollapser,
    SinkError,
    SourceLocation,
)

ProcessResult = dict[str, Any]
DiagnosticHook = Callable[[str, dict[str, Any]], None] | None


@dataclass(slots=True)
class SinkThresholds:
    """Least verbose level each sink still accepts."""

    console: LogLevel = LogLevel.DEBUG
    syslog: LogLevel = LogLevel.DEBUG
    file: LogLevel = LogLevel.DEBUG

    def admits_any(self, level: LogLevel) -> bool:
        """Return ``True`` when at least one sink would accept ``level``."""

        return level.passes(self.console) or level.passes(self.syslog) or level.passes(self.file)


class DispatchPipeline:
    """Fan one message out to console, syslog, and file.

    Examples
    --------
    >>> from datetime import datetime
    >>> class Clock:
    ...     def now(self):
    ...         return datetime(2025, 1, 2, 3, 4, 5)
    >>> class Limiter:
    ...     def allow(self, now):
    ...         return True
    >>> class Console:
    ...     def __init__(self):
    ...         self.lines = []
    ...     def emit(self, level, line):
    ...         self.lines.append(line)
    >>> console = Console()
    >>> pipeline = create_process_log_event(console=console, clock=Clock(), rate_limiter=Limiter())
    >>> pipeline.dispatch(LogLevel.INFO, 'ready', source=SourceLocation('app.py', 3))['ok']
    True
    >>> console.lines
    ['2025-01-02 03:04:05 [Info] app.py:3 - ready\\n']
    """

    def __init__(
        self,
        *,
        console: ConsolePort,
        clock: ClockPort,
        rate_limiter: RateLimiterPort,
        collapser: RepeatCollapser,
        thresholds: SinkThresholds,
        syslog: SyslogPort | None = None,
        file: FileSinkPort | None = None,
        diagnostic: DiagnosticHook = None,
    ) -> None:
        self.console = console
        self.clock = clock
        self.rate_limiter = rate_limiter
        self.collapser = collapser
        self.thresholds = thresholds
        self.syslog = syslog
        self.file = file
        self._diagnostic = diagnostic
        self.lock = RLock()

    def __call__(self, level: LogLevel, message: str, *, source: SourceLocation) -> ProcessResult:
        return self.dispatch(level, message, source=source)

    def dispatch(self, level: LogLevel, message: str, *, source: SourceLocation) -> ProcessResult:
        """Run ``message`` through the pipeline and report the outcome.

        Returns
        -------
        dict
            ``{"ok": True, "sinks": (...)}`` on success,
            ``{"ok": False, "reason": "filtered" | "rate_limited"}`` when the
            message was dropped, or ``{"ok": False, "reason": "adapter_error",
            "sinks": (...), "errors": {...}}`` when a sink failed.
        """

        with self.lock:
            if not self.thresholds.admits_any(level):
                self._emit("filtered", {"level": level.name})
                return {"ok": False, "reason": "filtered"}
            now = self.clock.now()
            if not self.rate_limiter.allow(now):
                self._emit("rate_limited", {"level": level.name})
                return {"ok": False, "reason": "rate_limited"}

            event = LogEvent(level=level, message=message, source=source, timestamp=now)
            text = event.render()
            line = self.collapser.collapse(text, now)

            written: list[str] = []
            errors: dict[str, SinkError] = {}
            for name, write in self._sink_writers(level, line, text):
                try:
                    write()
                except Exception as exc:
                    errors[name] = SinkError(name, exc)
                    self._emit("adapter_error", {"sink": name, "level": level.name, "error": repr(exc)})
                else:
                    written.append(name)

        if errors:
            return {"ok": False, "reason": "adapter_error", "sinks": tuple(written), "errors": errors}
        self._emit("emitted", {"level": level.name, "sinks": tuple(written)})
        return {"ok": True, "sinks": tuple(written)}

    def _sink_writers(self, level: LogLevel, line: str, text: str) -> list[tuple[str, Callable[[], None]]]:
        writers: list[tuple[str, Callable[[], None]]] = []
        if level.passes(self.thresholds.console):
            writers.append(("console", lambda: self.console.emit(level, line)))
        syslog = self.syslog
        if syslog is not None and level.passes(self.thresholds.syslog):
            writers.append(("syslog", lambda: syslog.emit(level, text.rstrip("\n"))))
        file = self.file
        if file is not None and file.active and level.passes(self.thresholds.file):
            writers.append(("file", lambda: self._write_file(file, line)))
        return writers

    def _write_file(self, file: FileSinkPort, line: str) -> None:
        try:
            file.write(line)
        except OSError:
            self._emit("file_sink_disabled", {})
            raise

    def _emit(self, name: str, payload: dict[str, Any]) -> None:
        if self._diagnostic is None:
            return
        try:
            self._diagnostic(name, payload)
        except Exception:  # pragma: no cover - diagnostics must never break logging
            pass


def create_process_log_event(
    *,
    console: ConsolePort,
    clock: ClockPort,
    rate_limiter: RateLimiterPort,
    thresholds: SinkThresholds | None = None,
    collapser: RepeatCollapser | None = None,
    syslog: SyslogPort | None = None,
    file: FileSinkPort | None = None,
    diagnostic: DiagnosticHook = None,
) -> DispatchPipeline:
    """Build the pipeline capturing the current dependency wiring.

    Parameters
    ----------
    console:
        Adapter implementing :class:`ConsolePort`; always present.
    clock:
        Provider of the timestamp sampled once per dispatch.
    rate_limiter:
        Adapter deciding whether the message may reach the sinks.
    thresholds:
        Shared :class:`SinkThresholds`; defaults to ``DEBUG`` everywhere.
    collapser:
        Shared :class:`RepeatCollapser`; a fresh one when omitted.
    syslog, file:
        Optional sinks; ``None`` keeps them inactive.
    diagnostic:
        Optional callback invoked with pipeline milestones.
    """

    return DispatchPipeline(
        console=console,
        clock=clock,
        rate_limiter=rate_limiter,
        collapser=collapser or RepeatCollapser(),
        thresholds=thresholds or SinkThresholds(),
        syslog=syslog,
        file=file,
        diagnostic=diagnostic,
    )


def raise_for_errors(result: ProcessResult) -> ProcessResult:
    """Raise :class:`DispatchError` when ``result`` carries sink failures.

    Examples
    --------
    >>> raise_for_errors({"ok": True, "sinks": ("console",)})["ok"]
    True
    """

    errors = result.get("errors")
    if errors:
        raise DispatchError(errors)
    return result


__all__ = [
    "DiagnosticHook",
    "DispatchPipeline",
    "ProcessResult",
    "SinkThresholds",
    "create_process_log_event",
    "raise_for_errors",
]
