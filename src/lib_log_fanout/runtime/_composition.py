"""Runtime composition helpers wiring domain, application, and adapters.

Purpose
-------
Translate :class:`RuntimeSettings` into the live :class:`LoggingRuntime`
singleton. Keyword overrides let tests swap any collaborator.

Contents
--------
* :class:`SystemClock` – local wall clock.
* :func:`terminate_process` – abnormal exit used after ``FATAL`` messages.
* :func:`build_runtime` – the composition root.

System Role
-----------
Anchors the clean-architecture boundary: adapters are chosen here, while
``lib_log_fanout.runtime`` exposes only the façade functions.
"""

from __future__ import annotations

import os
import sys
from datetime import datetime
from typing import Any, Callable

from lib_log_fanout.adapters import (
    AppendFileAdapter,
    ForeignStreamAdapter,
    PerSecondRateLimiter,
    PrefixLevelClassifier,
    RichConsoleAdapter,
    SyslogAdapter,
)
from lib_log_fanout.adapters.syslog import Sender as SyslogSender
from lib_log_fanout.application.ports import ClockPort, ConsolePort, LevelClassifier
from lib_log_fanout.application.use_cases import SinkThresholds, create_process_log_event
from lib_log_fanout.domain import LogLevel

from ._caller import find_caller
from ._settings import RuntimeSettings
from ._state import LoggingRuntime

#: Exit status used when a ``FATAL`` message terminates the process.
FATAL_EXIT_CODE = 1


class SystemClock(ClockPort):
    """Concrete clock port returning the local wall-clock time."""

    def now(self) -> datetime:
        return datetime.now()


def terminate_process() -> None:
    """Flush the standard streams and exit without running cleanup hooks."""

    for stream in (sys.stdout, sys.stderr):
        try:
            stream.flush()
        except (OSError, ValueError):  # pragma: no cover - stream already closed
            pass
    os._exit(FATAL_EXIT_CODE)


def create_console(settings: RuntimeSettings) -> ConsolePort:
    appearance = settings.console
    return RichConsoleAdapter(
        force_color=appearance.force_color,
        no_color=appearance.no_color,
        styles=dict(appearance.styles) if appearance.styles else None,
    )


def create_syslog(
    settings: RuntimeSettings,
    sender: SyslogSender | None = None,
) -> SyslogAdapter | None:
    """Connect to syslog when a tag is configured.

    Raises
    ------
    SyslogUnavailableError
        When the connection cannot be established.
    """

    if not settings.syslog_tag:
        return None
    return SyslogAdapter(settings.syslog_tag, sender=sender, address=settings.syslog_address)


def build_runtime(
    settings: RuntimeSettings,
    *,
    console: ConsolePort | None = None,
    clock: ClockPort | None = None,
    syslog_sender: SyslogSender | None = None,
    classifier: LevelClassifier | None = None,
    terminate: Callable[[], None] | None = None,
) -> LoggingRuntime:
    """Assemble the logging runtime from resolved settings.

    Keyword overrides replace the default adapters; tests use them to inject
    recording consoles, fixed clocks, and a non-exiting ``terminate``.
    """

    limiter = PerSecondRateLimiter(max_per_second=settings.max_messages_per_second)
    file_sink = AppendFileAdapter(settings.file_path)
    thresholds = SinkThresholds(
        console=settings.console_level,
        syslog=settings.syslog_level,
        file=settings.file_level,
    )
    pipeline = create_process_log_event(
        console=console or create_console(settings),
        clock=clock or SystemClock(),
        rate_limiter=limiter,
        thresholds=thresholds,
        syslog=create_syslog(settings, syslog_sender),
        file=file_sink,
        diagnostic=settings.diagnostic_hook,
    )

    def _dispatch_foreign(level: LogLevel, message: str) -> dict[str, Any]:
        return pipeline.dispatch(level, message, source=find_caller())

    terminate_callable = terminate or terminate_process
    stream = ForeignStreamAdapter(
        _dispatch_foreign,
        classifier=classifier or PrefixLevelClassifier(),
        on_fatal=terminate_callable,
    )
    runtime = LoggingRuntime(
        pipeline=pipeline,
        console=pipeline.console,
        rate_limiter=limiter,
        file=file_sink,
        stream=stream,
        terminate=terminate_callable,
    )
    return runtime


__all__ = ["FATAL_EXIT_CODE", "SystemClock", "build_runtime", "terminate_process"]
