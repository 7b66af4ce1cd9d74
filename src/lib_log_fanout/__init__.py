"""Public package surface for the three-sink fan-out logger.

``import lib_log_fanout as log`` gives access to the per-level entry points
(``log.info(...)``, ``log.errorf("%s failed", name)``) and the configuration
setters (``log.init_file(...)``, ``log.set_console_level(...)``) documented in
:mod:`lib_log_fanout.runtime`.
"""

from __future__ import annotations

from .application.use_cases import raise_for_errors
from .domain import DispatchError, LogLevel, SinkError, SourceLocation, SyslogUnavailableError
from .runtime import (
    FATAL_EXIT_CODE,
    RuntimeSnapshot,
    alert,
    alertf,
    capture_std_logging,
    critical,
    criticalf,
    debug,
    debugf,
    error,
    errorf,
    fatal,
    fatalf,
    info,
    infof,
    init,
    init_file,
    init_syslog,
    inspect_runtime,
    is_initialised,
    log,
    logf,
    notice,
    noticef,
    restore_std_logging,
    set_console_level,
    set_file_level,
    set_max_messages_per_second,
    set_syslog_level,
    shutdown,
    summary_info,
    warning,
    warningf,
)

__all__ = [
    "DispatchError",
    "FATAL_EXIT_CODE",
    "LogLevel",
    "RuntimeSnapshot",
    "SinkError",
    "SourceLocation",
    "SyslogUnavailableError",
    "alert",
    "alertf",
    "capture_std_logging",
    "critical",
    "criticalf",
    "debug",
    "debugf",
    "error",
    "errorf",
    "fatal",
    "fatalf",
    "info",
    "infof",
    "init",
    "init_file",
    "init_syslog",
    "inspect_runtime",
    "is_initialised",
    "log",
    "logf",
    "notice",
    "noticef",
    "raise_for_errors",
    "restore_std_logging",
    "set_console_level",
    "set_file_level",
    "set_max_messages_per_second",
    "set_syslog_level",
    "shutdown",
    "summary_info",
    "warning",
    "warningf",
]
