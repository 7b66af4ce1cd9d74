"""Runtime façade exposing configuration setters and per-level entry points.

Purpose
-------
Host applications configure sinks and log through this module instead of
importing the inner layers directly. A default runtime (console at ``DEBUG``,
no syslog, no file, no rate limit) is composed lazily on first use, so
``lib_log_fanout.info("ready")`` works without any setup.

Capturing the stdlib :mod:`logging` root logger is explicit. Importing the
package never installs a handler; call :func:`capture_std_logging`, pass
``init(capture_std_logging=True)``, or set ``LOG_CAPTURE_STDLIB=1`` before the
default runtime is composed.

Contents
--------
* ``init`` / ``shutdown`` – compose or tear down the runtime in one call.
* Setters – ``set_console_level``, ``set_syslog_level``, ``init_syslog``,
  ``init_file``, ``set_file_level``, ``set_max_messages_per_second``,
  ``capture_std_logging``, ``restore_std_logging``.
* Entry points – ``log``/``logf`` plus ``fatal`` .. ``debug`` and their
  ``*f`` pattern variants.
* ``inspect_runtime`` – read-only snapshot of the active configuration.

System Role
-----------
Configuration changes take effect for subsequent calls only; they are applied
while holding the pipeline lock so an in-flight dispatch never observes a
half-updated sink.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Mapping

from lib_log_fanout.adapters import SyslogAdapter, is_captured
from lib_log_fanout.adapters import capture_std_logging as _install_capture
from lib_log_fanout.adapters import restore_std_logging as _remove_capture
from lib_log_fanout.adapters.syslog import Sender as SyslogSender
from lib_log_fanout.adapters.syslog import SyslogAddress
from lib_log_fanout.application.ports import ClockPort, ConsolePort, LevelClassifier
from lib_log_fanout.application.use_cases import ProcessResult
from lib_log_fanout.domain import LogLevel, SourceLocation

from ._caller import find_caller
from ._composition import FATAL_EXIT_CODE, build_runtime
from ._settings import DiagnosticHook, RuntimeSettings, build_runtime_settings, coerce_level
from ._state import LoggingRuntime, clear_runtime, get_or_create_runtime, is_initialised, set_runtime
from . import _state as _state_module


def _default_runtime() -> LoggingRuntime:
    settings = build_runtime_settings()
    runtime = build_runtime(settings)
    if settings.capture_std_logging:
        _install_capture(runtime.stream)
    return runtime


def _runtime() -> LoggingRuntime:
    return get_or_create_runtime(_default_runtime)


@dataclass(frozen=True)
class RuntimeSnapshot:
    """Immutable view over the active logging runtime."""

    console_level: LogLevel
    syslog_level: LogLevel
    file_level: LogLevel
    syslog_tag: str | None
    file_path: Path | None
    max_messages_per_second: int
    std_logging_captured: bool


def init(
    *,
    console_level: str | LogLevel = LogLevel.DEBUG,
    syslog_tag: str | None = None,
    syslog_level: str | LogLevel = LogLevel.DEBUG,
    syslog_address: SyslogAddress | None = None,
    file_path: str | Path | None = None,
    file_level: str | LogLevel = LogLevel.DEBUG,
    max_messages_per_second: int = 0,
    capture_std_logging: bool = False,
    force_color: bool = False,
    no_color: bool = False,
    console_styles: Mapping[str, str] | None = None,
    diagnostic_hook: DiagnosticHook = None,
    console: ConsolePort | None = None,
    clock: ClockPort | None = None,
    syslog_sender: SyslogSender | None = None,
    classifier: LevelClassifier | None = None,
    terminate: Callable[[], None] | None = None,
) -> None:
    """Compose the logging runtime according to configuration inputs.

    Why
    ---
    Services usually configure all three sinks at start-up. ``init`` does it in
    one call and honours the ``LOG_*`` environment overrides documented in
    :mod:`lib_log_fanout.runtime._settings`.

    Inputs
    ------
    console_level, syslog_level, file_level:
        Per-sink thresholds; names are coerced via :meth:`LogLevel.from_name`.
    syslog_tag, syslog_address:
        Enable the syslog sink with the given ident and socket.
    file_path:
        Enable the append-only file sink.
    max_messages_per_second:
        Rate limit across all sinks; ``0`` disables limiting.
    capture_std_logging:
        Route the stdlib root logger through the pipeline.
    console, clock, syslog_sender, classifier, terminate:
        Collaborator overrides, mainly for tests and embedding.

    Side Effects
    ------------
    Replaces any active runtime (shutting it down first) and may connect to
    syslog; raises :class:`SyslogUnavailableError` when that fails.
    """

    settings = build_runtime_settings(
        console_level=console_level,
        syslog_tag=syslog_tag,
        syslog_level=syslog_level,
        syslog_address=syslog_address,
        file_path=file_path,
        file_level=file_level,
        max_messages_per_second=max_messages_per_second,
        capture_std_logging=capture_std_logging,
        force_color=force_color,
        no_color=no_color,
        console_styles=console_styles,
        diagnostic_hook=diagnostic_hook,
    )
    runtime = build_runtime(
        settings,
        console=console,
        clock=clock,
        syslog_sender=syslog_sender,
        classifier=classifier,
        terminate=terminate,
    )
    with _state_module._STATE_LOCK:
        if is_initialised():
            shutdown()
        set_runtime(runtime)
        if settings.capture_std_logging:
            _install_capture(runtime.stream)


def shutdown() -> None:
    """Restore stdlib logging, close syslog, and forget the active runtime."""

    with _state_module._STATE_LOCK:
        if not is_initialised():
            return
        runtime = _runtime()
        with runtime.pipeline.lock:
            if is_captured():
                _remove_capture()
            if runtime.pipeline.syslog is not None:
                runtime.pipeline.syslog.close()
                runtime.pipeline.syslog = None
        clear_runtime()


def set_console_level(level: str | LogLevel) -> None:
    """Set the least verbose level written to the console."""

    pipeline = _runtime().pipeline
    with pipeline.lock:
        pipeline.thresholds.console = coerce_level(level)


def set_syslog_level(level: str | LogLevel) -> None:
    """Change the syslog threshold without touching the connection."""

    pipeline = _runtime().pipeline
    with pipeline.lock:
        pipeline.thresholds.syslog = coerce_level(level)


def init_syslog(
    tag: str,
    level: str | LogLevel = LogLevel.DEBUG,
    *,
    address: SyslogAddress | None = None,
    sender: SyslogSender | None = None,
) -> None:
    """Connect to syslog with ``tag`` and activate the syslog sink.

    Raises
    ------
    SyslogUnavailableError
        When the connection fails; the syslog sink then stays as it was.
    """

    threshold = coerce_level(level)
    adapter = SyslogAdapter(tag, sender=sender, address=address)
    pipeline = _runtime().pipeline
    with pipeline.lock:
        previous = pipeline.syslog
        pipeline.syslog = adapter
        pipeline.thresholds.syslog = threshold
    if previous is not None:
        previous.close()


def init_file(path: str | Path, level: str | LogLevel = LogLevel.DEBUG) -> None:
    """Register ``path`` as the append-only file sink with threshold ``level``."""

    runtime = _runtime()
    with runtime.pipeline.lock:
        runtime.file.register(path)
        runtime.pipeline.thresholds.file = coerce_level(level)


def set_file_level(level: str | LogLevel) -> None:
    pipeline = _runtime().pipeline
    with pipeline.lock:
        pipeline.thresholds.file = coerce_level(level)


def set_max_messages_per_second(limit: int) -> None:
    """Limit messages per second across all sinks; ``0`` turns limiting off."""

    runtime = _runtime()
    with runtime.pipeline.lock:
        runtime.rate_limiter.max_per_second = int(limit)


def capture_std_logging() -> None:
    """Route every stdlib :mod:`logging` record through the pipeline."""

    _install_capture(_runtime().stream)


def restore_std_logging() -> None:
    """Send stdlib :mod:`logging` output back to stdout with the default format."""

    _remove_capture()


def inspect_runtime() -> RuntimeSnapshot:
    """Return a read-only snapshot of the current runtime state."""

    runtime = _runtime()
    pipeline = runtime.pipeline
    with pipeline.lock:
        syslog = pipeline.syslog
        return RuntimeSnapshot(
            console_level=pipeline.thresholds.console,
            syslog_level=pipeline.thresholds.syslog,
            file_level=pipeline.thresholds.file,
            syslog_tag=getattr(syslog, "tag", None),
            file_path=runtime.file.path,
            max_messages_per_second=runtime.rate_limiter.max_per_second,
            std_logging_captured=is_captured(),
        )


def _join(args: tuple[Any, ...]) -> str:
    return " ".join(str(arg) for arg in args)


def _format(pattern: str, args: tuple[Any, ...]) -> str:
    return pattern % args if args else pattern


def _dispatch(level: LogLevel, message: str, source: SourceLocation | None) -> ProcessResult:
    return _runtime().pipeline.dispatch(level, message, source=source or find_caller())


def _dispatch_fatal(message: str, source: SourceLocation | None) -> ProcessResult:
    result = _dispatch(LogLevel.FATAL, message, source)
    _runtime().terminate()
    return result


def log(level: str | LogLevel, *args: Any, source: SourceLocation | None = None) -> ProcessResult:
    """Dispatch ``args`` joined by spaces at ``level``.

    ``source`` overrides the automatically detected call site. ``FATAL``
    terminates the process after dispatch.
    """

    resolved = coerce_level(level)
    if resolved is LogLevel.FATAL:
        return _dispatch_fatal(_join(args), source)
    return _dispatch(resolved, _join(args), source)


def logf(level: str | LogLevel, pattern: str, *args: Any, source: SourceLocation | None = None) -> ProcessResult:
    """Dispatch ``pattern % args`` at ``level``."""

    resolved = coerce_level(level)
    if resolved is LogLevel.FATAL:
        return _dispatch_fatal(_format(pattern, args), source)
    return _dispatch(resolved, _format(pattern, args), source)


def fatal(*args: Any) -> ProcessResult:
    """Log at ``FATAL`` and terminate the process with a non-zero status."""
    return _dispatch_fatal(_join(args), None)


def fatalf(pattern: str, *args: Any) -> ProcessResult:
    """Log ``pattern % args`` at ``FATAL`` and terminate the process."""
    return _dispatch_fatal(_format(pattern, args), None)


def alert(*args: Any) -> ProcessResult:
    return _dispatch(LogLevel.ALERT, _join(args), None)


def alertf(pattern: str, *args: Any) -> ProcessResult:
    return _dispatch(LogLevel.ALERT, _format(pattern, args), None)


def critical(*args: Any) -> ProcessResult:
    return _dispatch(LogLevel.CRITICAL, _join(args), None)


def criticalf(pattern: str, *args: Any) -> ProcessResult:
    return _dispatch(LogLevel.CRITICAL, _format(pattern, args), None)


def error(*args: Any) -> ProcessResult:
    return _dispatch(LogLevel.ERROR, _join(args), None)


def errorf(pattern: str, *args: Any) -> ProcessResult:
    return _dispatch(LogLevel.ERROR, _format(pattern, args), None)


def warning(*args: Any) -> ProcessResult:
    return _dispatch(LogLevel.WARNING, _join(args), None)


def warningf(pattern: str, *args: Any) -> ProcessResult:
    return _dispatch(LogLevel.WARNING, _format(pattern, args), None)


def notice(*args: Any) -> ProcessResult:
    return _dispatch(LogLevel.NOTICE, _join(args), None)


def noticef(pattern: str, *args: Any) -> ProcessResult:
    return _dispatch(LogLevel.NOTICE, _format(pattern, args), None)


def info(*args: Any) -> ProcessResult:
    return _dispatch(LogLevel.INFO, _join(args), None)


def infof(pattern: str, *args: Any) -> ProcessResult:
    return _dispatch(LogLevel.INFO, _format(pattern, args), None)


def debug(*args: Any) -> ProcessResult:
    return _dispatch(LogLevel.DEBUG, _join(args), None)


def debugf(pattern: str, *args: Any) -> ProcessResult:
    return _dispatch(LogLevel.DEBUG, _format(pattern, args), None)


def summary_info() -> str:
    """Return the metadata banner used by the CLI ``info`` command.

    Examples
    --------
    >>> "version" in summary_info()
    True
    """
    from lib_log_fanout import __init__conf__

    lines: list[str] = []
    __init__conf__.print_info(writer=lines.append)
    return "".join(lines)


__all__ = [
    "FATAL_EXIT_CODE",
    "RuntimeSettings",
    "RuntimeSnapshot",
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
