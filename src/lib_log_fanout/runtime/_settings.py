"""Runtime settings resolved from keyword arguments and environment overrides.

Environment variables win over keyword arguments, mirroring how operators
reconfigure a deployed service without touching code:

``LOG_CONSOLE_LEVEL``, ``LOG_SYSLOG_TAG``, ``LOG_SYSLOG_LEVEL``,
``LOG_SYSLOG_ADDRESS``, ``LOG_FILE``, ``LOG_FILE_LEVEL``,
``LOG_MAX_MESSAGES_PER_SECOND``, ``LOG_CAPTURE_STDLIB``, ``LOG_FORCE_COLOR``,
``LOG_NO_COLOR``.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping

from lib_log_fanout.adapters.syslog import SyslogAddress
from lib_log_fanout.application.use_cases.process_event import DiagnosticHook
from lib_log_fanout.domain import LogLevel

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class ConsoleAppearance:
    """Colour preferences for the Rich console adapter."""

    force_color: bool = False
    no_color: bool = False
    styles: Mapping[str, str] | None = None


@dataclass(frozen=True)
class RuntimeSettings:
    """Fully resolved configuration consumed by :func:`build_runtime`."""

    console_level: LogLevel = LogLevel.DEBUG
    syslog_tag: str | None = None
    syslog_level: LogLevel = LogLevel.DEBUG
    syslog_address: SyslogAddress | None = None
    file_path: Path | None = None
    file_level: LogLevel = LogLevel.DEBUG
    max_messages_per_second: int = 0
    capture_std_logging: bool = False
    console: ConsoleAppearance = field(default_factory=ConsoleAppearance)
    diagnostic_hook: DiagnosticHook = None


def build_runtime_settings(
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
) -> RuntimeSettings:
    """Merge keyword arguments with environment overrides.

    Raises
    ------
    ValueError
        When a level name, rate limit, or syslog address is malformed.
    """

    raw_file = os.getenv("LOG_FILE", str(file_path) if file_path else "")
    raw_syslog_address = os.getenv("LOG_SYSLOG_ADDRESS")
    return RuntimeSettings(
        console_level=coerce_level(os.getenv("LOG_CONSOLE_LEVEL", console_level)),
        syslog_tag=os.getenv("LOG_SYSLOG_TAG", syslog_tag) or None,
        syslog_level=coerce_level(os.getenv("LOG_SYSLOG_LEVEL", syslog_level)),
        syslog_address=_coerce_syslog_address(raw_syslog_address) if raw_syslog_address else syslog_address,
        file_path=Path(raw_file) if raw_file else None,
        file_level=coerce_level(os.getenv("LOG_FILE_LEVEL", file_level)),
        max_messages_per_second=_coerce_rate_limit(os.getenv("LOG_MAX_MESSAGES_PER_SECOND"), max_messages_per_second),
        capture_std_logging=_env_bool("LOG_CAPTURE_STDLIB", capture_std_logging),
        console=ConsoleAppearance(
            force_color=_env_bool("LOG_FORCE_COLOR", force_color),
            no_color=_env_bool("LOG_NO_COLOR", no_color),
            styles=dict(console_styles) if console_styles else None,
        ),
        diagnostic_hook=diagnostic_hook,
    )


def coerce_level(level: str | LogLevel) -> LogLevel:
    """Normalise level inputs (string or enum) into :class:`LogLevel`.

    Examples
    --------
    >>> coerce_level("crit") is LogLevel.CRITICAL
    True
    >>> coerce_level(LogLevel.ERROR) is LogLevel.ERROR
    True
    """
    if isinstance(level, LogLevel):
        return level
    return LogLevel.from_name(level)


def _env_bool(name: str, default: bool) -> bool:
    """Return the boolean value of an environment variable with fallback.

    Examples
    --------
    >>> _ = os.environ.pop('LOG_EXAMPLE_BOOL', None)
    >>> _env_bool('LOG_EXAMPLE_BOOL', default=True)
    True
    >>> os.environ['LOG_EXAMPLE_BOOL'] = '0'
    >>> _env_bool('LOG_EXAMPLE_BOOL', default=True)
    False
    >>> del os.environ['LOG_EXAMPLE_BOOL']
    """
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip().lower() in _TRUTHY


def _coerce_rate_limit(value: str | None, fallback: int) -> int:
    """Parse the per-second maximum; ``0`` (or less) disables limiting.

    Examples
    --------
    >>> _coerce_rate_limit('25', 0)
    25
    >>> _coerce_rate_limit(None, 3)
    3
    >>> _coerce_rate_limit('many', 0)
    Traceback (most recent call last):
    ...
    ValueError: LOG_MAX_MESSAGES_PER_SECOND must be an integer, got 'many'
    """
    if value is None or not value.strip():
        return fallback
    try:
        return int(value.strip())
    except ValueError as exc:
        raise ValueError(f"LOG_MAX_MESSAGES_PER_SECOND must be an integer, got {value!r}") from exc


def _coerce_syslog_address(value: str) -> SyslogAddress:
    """Parse ``/path/to/socket`` or ``HOST:PORT``.

    Examples
    --------
    >>> _coerce_syslog_address('/dev/log')
    '/dev/log'
    >>> _coerce_syslog_address('logs.local:514')
    ('logs.local', 514)
    """
    value = value.strip()
    if value.startswith("/"):
        return value
    host, sep, port_str = value.rpartition(":")
    if not sep or not host:
        raise ValueError(f"LOG_SYSLOG_ADDRESS must be a socket path or HOST:PORT, got {value!r}")
    try:
        port = int(port_str)
    except ValueError as exc:
        raise ValueError(f"LOG_SYSLOG_ADDRESS port must be an integer, got {port_str!r}") from exc
    if port <= 0:
        raise ValueError("LOG_SYSLOG_ADDRESS port must be positive")
    return host, port


__all__ = [
    "ConsoleAppearance",
    "DiagnosticHook",
    "RuntimeSettings",
    "build_runtime_settings",
    "coerce_level",
]
