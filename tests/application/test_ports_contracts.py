from __future__ import annotations

from io import StringIO

from rich.console import Console

from lib_log_fanout.adapters import (
    AppendFileAdapter,
    PerSecondRateLimiter,
    PrefixLevelClassifier,
    RichConsoleAdapter,
    SyslogAdapter,
)
from lib_log_fanout.application.ports import (
    ClockPort,
    ConsolePort,
    FileSinkPort,
    LevelClassifier,
    RateLimiterPort,
    SyslogPort,
)
from lib_log_fanout.runtime._composition import SystemClock


def test_concrete_adapters_satisfy_their_ports(syslog_sender) -> None:
    plain = Console(file=StringIO())

    assert isinstance(RichConsoleAdapter(stdout_console=plain, stderr_console=plain), ConsolePort)
    assert isinstance(SyslogAdapter("app", sender=syslog_sender), SyslogPort)
    assert isinstance(AppendFileAdapter(), FileSinkPort)
    assert isinstance(PerSecondRateLimiter(), RateLimiterPort)
    assert isinstance(PrefixLevelClassifier(), LevelClassifier)
    assert isinstance(SystemClock(), ClockPort)


def test_test_doubles_satisfy_their_ports(console, clock) -> None:
    assert isinstance(console, ConsolePort)
    assert isinstance(clock, ClockPort)
