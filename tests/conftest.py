from __future__ import annotations

from datetime import datetime, timedelta
from io import StringIO
from typing import Iterator

import pytest
from rich.console import Console

import lib_log_fanout as log
from lib_log_fanout.domain import LogLevel

LOG_ENV_VARS = (
    "LOG_CONSOLE_LEVEL",
    "LOG_SYSLOG_TAG",
    "LOG_SYSLOG_LEVEL",
    "LOG_SYSLOG_ADDRESS",
    "LOG_FILE",
    "LOG_FILE_LEVEL",
    "LOG_MAX_MESSAGES_PER_SECOND",
    "LOG_CAPTURE_STDLIB",
    "LOG_FORCE_COLOR",
    "LOG_NO_COLOR",
)


class SettableClock:
    """Clock port whose time only moves when a test says so."""

    def __init__(self, start: datetime | None = None) -> None:
        self.current = start or datetime(2025, 9, 23, 12, 0, 0)

    def now(self) -> datetime:
        return self.current

    def advance(self, seconds: float) -> None:
        self.current += timedelta(seconds=seconds)


class RecordingConsole:
    """Console port keeping every ``(level, line)`` pair it receives."""

    def __init__(self) -> None:
        self.lines: list[tuple[LogLevel, str]] = []

    def emit(self, level: LogLevel, line: str) -> None:
        self.lines.append((level, line))

    @property
    def text(self) -> str:
        return "".join(line for _, line in self.lines)


class RecordingSyslog:
    def __init__(self) -> None:
        self.sent: list[tuple[str, str]] = []
        self.closed = False

    def __call__(self, priority: str, text: str) -> None:
        self.sent.append((priority, text))

    def close(self) -> None:
        self.closed = True


class Terminations:
    def __init__(self) -> None:
        self.count = 0

    def __call__(self) -> None:
        self.count += 1


@pytest.fixture
def clock() -> SettableClock:
    return SettableClock()


@pytest.fixture
def console() -> RecordingConsole:
    return RecordingConsole()


@pytest.fixture
def syslog_sender() -> RecordingSyslog:
    return RecordingSyslog()


@pytest.fixture
def terminations() -> Terminations:
    return Terminations()


@pytest.fixture
def record_console() -> Console:
    return Console(file=StringIO(), color_system=None, width=200)


@pytest.fixture(autouse=True)
def _clean_log_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in LOG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def reset_runtime() -> Iterator[None]:
    try:
        yield
    finally:
        log.shutdown()


@pytest.fixture
def runtime(console: RecordingConsole, clock: SettableClock, terminations: Terminations) -> RecordingConsole:
    """Initialise the global runtime with recording collaborators."""

    log.init(console=console, clock=clock, terminate=terminations)
    return console
