"""Protocols the dispatch pipeline depends on."""

from __future__ import annotations

from .classifier import LevelClassifier
from .console import ConsolePort
from .file import FileSinkPort
from .rate_limiter import RateLimiterPort
from .syslog import SyslogPort
from .time import ClockPort

__all__ = [
    "ClockPort",
    "ConsolePort",
    "FileSinkPort",
    "LevelClassifier",
    "RateLimiterPort",
    "SyslogPort",
]
