"""Concrete adapters plugged into the dispatch pipeline."""

from __future__ import annotations

from .classifier import DEFAULT_PREFIX_PATTERN, PrefixLevelClassifier
from .console.rich_console import RichConsoleAdapter
from .file import AppendFileAdapter
from .rate_limiter import PerSecondRateLimiter
from .stream_capture import ForeignStreamAdapter, capture_std_logging, is_captured, restore_std_logging
from .syslog import SyslogAdapter

__all__ = [
    "AppendFileAdapter",
    "DEFAULT_PREFIX_PATTERN",
    "ForeignStreamAdapter",
    "PerSecondRateLimiter",
    "PrefixLevelClassifier",
    "RichConsoleAdapter",
    "SyslogAdapter",
    "capture_std_logging",
    "is_captured",
    "restore_std_logging",
]
