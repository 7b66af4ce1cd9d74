"""Locate the user frame that issued a log call.

Frames belonging to this package and to the stdlib :mod:`logging` package are
skipped, so direct calls, calls through stdlib loggers, and writes to the
captured stream all report the application's own ``file:line``.
"""

from __future__ import annotations

import logging
import os
import sys

from lib_log_fanout.domain import SourceLocation

_PACKAGE_DIR = os.path.normcase(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))) + os.sep
_LOGGING_DIR = os.path.normcase(os.path.dirname(os.path.abspath(logging.__file__))) + os.sep
_INTERNAL_PREFIXES = (_PACKAGE_DIR, _LOGGING_DIR)

UNKNOWN_SOURCE = SourceLocation("???", 0)


def _is_internal(filename: str) -> bool:
    return os.path.normcase(os.path.abspath(filename)).startswith(_INTERNAL_PREFIXES)


def find_caller() -> SourceLocation:
    """Return the first frame outside the library and :mod:`logging`."""

    frame = sys._getframe(1)
    while frame is not None:
        filename = frame.f_code.co_filename
        if not _is_internal(filename):
            return SourceLocation.from_path(filename, frame.f_lineno)
        frame = frame.f_back
    return UNKNOWN_SOURCE


__all__ = ["UNKNOWN_SOURCE", "find_caller"]
