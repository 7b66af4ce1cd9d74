"""Absorb the stdlib :mod:`logging` root logger into the fan-out pipeline.

Purpose
-------
Third-party code frequently logs through :mod:`logging`. Capturing replaces
the root logger's handlers with a single :class:`logging.StreamHandler` whose
stream is a :class:`ForeignStreamAdapter`. The handler formats records as the
bare message, so every write is one pre-formatted line whose level is inferred
from its textual prefix.

Contents
--------
* :class:`ForeignStreamAdapter` – text stream forwarding lines to the pipeline.
* :func:`capture_std_logging` / :func:`restore_std_logging` – install/remove.

System Role
-----------
Alternate entry point in front of the dispatch pipeline. ``FATAL`` lines
terminate the process after dispatch through the supplied ``on_fatal`` hook.
"""

from __future__ import annotations

import logging
import sys
from typing import Any, Callable

from lib_log_fanout.adapters.classifier import PrefixLevelClassifier
from lib_log_fanout.application.ports.classifier import LevelClassifier
from lib_log_fanout.domain.levels import LogLevel

ForeignDispatch = Callable[[LogLevel, str], Any]

CAPTURE_FORMAT = "%(message)s"


class ForeignStreamAdapter:
    """Writable text stream that re-levels each written line.

    Examples
    --------
    >>> seen = []
    >>> adapter = ForeignStreamAdapter(lambda level, text: seen.append((level.name, text)))
    >>> adapter.write("ERROR: disk full\\n")
    17
    >>> adapter.write(b"plain bytes\\n")
    12
    >>> seen
    [('ERROR', 'disk full'), ('NOTICE', 'plain bytes')]
    """

    def __init__(
        self,
        dispatch: ForeignDispatch,
        *,
        classifier: LevelClassifier | None = None,
        on_fatal: Callable[[], None] | None = None,
        encoding: str = "utf-8",
    ) -> None:
        self._dispatch = dispatch
        self._classifier = classifier or PrefixLevelClassifier()
        self.on_fatal = on_fatal
        self.encoding = encoding
        self.last_result: Any = None

    def forward(self, data: str | bytes) -> LogLevel | None:
        """Classify and dispatch one line without running the fatal hook.

        Returns the inferred level, or ``None`` for blank input.
        """
        text = data.decode(self.encoding, errors="replace") if isinstance(data, bytes) else data
        if not text.strip():
            return None
        level, message = self._classifier.classify(text)
        self.last_result = self._dispatch(level, message)
        return level

    def write(self, data: str | bytes) -> int:
        """Forward one line and return the number of characters consumed."""
        if self.forward(data) is LogLevel.FATAL and self.on_fatal is not None:
            self.on_fatal()
        return len(data)

    def flush(self) -> None:
        return None

    def writable(self) -> bool:
        return True


class _CaptureHandler(logging.StreamHandler):
    """Stream handler feeding a :class:`ForeignStreamAdapter`.

    The fatal hook runs after :meth:`emit` leaves the stdlib error guard, so
    an exception raised by it reaches the code that logged the record.
    Restore only removes handlers of this type.
    """

    stream: ForeignStreamAdapter

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = self.stream.forward(self.format(record))
        except Exception:
            self.handleError(record)
            return
        if level is LogLevel.FATAL and self.stream.on_fatal is not None:
            self.stream.on_fatal()


def capture_std_logging(adapter: ForeignStreamAdapter, *, logger: logging.Logger | None = None) -> logging.Handler:
    """Route every record of ``logger`` (root by default) through ``adapter``.

    Existing handlers are removed, the logger level is lowered to ``DEBUG`` so
    the pipeline thresholds decide what survives, and records are formatted as
    the bare message.
    """

    target = logger or logging.getLogger()
    for existing in list(target.handlers):
        target.removeHandler(existing)
    handler = _CaptureHandler(adapter)
    handler.setFormatter(logging.Formatter(CAPTURE_FORMAT))
    target.addHandler(handler)
    target.setLevel(logging.DEBUG)
    return handler


def restore_std_logging(*, logger: logging.Logger | None = None) -> None:
    """Remove the capture handler and fall back to stdout with the stdlib default format."""

    target = logger or logging.getLogger()
    for existing in list(target.handlers):
        if isinstance(existing, _CaptureHandler):
            target.removeHandler(existing)
    if not target.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(logging.BASIC_FORMAT))
        target.addHandler(handler)
    target.setLevel(logging.WARNING)


def is_captured(*, logger: logging.Logger | None = None) -> bool:
    target = logger or logging.getLogger()
    return any(isinstance(handler, _CaptureHandler) for handler in target.handlers)


__all__ = [
    "CAPTURE_FORMAT",
    "ForeignStreamAdapter",
    "capture_std_logging",
    "is_captured",
    "restore_std_logging",
]
