"""Collapse consecutive identical messages into a compact marker.

A run of identical rendered messages is written once in full, followed by a
single ``.`` per repetition. The first distinct message after such a run is
prefixed with a newline so the dots end their own line.
"""

from __future__ import annotations

from datetime import datetime

from .events import format_timestamp

REPEAT_MARKER = "."


class RepeatCollapser:
    """Stateful filter deciding the exact text written for a rendered message.

    The state is shared by all sinks; it is keyed on the rendered text, which
    includes the level and the call site.

    Examples
    --------
    >>> collapser = RepeatCollapser()
    >>> ts = datetime(2025, 1, 2, 3, 4, 5)
    >>> collapser.collapse('[Info] a.py:1 - hi\\n', ts)
    '2025-01-02 03:04:05 [Info] a.py:1 - hi\\n'
    >>> collapser.collapse('[Info] a.py:1 - hi\\n', ts)
    '.'
    >>> collapser.collapse('[Info] a.py:2 - bye\\n', ts)
    '\\n2025-01-02 03:04:05 [Info] a.py:2 - bye\\n'
    """

    def __init__(self) -> None:
        self._last: str | None = None
        self._repeating = False

    @property
    def repeating(self) -> bool:
        """``True`` when the previous write was a repeat marker."""
        return self._repeating

    def collapse(self, rendered: str, timestamp: datetime) -> str:
        if rendered == self._last:
            self._repeating = True
            return REPEAT_MARKER
        prefix = "\n" if self._repeating else ""
        self._repeating = False
        self._last = rendered
        return f"{prefix}{format_timestamp(timestamp)}{rendered}"

    def reset(self) -> None:
        self._last = None
        self._repeating = False


__all__ = ["REPEAT_MARKER", "RepeatCollapser"]
