"""Port for strategies that infer a level from a foreign log line."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from lib_log_fanout.domain.levels import LogLevel


@runtime_checkable
class LevelClassifier(Protocol):
    """Split a foreign line into its inferred level and remaining text."""

    def classify(self, line: str) -> tuple[LogLevel, str]:
        """Return ``(level, text)`` where ``text`` no longer carries the prefix."""


__all__ = ["LevelClassifier"]
