"""Regex strategy inferring a level from the leading token of a foreign line.

Purpose
-------
Lines written by foreign loggers carry at most a textual hint such as
``ERROR:`` or ``[warn]``. The classifier recognises such a hint only at the
very start of the line, so level-like words inside ordinary sentences are
left alone.

Contents
--------
* :data:`DEFAULT_PREFIX_PATTERN` – the built-in vocabulary.
* :data:`DEFAULT_LETTER_MAP` – first letter of the matched word to level.
* :class:`PrefixLevelClassifier` – :class:`LevelClassifier` implementation.

System Role
-----------
Used by :class:`~lib_log_fanout.adapters.stream_capture.ForeignStreamAdapter`.
Other vocabularies plug in by passing a different pattern and letter map.
"""

from __future__ import annotations

import re
from typing import Mapping, Pattern

from lib_log_fanout.application.ports.classifier import LevelClassifier
from lib_log_fanout.domain.levels import LogLevel

DEFAULT_PREFIX_PATTERN: Pattern[str] = re.compile(
    r"^(?P<prefix>[\W_]*"  # any non-letters before the level word
    r"(?P<word>fatal|alert|critical|crit|error|err|e|warning|warn|w|notice|info|debug)s?"
    r"[^\w/-]+)",  # at least one separator that is not part of a word or path
    re.IGNORECASE,
)

DEFAULT_LETTER_MAP: Mapping[str, LogLevel] = {
    "f": LogLevel.FATAL,
    "a": LogLevel.ALERT,
    "c": LogLevel.CRITICAL,
    "e": LogLevel.ERROR,
    "w": LogLevel.WARNING,
    "n": LogLevel.NOTICE,
    "i": LogLevel.INFO,
    "d": LogLevel.DEBUG,
}


class PrefixLevelClassifier(LevelClassifier):
    """Strip a recognised level prefix and report the level it names.

    Examples
    --------
    >>> classifier = PrefixLevelClassifier()
    >>> classifier.classify("ERROR: disk full")
    (<LogLevel.ERROR: 3>, 'disk full')
    >>> classifier.classify("something error occurred")
    (<LogLevel.NOTICE: 5>, 'something error occurred')
    >>> classifier.classify("[warn] low memory\\n")
    (<LogLevel.WARNING: 4>, 'low memory')
    """

    def __init__(
        self,
        *,
        pattern: Pattern[str] | str = DEFAULT_PREFIX_PATTERN,
        letter_map: Mapping[str, LogLevel] = DEFAULT_LETTER_MAP,
        default: LogLevel = LogLevel.NOTICE,
    ) -> None:
        self._pattern = re.compile(pattern, re.IGNORECASE) if isinstance(pattern, str) else pattern
        if "prefix" not in self._pattern.groupindex or "word" not in self._pattern.groupindex:
            raise ValueError("pattern must define 'prefix' and 'word' groups")
        self._letters = {key.lower(): value for key, value in letter_map.items()}
        self._default = default

    def classify(self, line: str) -> tuple[LogLevel, str]:
        match = self._pattern.match(line)
        if match is None:
            return self._default, line.strip()
        level = self._letters.get(match.group("word")[:1].lower(), self._default)
        return level, line[match.end("prefix") :].strip()


__all__ = ["DEFAULT_LETTER_MAP", "DEFAULT_PREFIX_PATTERN", "PrefixLevelClassifier"]
