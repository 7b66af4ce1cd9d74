"""Rich-powered console adapter implementing :class:`ConsolePort`.

Purpose
-------
Write collapsed lines to the process's standard streams. Rich decides
which colour system the terminal supports and renders the level style.

Contents
--------
* :data:`_STYLE_MAP` - default level-to-style mapping.
* :class:`RichConsoleAdapter` - adapter constructed by the runtime composition.

System Role
-----------
The always-present sink. Severe levels (``FATAL`` .. ``WARNING``) go to the
error stream, the rest to standard output. Lines are written verbatim, byte
for byte what the file sink receives; only style escape codes are added
around them. The repeat marker carries no newline and stays on the current
line.
"""

from __future__ import annotations

from typing import Mapping, MutableMapping

from rich.console import COLOR_SYSTEMS, Console
from rich.style import Style

from lib_log_fanout.application.ports.console import ConsolePort
from lib_log_fanout.domain.levels import LogLevel


#: Default Rich styles keyed by :class:`LogLevel`.
_STYLE_MAP: Mapping[LogLevel, str] = {
    LogLevel.FATAL: "bold white on red",
    LogLevel.ALERT: "bold red",
    LogLevel.CRITICAL: "bold red",
    LogLevel.ERROR: "red",
    LogLevel.WARNING: "yellow",
    LogLevel.NOTICE: "green",
    LogLevel.INFO: "cyan",
    LogLevel.DEBUG: "dim",
}

#: Least severe level still routed to the error stream.
STDERR_THRESHOLD = LogLevel.WARNING


class RichConsoleAdapter(ConsolePort):
    """Write lines to stdout/stderr using Rich with optional styling."""

    def __init__(
        self,
        *,
        stdout_console: Console | None = None,
        stderr_console: Console | None = None,
        force_color: bool = False,
        no_color: bool = False,
        styles: MutableMapping[LogLevel | str, str] | None = None,
    ) -> None:
        """Configure both streams with colour and style overrides."""
        force_terminal = True if force_color else None
        self._stdout = stdout_console or Console(force_terminal=force_terminal, no_color=no_color)
        self._stderr = stderr_console or Console(stderr=True, force_terminal=force_terminal, no_color=no_color)
        self._no_color = no_color
        merged = dict(_STYLE_MAP)
        for key, value in (styles or {}).items():
            level = LogLevel.from_name(key) if isinstance(key, str) else key
            merged[level] = value
        self._style_map = merged

    def emit(self, level: LogLevel, line: str) -> None:
        """Write ``line`` to the stream selected by ``level``.

        Examples
        --------
        >>> from io import StringIO
        >>> out, err = StringIO(), StringIO()
        >>> adapter = RichConsoleAdapter(stdout_console=Console(file=out), stderr_console=Console(file=err))
        >>> adapter.emit(LogLevel.ERROR, 'boom\\n')
        >>> adapter.emit(LogLevel.INFO, 'fine\\n')
        >>> err.getvalue(), out.getvalue()
        ('boom\\n', 'fine\\n')
        """
        console = self._stderr if level.passes(STDERR_THRESHOLD) else self._stdout
        style = None if self._no_color else self._style_map.get(level)
        console.file.write(_styled(console, line, style))
        console.file.flush()


def _styled(console: Console, line: str, style: str | None) -> str:
    """Wrap ``line`` in the escape codes of ``style``, leaving its characters untouched.

    Trailing newlines stay outside the styled span.
    """
    if not style or console.no_color or console.color_system is None:
        return line
    body = line.rstrip("\n")
    rendered = Style.parse(style).render(body, color_system=COLOR_SYSTEMS[console.color_system])
    return rendered + line[len(body) :]


__all__ = ["RichConsoleAdapter", "STDERR_THRESHOLD"]
