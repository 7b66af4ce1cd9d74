"""Syslog adapter forwarding undecorated messages at native priorities.

Purpose
-------
Deliver ``[Level] file:line - message`` payloads to the local system logger.
Syslog supplies its own timestamp, so no time prefix is sent.

Contents
--------
* :data:`_PRIORITY_MAP` - one-to-one mapping onto the eight syslog priorities.
* :class:`SyslogAdapter` - concrete :class:`SyslogPort` implementation.

System Role
-----------
Optional sink activated by :func:`lib_log_fanout.init_syslog`. Transport
errors propagate to the dispatcher instead of being printed by the stdlib
handler.
"""

from __future__ import annotations

import logging
import os
import sys
from logging.handlers import SYSLOG_UDP_PORT, SysLogHandler
from typing import Any, Callable

from lib_log_fanout.application.ports.syslog import SyslogPort
from lib_log_fanout.domain.errors import SyslogUnavailableError
from lib_log_fanout.domain.levels import LogLevel

Sender = Callable[[str, str], None]
SyslogAddress = str | tuple[str, int]

#: Map :class:`LogLevel` to syslog priority names understood by SysLogHandler.
_PRIORITY_MAP = {
    LogLevel.FATAL: "emerg",
    LogLevel.ALERT: "alert",
    LogLevel.CRITICAL: "crit",
    LogLevel.ERROR: "err",
    LogLevel.WARNING: "warning",
    LogLevel.NOTICE: "notice",
    LogLevel.INFO: "info",
    LogLevel.DEBUG: "debug",
}


def default_address() -> SyslogAddress:
    """Return the local syslog socket for this platform.

    Examples
    --------
    >>> isinstance(default_address(), (str, tuple))
    True
    """
    if sys.platform.startswith("linux") and os.path.exists("/dev/log"):
        return "/dev/log"
    if sys.platform == "darwin" and os.path.exists("/var/run/syslog"):
        return "/var/run/syslog"
    return ("localhost", SYSLOG_UDP_PORT)


class _RaisingSysLogHandler(SysLogHandler):
    """SysLogHandler that takes priority names verbatim and raises on failure."""

    def createSocket(self) -> None:  # noqa: N802 - stdlib override
        # the stdlib ignores unix socket connection errors here since 3.11
        if isinstance(self.address, str):
            self.unixsocket = True
            self._connect_unixsocket(self.address)
            return
        super().createSocket()

    def mapPriority(self, levelName: str) -> str:  # noqa: N802 - stdlib override
        return levelName

    def handleError(self, record: logging.LogRecord) -> None:  # noqa: N802 - stdlib override
        # called from inside SysLogHandler.emit's except block
        raise


class _HandlerSender:
    """Send ``(priority, text)`` pairs through a :class:`SysLogHandler`."""

    def __init__(self, handler: SysLogHandler, tag: str) -> None:
        self._handler = handler
        self._tag = tag

    def __call__(self, priority: str, text: str) -> None:
        record = logging.LogRecord(self._tag, logging.INFO, "", 0, text, None, None)
        record.levelname = priority
        self._handler.emit(record)

    def close(self) -> None:
        self._handler.close()


def _open_sender(tag: str, address: SyslogAddress | None, facility: int) -> _HandlerSender:
    try:
        handler = _RaisingSysLogHandler(address=address or default_address(), facility=facility)
    except OSError as exc:
        raise SyslogUnavailableError(f"cannot connect to syslog: {exc}") from exc
    handler.ident = f"{tag}[{os.getpid()}]: "
    return _HandlerSender(handler, tag)


class SyslogAdapter(SyslogPort):
    """Emit messages to syslog using the configured sender."""

    def __init__(
        self,
        tag: str,
        *,
        sender: Sender | None = None,
        address: SyslogAddress | None = None,
        facility: int = SysLogHandler.LOG_USER,
    ) -> None:
        """Connect to syslog unless a ``sender`` is supplied.

        Raises
        ------
        SyslogUnavailableError
            When the syslog socket cannot be opened.
        """
        self.tag = tag
        self._sender: Any = sender if sender is not None else _open_sender(tag, address, facility)

    def emit(self, level: LogLevel, text: str) -> None:
        """Send ``text`` at the priority mapped from ``level``.

        Examples
        --------
        >>> sent = []
        >>> adapter = SyslogAdapter('app', sender=lambda prio, text: sent.append((prio, text)))
        >>> adapter.emit(LogLevel.FATAL, '[Fatal] app.py:1 - bye')
        >>> sent
        [('emerg', '[Fatal] app.py:1 - bye')]
        """
        self._sender(_PRIORITY_MAP[level], text)

    def close(self) -> None:
        close = getattr(self._sender, "close", None)
        if callable(close):
            close()


__all__ = ["SyslogAdapter", "default_address"]
