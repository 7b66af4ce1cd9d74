"""Distribution metadata shown by ``lib_log_fanout info`` and ``--version``."""

from __future__ import annotations

import sys
from typing import Callable

name = "lib_log_fanout"
title = "Leveled logging fanned out to console, syslog, and an append-only file"
version = "0.1.0"
author = "bitranox"
shell_command = "lib_log_fanout"


def print_info(writer: Callable[[str], object] | None = None) -> None:
    """Write the metadata banner through ``writer`` (stdout by default).

    Examples
    --------
    >>> chunks = []
    >>> print_info(writer=chunks.append)
    >>> chunks[0].startswith("Info for lib_log_fanout")
    True
    """

    fields = [
        ("name", name),
        ("title", title),
        ("version", version),
        ("author", author),
        ("shell_command", shell_command),
    ]
    pad = max(len(label) for label, _ in fields)
    lines = [f"Info for {name}:", ""]
    lines.extend(f"    {label.ljust(pad)} = {value}" for label, value in fields)
    (writer or sys.stdout.write)("\n".join(lines) + "\n")
