"""Append-only file sink opened and closed on every write.

No descriptor is held between writes, so changing the registered path never
leaks a handle. The first open or write failure unregisters the path; the sink
then stays inactive until :meth:`AppendFileAdapter.register` is called again.
"""

from __future__ import annotations

from pathlib import Path

from lib_log_fanout.application.ports.file import FileSinkPort


class AppendFileAdapter(FileSinkPort):
    """Append lines to ``path`` (created when absent).

    Examples
    --------
    >>> import tempfile, os
    >>> target = os.path.join(tempfile.mkdtemp(), 'app.log')
    >>> sink = AppendFileAdapter(target)
    >>> sink.write('one\\n')
    >>> sink.write('two\\n')
    >>> open(target, encoding='utf-8').read()
    'one\\ntwo\\n'
    """

    def __init__(self, path: str | Path | None = None, *, encoding: str = "utf-8") -> None:
        self._path: Path | None = None
        self._encoding = encoding
        self.register(path)

    @property
    def path(self) -> Path | None:
        return self._path

    @property
    def active(self) -> bool:
        return self._path is not None

    def register(self, path: str | Path | None) -> None:
        """Point the sink at ``path``; empty values deactivate it."""
        self._path = Path(path) if path else None

    def write(self, line: str) -> None:
        if self._path is None:
            return
        try:
            with self._path.open("a", encoding=self._encoding) as handle:
                handle.write(line)
        except OSError:
            self._path = None
            raise


__all__ = ["AppendFileAdapter"]
