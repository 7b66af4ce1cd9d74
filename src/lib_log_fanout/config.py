"""Optional ``.env`` loading for the CLI and embedding applications.

The ``LOG_*`` overrides read by :func:`lib_log_fanout.init` can live in a
``.env`` file next to the service. Loading never overrides variables that are
already present in the environment.
"""

from __future__ import annotations

from pathlib import Path
from threading import Lock

from dotenv import find_dotenv, load_dotenv

#: Environment toggle consulted when no explicit CLI flag is given.
DOTENV_ENV_VAR = "LIB_LOG_FANOUT_USE_DOTENV"

_TRUTHY = {"1", "true", "yes", "on"}

_LOADED_PATH: Path | None = None
_LOADED = False
_LOCK = Lock()


def should_use_dotenv(*, explicit: bool | None, env_value: str | None) -> bool:
    """Decide whether to load ``.env``; an explicit flag beats the environment.

    Examples
    --------
    >>> should_use_dotenv(explicit=None, env_value="yes")
    True
    >>> should_use_dotenv(explicit=False, env_value="1")
    False
    >>> should_use_dotenv(explicit=None, env_value=None)
    False
    """

    if explicit is not None:
        return explicit
    if env_value is None:
        return False
    return env_value.strip().lower() in _TRUTHY


def enable_dotenv(*, search_from: Path | None = None) -> Path | None:
    """Load the nearest ``.env`` (searching upwards) once per process.

    Returns the resolved path of the loaded file, or ``None`` when none was
    found.
    """

    global _LOADED, _LOADED_PATH
    with _LOCK:
        if _LOADED:
            return _LOADED_PATH
        if search_from is not None:
            candidate = _search_upwards(search_from)
        else:
            found = find_dotenv(usecwd=True)
            candidate = Path(found).resolve() if found else None
        if candidate is not None:
            load_dotenv(candidate, override=False)
        _LOADED = True
        _LOADED_PATH = candidate
        return candidate


def _search_upwards(start: Path) -> Path | None:
    start = start.resolve()
    for directory in (start, *start.parents):
        candidate = directory / ".env"
        if candidate.is_file():
            return candidate
    return None


def _reset_dotenv_state_for_testing() -> None:
    global _LOADED, _LOADED_PATH
    with _LOCK:
        _LOADED = False
        _LOADED_PATH = None


__all__ = ["DOTENV_ENV_VAR", "enable_dotenv", "should_use_dotenv"]
