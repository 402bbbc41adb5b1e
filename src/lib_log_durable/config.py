"""Optional ``.env`` loading for CLI and host entry points.

Purpose
-------
Let operators keep ``LOG_DURABLE_*`` settings in a ``.env`` file next to the
service. Loading is opt-in (``--use-dotenv`` or ``LOG_DURABLE_USE_DOTENV``)
and never overrides variables already present in the environment.

Contents
--------
* :data:`DOTENV_ENV_VAR` - toggle variable name.
* :func:`should_use_dotenv` - precedence between CLI flag and environment.
* :func:`enable_dotenv` - locate and load the nearest ``.env`` file.
"""

from __future__ import annotations

from pathlib import Path

from dotenv import find_dotenv, load_dotenv

DOTENV_ENV_VAR = "LOG_DURABLE_USE_DOTENV"

_TRUTHY = {"1", "true", "yes", "on"}

_LOADED_PATH: Path | None = None


def should_use_dotenv(*, explicit: bool | None, env_value: str | None) -> bool:
    """Return whether ``.env`` should be loaded; an explicit flag wins.

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
    """Load the nearest ``.env`` walking upwards from ``search_from`` (cwd).

    Existing environment variables keep precedence. Returns the resolved path
    of the loaded file, or ``None`` when no file was found.
    """

    global _LOADED_PATH
    if search_from is not None:
        candidate = _search_upwards(search_from)
    else:
        found = find_dotenv(usecwd=True)
        candidate = Path(found).resolve() if found else None
    if candidate is None:
        return None
    if candidate != _LOADED_PATH:
        load_dotenv(candidate, override=False)
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
    """Forget which ``.env`` file was loaded."""

    global _LOADED_PATH
    _LOADED_PATH = None


__all__ = ["DOTENV_ENV_VAR", "enable_dotenv", "should_use_dotenv"]
