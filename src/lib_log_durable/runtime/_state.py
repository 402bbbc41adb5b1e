"""Process-wide holder for the composed logging runtime.

Only the façade in :mod:`lib_log_durable.runtime` installs or removes the
runtime; everything else reads it through :func:`current_runtime`.
"""

from __future__ import annotations

import weakref
from dataclasses import dataclass, field
from threading import RLock
from typing import Callable

from lib_log_durable.application.ports import (
    CallerResolverPort,
    LevelGatePort,
    PrincipalProviderPort,
    PublicationSinkPort,
)
from lib_log_durable.domain import PrincipalBinder
from lib_log_durable.logger import DurableLogger


@dataclass(slots=True)
class LoggingRuntime:
    """Shared collaborators plus the factory handing out per-unit loggers.

    ``loggers`` tracks handed-out loggers weakly so :attr:`shutdown` can flush
    whatever they still hold without keeping finished units of work alive.
    """

    binder: PrincipalBinder
    sink: PublicationSinkPort
    caller_resolver: CallerResolverPort
    level_gate: LevelGatePort
    principal: PrincipalProviderPort
    immediate: bool
    create_logger: Callable[[bool], DurableLogger]
    shutdown: Callable[[], int]
    loggers: "weakref.WeakSet[DurableLogger]" = field(default_factory=weakref.WeakSet)


_NOT_INITIALISED = "lib_log_durable.init() must be called before using the logging API"

_lock = RLock()
_installed: list[LoggingRuntime] = []


def set_runtime(runtime: LoggingRuntime) -> None:
    """Install ``runtime``, replacing any previous one."""

    with _lock:
        _installed[:] = [runtime]


def clear_runtime() -> None:
    with _lock:
        _installed.clear()


def current_runtime() -> LoggingRuntime:
    """Return the installed runtime; :class:`RuntimeError` when there is none."""

    with _lock:
        if not _installed:
            raise RuntimeError(_NOT_INITIALISED)
        return _installed[0]


def is_initialised() -> bool:
    with _lock:
        return bool(_installed)


__all__ = [
    "LoggingRuntime",
    "clear_runtime",
    "current_runtime",
    "is_initialised",
    "set_runtime",
]
