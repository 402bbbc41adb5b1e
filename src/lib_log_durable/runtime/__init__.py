"""Runtime façade wiring the durable logging core.

Purpose
-------
Expose a stable entry point (``init``, ``get``, ``session``,
``bind_principal``, ``shutdown``) that host applications use instead of
assembling loggers by hand. Collaborators (sink, level gate, caller resolver,
principal provider) are shared process-wide; every logger handed out still
owns a private buffer.

Contents
--------
* ``init`` - composition root for assembling the runtime.
* ``get`` / ``session`` - per-unit-of-work logger accessors.
* ``bind_principal`` - scope the acting principal for the current flow.
* ``inspect_runtime`` - read-only snapshot of the active wiring.
* ``shutdown`` - flush pending deferred records and clear the runtime.
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Iterator

from lib_log_durable.domain import PrincipalContext
from lib_log_durable.logger import DurableLogger

from ._composition import build_runtime
from ._settings import RuntimeConfig, build_runtime_settings
from ._state import clear_runtime, current_runtime, is_initialised, set_runtime


@dataclass(frozen=True)
class RuntimeSnapshot:
    """Immutable view over the active logging runtime."""

    immediate: bool
    sink: str
    level_gate: str
    principal: str | None
    live_loggers: int


def init(config: RuntimeConfig | None = None, **overrides: Any) -> None:
    """Compose the logging runtime according to configuration inputs.

    Inputs
    ------
    config:
        Optional :class:`RuntimeConfig`; keyword ``overrides`` replace single
        fields of it. ``LOG_DURABLE_*`` environment variables win over both.

    Side Effects
    ------------
    Raises :class:`RuntimeError` if called while a runtime is already active.
    Raises :class:`ValueError` for invalid level or sink configuration.
    """

    if is_initialised():
        raise RuntimeError(
            "lib_log_durable.init() cannot be called twice without shutdown(); call lib_log_durable.shutdown() first",
        )
    settings = build_runtime_settings(config, **overrides)
    set_runtime(build_runtime(settings))


def get(immediate: bool | None = None) -> DurableLogger:
    """Return a new logger for one unit of work.

    ``immediate`` defaults to the runtime's configured mode. Raises
    :class:`RuntimeError` when :func:`init` has not been called.
    """

    runtime = current_runtime()
    mode = runtime.immediate if immediate is None else immediate
    return runtime.create_logger(mode)


@contextmanager
def session(immediate: bool = False) -> Iterator[DurableLogger]:
    """Yield a logger whose pending records are flushed when the block exits.

    When the block raises, pending records are still flushed before the
    exception propagates, so the record explaining the failure is durable.
    """

    with get(immediate=immediate) as logger:
        yield logger


@contextmanager
def bind_principal(user_id: str) -> Iterator[PrincipalContext]:
    """Bind ``user_id`` as the principal stamped on events flushed in scope."""

    runtime = current_runtime()
    with runtime.binder.bind(user_id) as context:
        yield context


def inspect_runtime() -> RuntimeSnapshot:
    """Return a read-only snapshot of the current runtime state."""

    runtime = current_runtime()
    return RuntimeSnapshot(
        immediate=runtime.immediate,
        sink=type(runtime.sink).__name__,
        level_gate=type(runtime.level_gate).__name__,
        principal=runtime.principal.current_principal(),
        live_loggers=len(runtime.loggers),
    )


def shutdown() -> int:
    """Flush every live logger's pending records and clear the runtime.

    Returns the number of records flushed. Raises :class:`RuntimeError` if
    :func:`init` has not been called. A sink failure propagates and leaves the
    runtime installed so the host can retry.
    """

    runtime = current_runtime()
    flushed = runtime.shutdown()
    clear_runtime()
    return flushed


__all__ = [
    "RuntimeConfig",
    "RuntimeSnapshot",
    "bind_principal",
    "get",
    "init",
    "inspect_runtime",
    "is_initialised",
    "session",
    "shutdown",
]
