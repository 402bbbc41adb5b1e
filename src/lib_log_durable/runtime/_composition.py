"""Runtime composition helpers wiring domain, application, and adapters.

Purpose
-------
Translate :class:`RuntimeSettings` into the live :class:`LoggingRuntime`
singleton. The helpers here keep wiring small, declarative, and testable.

Contents
--------
* Sink, level gate and principal selection.
* Logger factory sharing collaborators while giving every logger its own
  buffer.
"""

from __future__ import annotations

import weakref

from lib_log_durable.adapters import (
    BoundPrincipalProvider,
    InMemorySink,
    LevelSetGate,
    RichConsoleSink,
    StackCallerResolver,
    StaticPrincipalProvider,
    StdlibLoggingSink,
    SystemClock,
    SystemPrincipalProvider,
    ThresholdLevelGate,
    UuidProvider,
)
from lib_log_durable.application.ports import LevelGatePort, PrincipalProviderPort, PublicationSinkPort
from lib_log_durable.application.use_cases import create_shutdown
from lib_log_durable.domain import Formatter, PrincipalBinder
from lib_log_durable.logger import DurableLogger

from ._settings import ConsoleSettings, RuntimeSettings
from ._state import LoggingRuntime


def build_runtime(settings: RuntimeSettings) -> LoggingRuntime:
    """Assemble the logging runtime from resolved settings."""

    binder = PrincipalBinder()
    sink = select_sink(settings.sink, settings.console)
    caller_resolver = settings.caller_resolver or StackCallerResolver()
    level_gate = select_level_gate(settings)
    principal = select_principal(settings, binder)
    clock = SystemClock()
    id_provider = UuidProvider()
    formatter = Formatter()
    live: "weakref.WeakSet[DurableLogger]" = weakref.WeakSet()

    def create_logger(immediate: bool) -> DurableLogger:
        instance = DurableLogger(
            sink=sink,
            immediate=immediate,
            caller_resolver=caller_resolver,
            level_gate=level_gate,
            principal=principal,
            clock=clock,
            id_provider=id_provider,
            formatter=formatter,
            diagnostic=settings.diagnostic_hook,
        )
        live.add(instance)
        return instance

    return LoggingRuntime(
        binder=binder,
        sink=sink,
        caller_resolver=caller_resolver,
        level_gate=level_gate,
        principal=principal,
        immediate=settings.immediate,
        create_logger=create_logger,
        shutdown=create_shutdown(loggers=lambda: list(live)),
        loggers=live,
    )


def select_sink(sink: str | PublicationSinkPort, console: ConsoleSettings) -> PublicationSinkPort:
    """Return ``sink`` itself or build the named default sink."""

    if not isinstance(sink, str):
        return sink
    if sink == "console":
        return RichConsoleSink(
            force_color=console.force_color,
            no_color=console.no_color,
            styles=dict(console.styles),
            template=console.template,
        )
    if sink == "logging":
        return StdlibLoggingSink()
    return InMemorySink()


def select_level_gate(settings: RuntimeSettings) -> LevelGatePort:
    """Explicit gate, else per-level switches, else the threshold."""

    if settings.level_gate is not None:
        return settings.level_gate
    if settings.enabled_levels is not None:
        return LevelSetGate(settings.enabled_levels)
    return ThresholdLevelGate(settings.min_level)


def select_principal(settings: RuntimeSettings, binder: PrincipalBinder) -> PrincipalProviderPort:
    """Bound principal first, falling back to the configured or OS identity."""

    fallback: PrincipalProviderPort
    if settings.principal is not None:
        fallback = settings.principal
    elif settings.user_id is not None:
        fallback = StaticPrincipalProvider(settings.user_id)
    else:
        fallback = SystemPrincipalProvider()
    return BoundPrincipalProvider(binder, fallback=fallback)


__all__ = ["build_runtime", "select_level_gate", "select_principal", "select_sink"]
