"""Use case normalising any supported logging subject into a :class:`LogRecord`.

Purpose
-------
Provide the single polymorphic "build record" operation: message strings,
pre-built records, exceptions and client/server exchanges all come out as the
same canonical record carrying the caller id and requested level.

Contents
--------
* :func:`create_build_record` factory returning the builder callable.

System Role
-----------
Application-layer step invoked by
:class:`~lib_log_durable.logger.DurableLogger` before a record enters the
buffer. The level gate is consulted first so disabled levels never pay for
caller resolution or message formatting.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from lib_log_durable.application.ports import CallerResolverPort, LevelGatePort
from lib_log_durable.domain import (
    ClientExchange,
    ErrorInput,
    Formatter,
    LogInput,
    LogLevel,
    LogRecord,
    MessageInput,
    PrebuiltInput,
    ServerExchange,
    as_log_input,
)

from ._diagnostics import build_diagnostic_emitter
from ._types import BuildRecordCallable, DiagnosticHook

logger = logging.getLogger(__name__)


def create_build_record(
    *,
    caller_resolver: CallerResolverPort,
    level_gate: LevelGatePort,
    formatter: Formatter | None = None,
    diagnostic: DiagnosticHook = None,
) -> BuildRecordCallable:
    """Build the record-builder callable capturing the given collaborators.

    Parameters
    ----------
    caller_resolver:
        Supplies the caller id when the logging call does not pass one.
    level_gate:
        Predicate consulted before any other work happens.
    formatter:
        Renders exceptions and exchanges; a fresh :class:`Formatter` when
        omitted.
    diagnostic:
        Optional callback receiving ``record_suppressed`` milestones.

    Returns
    -------
    Callable
        ``(subject, level, *, reference_id=None, caller_id=None)`` returning
        the built :class:`LogRecord`, or ``None`` when the level is disabled.

    Examples
    --------
    >>> class Caller:
    ...     def current_caller_id(self) -> str:
    ...         return 'orders.checkout'
    >>> class Gate:
    ...     def is_enabled(self, level: LogLevel) -> bool:
    ...         return level is not LogLevel.INFO
    >>> build = create_build_record(caller_resolver=Caller(), level_gate=Gate())
    >>> build('card declined', LogLevel.WARN, reference_id='order-7')
    LogRecord(caller_id='orders.checkout', reference_id='order-7', message='card declined', level=<LogLevel.WARN: 30>, user_id=None)
    >>> build('noise', LogLevel.INFO) is None
    True
    """

    return _RecordBuilder(
        _BuilderToolkit(
            caller_resolver=caller_resolver,
            level_gate=level_gate,
            formatter=formatter or Formatter(),
            emit=build_diagnostic_emitter(diagnostic),
        )
    )


@dataclass(frozen=True)
class _BuilderToolkit:
    caller_resolver: CallerResolverPort
    level_gate: LevelGatePort
    formatter: Formatter
    emit: Callable[[str, dict[str, Any]], None]


class _RecordBuilder(BuildRecordCallable):
    def __init__(self, toolkit: _BuilderToolkit) -> None:
        self._toolkit = toolkit

    def __call__(
        self,
        subject: Any,
        level: LogLevel,
        *,
        reference_id: str | None = None,
        caller_id: str | None = None,
    ) -> LogRecord | None:
        if not self._toolkit.level_gate.is_enabled(level):
            _note_suppressed(self._toolkit, level)
            return None
        resolved_caller = caller_id if caller_id else self._toolkit.caller_resolver.current_caller_id()
        log_input = as_log_input(subject)
        return _normalise(self._toolkit.formatter, log_input, level, resolved_caller or "", reference_id)


def _note_suppressed(toolkit: _BuilderToolkit, level: LogLevel) -> None:
    logger.debug("suppressed %s record; level disabled", level.name)
    toolkit.emit("record_suppressed", {"level": level.name})


def _normalise(
    formatter: Formatter,
    log_input: LogInput,
    level: LogLevel,
    caller_id: str,
    reference_id: str | None,
) -> LogRecord:
    if isinstance(log_input, PrebuiltInput):
        return log_input.record.replace(caller_id=caller_id, level=level)
    return LogRecord(
        caller_id=caller_id,
        reference_id=reference_id,
        message=_render(formatter, log_input),
        level=level,
    )


def _render(formatter: Formatter, log_input: LogInput) -> str:
    if isinstance(log_input, MessageInput):
        return log_input.text
    if isinstance(log_input, ErrorInput):
        return formatter.format_error(log_input.error)
    if isinstance(log_input, (ClientExchange, ServerExchange)):
        return formatter.format_exchange(log_input)
    raise TypeError(f"Unsupported log input: {type(log_input).__name__}")


__all__ = ["create_build_record"]
