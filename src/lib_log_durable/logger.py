"""Per-unit-of-work logger owning a private buffer.

Purpose
-------
Expose the ergonomic logging API (``info``/``warn``/``error``, exchange
logging, conditional logging, ``flush``) on top of the record builder and
flush use cases.

Contents
--------
* :class:`DurableLogger` - buffer owner with immediate or deferred mode.
* :func:`coerce_level` - accept level names as well as :class:`LogLevel`.

System Role
-----------
One instance is created per logical unit of work (request, job, batch run).
Instances never share buffers. In immediate mode every accepted record is
flushed before the logging call returns; in deferred mode records stay
pending until :meth:`DurableLogger.flush` is called, typically after the
workflow's blocking external calls have completed.
"""

from __future__ import annotations

import logging
from types import TracebackType
from typing import Any

from .adapters.caller import StackCallerResolver
from .adapters.clock import SystemClock, UuidProvider
from .adapters.identity import SystemPrincipalProvider
from .adapters.level_gate import ThresholdLevelGate
from .application.ports import (
    CallerResolverPort,
    ClockPort,
    IdProvider,
    LevelGatePort,
    PrincipalProviderPort,
    PublicationSinkPort,
)
from .application.use_cases import create_build_record, create_flush
from .application.use_cases._diagnostics import build_diagnostic_emitter
from .application.use_cases._types import DiagnosticHook, FlushResult
from .domain import BufferState, Formatter, LogBuffer, LogLevel, LogRecord, pair_exchange

logger = logging.getLogger(__name__)


def coerce_level(level: str | LogLevel) -> LogLevel:
    """Normalise level inputs (string or enum) into :class:`LogLevel`.

    Examples
    --------
    >>> coerce_level("warning") is LogLevel.WARN
    True
    >>> coerce_level(LogLevel.ERROR) is LogLevel.ERROR
    True
    """
    if isinstance(level, LogLevel):
        return level
    return LogLevel.from_name(level)


class DurableLogger:
    """Buffer log records and commit them immediately or in a deferred batch.

    Parameters
    ----------
    sink:
        Durable publication sink receiving flushed batches.
    immediate:
        ``True`` flushes after every accepted record; ``False`` defers until
        :meth:`flush`.
    caller_resolver, level_gate, principal, clock, id_provider:
        Collaborators; system defaults are used when omitted (stack
        introspection, every level enabled, OS account, UTC clock, UUID4).
    formatter:
        Renderer for errors and exchanges.
    diagnostic:
        Optional ``(name, payload)`` hook receiving pipeline milestones.

    Examples
    --------
    >>> from lib_log_durable.adapters import InMemorySink, StaticPrincipalProvider
    >>> sink = InMemorySink()
    >>> log = DurableLogger(sink=sink, immediate=False, principal=StaticPrincipalProvider('alice'))
    >>> _ = log.info('reserved stock', reference_id='order-7')
    >>> len(sink), len(log.pending)
    (0, 1)
    >>> log.flush()
    {'ok': True, 'flushed': 1}
    >>> sink.events[0].user_id, sink.events[0].reference_id
    ('alice', 'order-7')
    """

    def __init__(
        self,
        *,
        sink: PublicationSinkPort,
        immediate: bool = True,
        caller_resolver: CallerResolverPort | None = None,
        level_gate: LevelGatePort | None = None,
        principal: PrincipalProviderPort | None = None,
        clock: ClockPort | None = None,
        id_provider: IdProvider | None = None,
        formatter: Formatter | None = None,
        diagnostic: DiagnosticHook = None,
    ) -> None:
        self._immediate = immediate
        self._buffer = LogBuffer()
        self._formatter = formatter or Formatter()
        self._emit = build_diagnostic_emitter(diagnostic)
        self._build = create_build_record(
            caller_resolver=caller_resolver or StackCallerResolver(),
            level_gate=level_gate or ThresholdLevelGate(LogLevel.INFO),
            formatter=self._formatter,
            diagnostic=diagnostic,
        )
        self._flush = create_flush(
            buffer=self._buffer,
            sink=sink,
            principal=principal or SystemPrincipalProvider(),
            clock=clock or SystemClock(),
            id_provider=id_provider or UuidProvider(),
            diagnostic=diagnostic,
        )

    @property
    def immediate(self) -> bool:
        return self._immediate

    @property
    def formatter(self) -> Formatter:
        return self._formatter

    @property
    def state(self) -> BufferState:
        """``IDLE`` when nothing is pending, ``PENDING`` otherwise."""

        return self._buffer.state

    @property
    def pending(self) -> tuple[LogRecord, ...]:
        """Records accepted but not yet flushed, oldest first."""

        return tuple(self._buffer)

    def log(
        self,
        level: str | LogLevel,
        subject: Any,
        reference_id: str | None = None,
        *,
        caller_id: str | None = None,
    ) -> LogRecord | None:
        """Build a record from ``subject`` and route it through the buffer.

        ``subject`` may be a message string, a pre-built :class:`LogRecord`,
        an exception, or a client/server exchange. Returns the accepted record,
        or ``None`` when the level is disabled.
        """

        record = self._build(subject, coerce_level(level), reference_id=reference_id, caller_id=caller_id)
        if record is None:
            return None
        self._accept(record)
        return record

    def info(self, subject: Any, reference_id: str | None = None) -> LogRecord | None:
        return self.log(LogLevel.INFO, subject, reference_id)

    def warn(self, subject: Any, reference_id: str | None = None) -> LogRecord | None:
        return self.log(LogLevel.WARN, subject, reference_id)

    warning = warn

    def error(self, subject: Any, reference_id: str | None = None) -> LogRecord | None:
        return self.log(LogLevel.ERROR, subject, reference_id)

    def exchange(
        self,
        level: str | LogLevel,
        request: Any,
        response: Any,
        reference_id: str | None = None,
    ) -> LogRecord | None:
        """Log a raw request/response pair; either side may be ``None``."""

        return self.log(level, pair_exchange(request, response), reference_id)

    def assert_or_log(self, condition: Any, record: LogRecord) -> LogRecord | None:
        """Route ``record`` at ERROR level when ``condition`` is falsy.

        Examples
        --------
        >>> from lib_log_durable.adapters import InMemorySink
        >>> log = DurableLogger(sink=InMemorySink())
        >>> log.assert_or_log(True, LogRecord(message='fine')) is None
        True
        >>> log.assert_or_log(False, LogRecord(message='stock below zero')).level
        <LogLevel.ERROR: 40>
        """

        if condition:
            return None
        return self.log(LogLevel.ERROR, record)

    def flush(self) -> FlushResult:
        """Publish every pending record as one batch; no-op when idle."""

        return self._flush()

    def discard(self) -> int:
        """Drop pending records without publishing them; return how many."""

        dropped = len(self._buffer)
        self._buffer.clear()
        return dropped

    def __enter__(self) -> "DurableLogger":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        try:
            self.flush()
        except Exception:
            if exc_type is None:
                raise
            logger.debug("flush after failed unit of work raised; keeping %d records pending", len(self._buffer), exc_info=True)

    def _accept(self, record: LogRecord) -> None:
        self._buffer.append(record)
        self._emit("record_buffered", {"level": record.level.name, "caller_id": record.caller_id})
        if self._immediate:
            self.flush()


__all__ = ["DurableLogger", "coerce_level"]
