"""Use case handing buffered records to the durable publication sink.

Purpose
-------
Turn every pending :class:`LogRecord` into a :class:`LogEvent` stamped with
the acting principal, publish the whole batch in one call, and clear the
buffer only once the sink has accepted it.

Contents
--------
* :func:`create_flush` factory returning the flush callable.

System Role
-----------
The commit step of the buffer/flush engine. Publication failures are owned by
the sink: they propagate to the caller untouched and the buffer keeps every
record for a later attempt. There are no internal retries.
"""

from __future__ import annotations

import logging

from lib_log_durable.application.ports import ClockPort, IdProvider, PrincipalProviderPort, PublicationSinkPort
from lib_log_durable.domain import LogBuffer, LogEvent, LogRecord

from ._diagnostics import build_diagnostic_emitter
from ._types import DiagnosticHook, FlushCallable, FlushResult

logger = logging.getLogger(__name__)


def create_flush(
    *,
    buffer: LogBuffer,
    sink: PublicationSinkPort,
    principal: PrincipalProviderPort,
    clock: ClockPort,
    id_provider: IdProvider,
    diagnostic: DiagnosticHook = None,
) -> FlushCallable:
    """Build the flush callable bound to ``buffer`` and ``sink``.

    Returns
    -------
    Callable[[], dict[str, Any]]
        Flush function returning ``{"ok": True, "flushed": n}``. Flushing an
        empty buffer does not touch the sink and reports ``flushed == 0``.

    Examples
    --------
    >>> from datetime import datetime, timezone
    >>> class Sink:
    ...     def __init__(self):
    ...         self.batches = []
    ...     def publish(self, events):
    ...         self.batches.append([event.message for event in events])
    >>> class Principal:
    ...     def current_principal(self):
    ...         return 'user-1'
    >>> class Clock:
    ...     def now(self):
    ...         return datetime(2025, 9, 30, 12, 0, tzinfo=timezone.utc)
    >>> buffer = LogBuffer([LogRecord(message='first'), LogRecord(message='second')])
    >>> sink = Sink()
    >>> flush = create_flush(buffer=buffer, sink=sink, principal=Principal(), clock=Clock(), id_provider=lambda: 'evt')
    >>> flush()
    {'ok': True, 'flushed': 2}
    >>> sink.batches
    [['first', 'second']]
    >>> flush()
    {'ok': True, 'flushed': 0}
    """

    emit = build_diagnostic_emitter(diagnostic)

    def _publish(records: list[LogRecord]) -> int:
        user_id = principal.current_principal()
        timestamp = clock.now()
        events = [
            LogEvent.from_record(record, event_id=id_provider(), timestamp=timestamp, user_id=user_id)
            for record in records
        ]
        sink.publish(events)
        return len(events)

    def flush() -> FlushResult:
        if buffer.is_empty():
            return {"ok": True, "flushed": 0}
        pending = len(buffer)
        try:
            flushed = buffer.drain_into(_publish)
        except Exception as exc:
            logger.debug("flush of %d records failed: %s", pending, exc)
            emit("flush_failed", {"pending": pending, "error": type(exc).__name__})
            raise
        logger.debug("flushed %d records", flushed)
        emit("flush_completed", {"flushed": flushed})
        return {"ok": True, "flushed": flushed}

    return flush


__all__ = ["create_flush"]
