"""In-memory publication sink.

Purpose
-------
Keep published batches in process memory. Useful for tests, demos and as the
hand-off point for hosts that persist events themselves after the unit of
work has finished.

Contents
--------
* :class:`InMemorySink` - thread-safe :class:`PublicationSinkPort`.
"""

from __future__ import annotations

import threading
from collections.abc import Sequence

from lib_log_durable.application.ports.sink import PublicationSinkPort
from lib_log_durable.domain.events import LogEvent
from lib_log_durable.domain.record import LogRecord


class InMemorySink(PublicationSinkPort):
    """Store each published batch, preserving order.

    A single sink may be shared by many loggers, so access is serialised with
    a lock.

    Examples
    --------
    >>> from datetime import datetime, timezone
    >>> from lib_log_durable.domain.levels import LogLevel
    >>> sink = InMemorySink()
    >>> event = LogEvent('id', datetime(2025, 9, 30, 12, 0, tzinfo=timezone.utc), 'app.run', None, 'msg', LogLevel.INFO)
    >>> sink.publish([event])
    >>> len(sink.batches), sink.records()[0].message
    (1, 'msg')
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._batches: list[tuple[LogEvent, ...]] = []

    def publish(self, events: Sequence[LogEvent]) -> None:
        batch = tuple(events)
        with self._lock:
            self._batches.append(batch)

    @property
    def batches(self) -> list[tuple[LogEvent, ...]]:
        """Return a copy of every published batch in publication order."""

        with self._lock:
            return list(self._batches)

    @property
    def events(self) -> list[LogEvent]:
        """Return all published events flattened across batches."""

        with self._lock:
            return [event for batch in self._batches for event in batch]

    def records(self) -> list[LogRecord]:
        """Materialise the long-term record shape of every published event."""

        return [event.to_record() for event in self.events]

    def clear(self) -> None:
        with self._lock:
            self._batches.clear()

    def __len__(self) -> int:
        with self._lock:
            return sum(len(batch) for batch in self._batches)


__all__ = ["InMemorySink"]
