"""FIFO buffer holding records that are not yet durable.

Purpose
-------
Keep accepted :class:`LogRecord` objects in call order until the owning
logger flushes them, and hand them off as one batch.

Contents
--------
* :class:`BufferState` - ``IDLE`` / ``PENDING`` marker.
* :class:`LogBuffer` - unbounded buffer with whole-batch-or-nothing draining.

System Role
-----------
Owned privately by a single :class:`~lib_log_durable.logger.DurableLogger`;
never shared between units of work, so no locking is involved.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Callable
from enum import Enum
from typing import Deque, Iterable, Iterator, TypeVar

from .record import LogRecord

T = TypeVar("T")


class BufferState(Enum):
    """Lifecycle marker of a :class:`LogBuffer`."""

    IDLE = "idle"
    PENDING = "pending"


class LogBuffer:
    """Unbounded FIFO of pending :class:`LogRecord` objects."""

    def __init__(self, records: Iterable[LogRecord] = ()) -> None:
        self._buffer: Deque[LogRecord] = deque(records)

    @property
    def state(self) -> BufferState:
        """Return ``PENDING`` while records wait for a flush."""

        return BufferState.PENDING if self._buffer else BufferState.IDLE

    def append(self, record: LogRecord) -> None:
        """Append ``record`` behind every record already buffered."""

        self._buffer.append(record)

    def snapshot(self) -> list[LogRecord]:
        """Return a copy of the current buffer contents, oldest first."""

        return list(self._buffer)

    def is_empty(self) -> bool:
        return not self._buffer

    def __iter__(self) -> Iterator[LogRecord]:
        """Iterate over buffered records from oldest to newest."""
        return iter(self._buffer)

    def __len__(self) -> int:
        """Return the number of records currently stored."""
        return len(self._buffer)

    def clear(self) -> None:
        """Drop all buffered records."""
        self._buffer.clear()

    def drain_into(self, consumer: Callable[[list[LogRecord]], T]) -> T:
        """Pass the snapshot to ``consumer`` and clear it only on success.

        If ``consumer`` raises, the buffer is left exactly as it was and the
        exception propagates. Records appended by ``consumer`` itself are kept;
records it already removed are not removed twice.

        Examples
        --------
        >>> buffer = LogBuffer([LogRecord(message="a"), LogRecord(message="b")])
        >>> buffer.drain_into(lambda batch: [r.message for r in batch])
        ['a', 'b']
        >>> len(buffer)
        0
        """

        batch = self.snapshot()
        result = consumer(batch)
        for record in batch:
            if not self._buffer or self._buffer[0] is not record:
                break
            self._buffer.popleft()
        return result


__all__ = ["BufferState", "LogBuffer"]
