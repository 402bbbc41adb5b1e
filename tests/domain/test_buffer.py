from __future__ import annotations

import pytest

from lib_log_durable.domain import BufferState, LogBuffer, LogRecord


def _records(*messages: str) -> list[LogRecord]:
    return [LogRecord(message=message) for message in messages]


def test_new_buffer_is_idle() -> None:
    buffer = LogBuffer()

    assert buffer.state is BufferState.IDLE
    assert buffer.is_empty()
    assert len(buffer) == 0


def test_append_preserves_call_order() -> None:
    buffer = LogBuffer()
    for record in _records("a", "b", "c"):
        buffer.append(record)

    assert buffer.state is BufferState.PENDING
    assert [record.message for record in buffer] == ["a", "b", "c"]


def test_drain_into_clears_only_after_consumer_succeeds() -> None:
    buffer = LogBuffer(_records("a", "b"))
    seen: list[list[str]] = []

    def consumer(batch: list[LogRecord]) -> int:
        assert len(buffer) == 2
        seen.append([record.message for record in batch])
        return len(batch)

    assert buffer.drain_into(consumer) == 2
    assert seen == [["a", "b"]]
    assert buffer.state is BufferState.IDLE


def test_drain_into_failure_keeps_every_record() -> None:
    buffer = LogBuffer(_records("a", "b"))

    def failing(batch: list[LogRecord]) -> None:
        raise ConnectionError("sink offline")

    with pytest.raises(ConnectionError):
        buffer.drain_into(failing)

    assert [record.message for record in buffer] == ["a", "b"]
    assert buffer.state is BufferState.PENDING


def test_records_appended_during_drain_survive() -> None:
    buffer = LogBuffer(_records("a"))

    def consumer(batch: list[LogRecord]) -> None:
        buffer.append(LogRecord(message="late"))

    buffer.drain_into(consumer)

    assert [record.message for record in buffer] == ["late"]


def test_consumer_clearing_the_buffer_does_not_break_drain() -> None:
    buffer = LogBuffer(_records("a", "b"))

    def consumer(batch: list[LogRecord]) -> int:
        buffer.clear()
        buffer.append(LogRecord(message="late"))
        return len(batch)

    assert buffer.drain_into(consumer) == 2
    assert [record.message for record in buffer] == ["late"]


def test_snapshot_is_a_copy() -> None:
    buffer = LogBuffer(_records("a"))

    snapshot = buffer.snapshot()
    snapshot.clear()

    assert len(buffer) == 1
