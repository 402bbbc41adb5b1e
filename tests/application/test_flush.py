from __future__ import annotations

from datetime import datetime, timezone

import pytest

from fakes import FixedClock, RecordingSink, SequentialIds, StaticPrincipal
from lib_log_durable.application.use_cases import create_flush
from lib_log_durable.domain import LogBuffer, LogLevel, LogRecord


def _flush(buffer: LogBuffer, sink: RecordingSink, principal: StaticPrincipal | None = None, diagnostic=None):  # noqa: ANN001, ANN202
    return create_flush(
        buffer=buffer,
        sink=sink,
        principal=principal or StaticPrincipal("alice"),
        clock=FixedClock(),
        id_provider=SequentialIds(),
        diagnostic=diagnostic,
    )


def _buffer(*messages: str) -> LogBuffer:
    return LogBuffer([LogRecord(caller_id="app.run", message=message, level=LogLevel.WARN) for message in messages])


def test_flush_publishes_whole_buffer_as_one_ordered_batch(recording_sink: RecordingSink) -> None:
    buffer = _buffer("a", "b", "c")

    result = _flush(buffer, recording_sink)()

    assert result == {"ok": True, "flushed": 3}
    assert len(recording_sink.batches) == 1
    assert recording_sink.messages == ["a", "b", "c"]
    assert buffer.is_empty()


def test_flush_stamps_principal_time_and_ids(recording_sink: RecordingSink) -> None:
    _flush(_buffer("a", "b"), recording_sink, StaticPrincipal("bob"))()

    events = recording_sink.events
    assert {event.user_id for event in events} == {"bob"}
    assert {event.timestamp for event in events} == {datetime(2025, 9, 30, 12, 0, tzinfo=timezone.utc)}
    assert [event.event_id for event in events] == ["evt-001", "evt-002"]
    assert events[0].caller_id == "app.run"
    assert events[0].level is LogLevel.WARN


def test_principal_is_read_once_per_flush(recording_sink: RecordingSink) -> None:
    principal = StaticPrincipal("alice")

    _flush(_buffer("a", "b", "c"), recording_sink, principal)()

    assert principal.calls == 1


def test_empty_flush_does_not_touch_the_sink(recording_sink: RecordingSink) -> None:
    flush = _flush(LogBuffer(), recording_sink)

    assert flush() == {"ok": True, "flushed": 0}
    assert recording_sink.batches == []


def test_second_flush_is_a_no_op(recording_sink: RecordingSink) -> None:
    flush = _flush(_buffer("a"), recording_sink)

    flush()
    assert flush() == {"ok": True, "flushed": 0}
    assert len(recording_sink.batches) == 1


def test_sink_failure_propagates_and_keeps_buffer(recording_sink: RecordingSink) -> None:
    buffer = _buffer("a", "b")
    diagnostics: list[tuple[str, dict]] = []
    flush = _flush(buffer, recording_sink, diagnostic=lambda name, payload: diagnostics.append((name, payload)))
    recording_sink.fail_with = ConnectionError("database unavailable")

    with pytest.raises(ConnectionError, match="database unavailable"):
        flush()

    assert [record.message for record in buffer] == ["a", "b"]
    assert diagnostics == [("flush_failed", {"pending": 2, "error": "ConnectionError"})]

    recording_sink.fail_with = None
    assert flush() == {"ok": True, "flushed": 2}
    assert recording_sink.messages == ["a", "b"]
    assert diagnostics[-1] == ("flush_completed", {"flushed": 2})


def test_buffered_records_are_not_mutated_by_stamping(recording_sink: RecordingSink) -> None:
    record = LogRecord(message="a")
    buffer = LogBuffer([record])

    _flush(buffer, recording_sink)()

    assert record.user_id is None
    assert recording_sink.events[0].user_id == "alice"
