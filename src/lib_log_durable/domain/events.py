"""Transient publication message handed to durable sinks.

Purpose
-------
Provide an immutable, serialisable representation of a flushed log record.
The event is a write-ahead style message: sinks accept it, guarantee it
survives failures of the surrounding unit of work, and are responsible for
materialising the long-term record shape from it.

Contents
--------
* :class:`LogEvent` dataclass with helper methods.
* Utility function ``_ensure_aware`` for timestamp validation.

System Role
-----------
Sits in the domain layer, ensuring the flush engine and every sink adapter
manipulate pure data objects and keeping serialisation logic centralised.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from .levels import LogLevel
from .record import LogRecord


def _ensure_aware(ts: datetime) -> datetime:
    """Validate that ``ts`` is timezone-aware and normalise to UTC."""
    if ts.tzinfo is None or ts.tzinfo.utcoffset(ts) is None:
        raise ValueError("timestamp must be timezone-aware")
    return ts.astimezone(timezone.utc)


@dataclass(slots=True, frozen=True)
class LogEvent:
    """Immutable publication message built from a buffered :class:`LogRecord`.

    Attributes
    ----------
    event_id:
        Stable identifier used for deduplication by sinks.
    timestamp:
        Flush time in timezone-aware UTC.
    caller_id, reference_id, message, level:
        Copied verbatim from the source record.
    user_id:
        Acting principal stamped at flush time.
    """

    event_id: str
    timestamp: datetime
    caller_id: str
    reference_id: str | None
    message: str
    level: LogLevel
    user_id: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "timestamp", _ensure_aware(self.timestamp))
        if not self.event_id:
            raise ValueError("event_id must not be empty")

    @classmethod
    def from_record(
        cls,
        record: LogRecord,
        *,
        event_id: str,
        timestamp: datetime,
        user_id: str | None,
    ) -> "LogEvent":
        """Copy every field of ``record`` and stamp ``user_id``."""

        return cls(
            event_id=event_id,
            timestamp=timestamp,
            caller_id=record.caller_id,
            reference_id=record.reference_id,
            message=record.message,
            level=record.level,
            user_id=user_id,
        )

    def to_record(self) -> LogRecord:
        """Materialise the long-term record shape from this message."""

        return LogRecord(
            caller_id=self.caller_id,
            reference_id=self.reference_id,
            message=self.message,
            level=self.level,
            user_id=self.user_id,
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize the event to a dictionary with ISO8601 timestamps."""

        return {
            "event_id": self.event_id,
            "timestamp": self.timestamp.isoformat(),
            "caller_id": self.caller_id,
            "reference_id": self.reference_id,
            "message": self.message,
            "level": self.level.severity,
            "user_id": self.user_id,
        }

    def to_json(self) -> str:
        """Serialize the event to JSON with sorted keys for deterministic output."""

        return json.dumps(self.to_dict(), sort_keys=True)


__all__ = ["LogEvent"]
