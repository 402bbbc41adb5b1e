"""Default clock and identifier providers."""

from __future__ import annotations

from datetime import datetime, timezone
from uuid import uuid4

from lib_log_durable.application.ports.time import ClockPort, IdProvider


class SystemClock(ClockPort):
    """Concrete clock port returning timezone-aware UTC timestamps."""

    def now(self) -> datetime:
        """Return the current UTC timestamp with timezone info."""
        return datetime.now(timezone.utc)


class UuidProvider(IdProvider):
    """Generate hexadecimal identifiers for log events."""

    def __call__(self) -> str:
        """Return a random UUID4 value encoded as a lowercase hex string."""
        return uuid4().hex


__all__ = ["SystemClock", "UuidProvider"]
