"""Port deciding which severities produce records at all."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from lib_log_durable.domain.levels import LogLevel


@runtime_checkable
class LevelGatePort(Protocol):
    """Pure, cheap predicate consulted before any record is built."""

    def is_enabled(self, level: LogLevel) -> bool:
        """Return ``True`` when records of ``level`` should be created."""


__all__ = ["LevelGatePort"]
