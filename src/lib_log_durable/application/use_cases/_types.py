"""Shared callable signatures for the use-case factories."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Protocol

from lib_log_durable.domain.levels import LogLevel
from lib_log_durable.domain.record import LogRecord

DiagnosticHook = Callable[[str, dict[str, Any]], None] | None
FlushResult = dict[str, Any]


class BuildRecordCallable(Protocol):
    def __call__(
        self,
        subject: Any,
        level: LogLevel,
        *,
        reference_id: str | None = None,
        caller_id: str | None = None,
    ) -> LogRecord | None: ...


class FlushCallable(Protocol):
    def __call__(self) -> FlushResult: ...


__all__ = ["BuildRecordCallable", "DiagnosticHook", "FlushCallable", "FlushResult"]
