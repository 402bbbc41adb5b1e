"""Sinks forwarding events to structured logging backends."""

from __future__ import annotations

from .stdlib_logging import StdlibLoggingSink

__all__ = ["StdlibLoggingSink"]
