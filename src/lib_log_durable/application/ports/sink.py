"""Sink port describing durable publication of flushed events.

Purpose
-------
Define the boundary between the flush engine and whatever makes log events
durable, so the engine only depends on the input contract of the sink.

Contents
--------
* :class:`PublicationSinkPort` - runtime-checkable protocol with ``publish``.

System Role
-----------
Implementations must keep accepted events durable even when the unit of work
that produced them later fails or rolls back, and must preserve batch order.
The engine treats ``publish`` as fire-and-forget: any return value is ignored
and any exception propagates to the logging caller.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from lib_log_durable.domain.events import LogEvent


@runtime_checkable
class PublicationSinkPort(Protocol):
    """Accept a batch of events and guarantee their eventual durability."""

    def publish(self, events: Sequence[LogEvent]) -> None:
        """Durably accept ``events`` in the given order."""


__all__ = ["PublicationSinkPort"]
