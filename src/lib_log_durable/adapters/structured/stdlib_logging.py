"""Sink bridging flushed events into the stdlib :mod:`logging` tree.

Purpose
-------
Let hosts route durable log events through handlers they already operate
(files, syslog, log shippers) once a batch is flushed.

Contents
--------
* :class:`StdlibLoggingSink` - concrete :class:`PublicationSinkPort`.

System Role
-----------
Transforms :class:`LogEvent` objects into ``logging`` calls carrying the event
fields in ``extra`` under a ``durable_`` prefix so they never collide with
:class:`logging.LogRecord` attributes. ``durable_json`` holds the whole event
as sorted-key JSON for handlers that ship structured lines.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from lib_log_durable.application.ports.sink import PublicationSinkPort
from lib_log_durable.domain.events import LogEvent

from .._formatting import render_line


class StdlibLoggingSink(PublicationSinkPort):
    """Forward each event of a batch to a :class:`logging.Logger`."""

    def __init__(self, *, logger: logging.Logger | None = None, template: str | None = "{message}") -> None:
        """Initialise the sink with a target logger and message template."""
        self._logger = logger or logging.getLogger("lib_log_durable.events")
        self._template = template

    def publish(self, events: Sequence[LogEvent]) -> None:
        """Emit every event in order using the configured logger."""
        for event in events:
            self._logger.log(
                event.level.to_python_level(),
                render_line(event, self._template),
                extra=self._build_fields(event),
            )

    @staticmethod
    def _build_fields(event: LogEvent) -> dict[str, Any]:
        """Construct the ``extra`` mapping for ``event``.

        Examples
        --------
        >>> from datetime import datetime, timezone
        >>> from lib_log_durable.domain.levels import LogLevel
        >>> event = LogEvent('id', datetime(2025, 9, 30, 12, 0, tzinfo=timezone.utc), 'app.run', 'ref', 'msg', LogLevel.WARN, 'bob')
        >>> fields = StdlibLoggingSink._build_fields(event)
        >>> fields['durable_caller_id'], fields['durable_user_id']
        ('app.run', 'bob')
        """
        return {
            "durable_event_id": event.event_id,
            "durable_timestamp": event.timestamp.isoformat(),
            "durable_caller_id": event.caller_id,
            "durable_reference_id": event.reference_id,
            "durable_user_id": event.user_id,
            "durable_level": event.level.severity,
            "durable_json": event.to_json(),
        }


__all__ = ["StdlibLoggingSink"]
