"""Utilities that normalise log events into template-friendly dictionaries.

Why
---
The console sink and the stdlib logging bridge accept the same
``str.format`` placeholders. Producing the payload in one place keeps both
sinks in sync.

Contents
--------
* :data:`DEFAULT_TEMPLATE` - line layout used when no template is configured.
* :func:`build_format_payload` - generate placeholder values for a log event.
* :func:`render_line` - apply a template to an event.
"""

from __future__ import annotations

from typing import Any

from lib_log_durable.domain.events import LogEvent


DEFAULT_TEMPLATE = "{timestamp} {level_icon} {LEVEL:>5} {caller_id} - {message}{context_fields}"


def build_format_payload(event: LogEvent) -> dict[str, Any]:
    """Return the mapping of placeholders exposed to format templates."""

    pairs = {"reference_id": event.reference_id, "user_id": event.user_id}
    present = {key: value for key, value in pairs.items() if value}
    context_fields = ""
    if present:
        context_fields = " " + " ".join(f"{key}={value}" for key, value in sorted(present.items()))

    level_text = event.level.name

    return {
        "timestamp": event.timestamp.isoformat(),
        "YYYY": f"{event.timestamp.year:04d}",
        "MM": f"{event.timestamp.month:02d}",
        "DD": f"{event.timestamp.day:02d}",
        "hh": f"{event.timestamp.hour:02d}",
        "mm": f"{event.timestamp.minute:02d}",
        "ss": f"{event.timestamp.second:02d}",
        "level": event.level.severity,
        "LEVEL": level_text,
        "level_icon": event.level.icon,
        "event_id": event.event_id,
        "caller_id": event.caller_id,
        "reference_id": event.reference_id or "",
        "user_id": event.user_id or "",
        "message": event.message,
        "context_fields": context_fields,
    }


def render_line(event: LogEvent, template: str | None = None) -> str:
    """Render ``event`` with ``template`` (or :data:`DEFAULT_TEMPLATE`).

    Examples
    --------
    >>> from datetime import datetime, timezone
    >>> from lib_log_durable.domain.levels import LogLevel
    >>> event = LogEvent('id', datetime(2025, 9, 30, 12, 0, tzinfo=timezone.utc), 'app.run', 'ref-1', 'msg', LogLevel.INFO, 'alice')
    >>> render_line(event, "{LEVEL} {caller_id} {message}{context_fields}")
    'INFO app.run msg reference_id=ref-1 user_id=alice'
    """

    return (template or DEFAULT_TEMPLATE).format(**build_format_payload(event))


__all__ = ["DEFAULT_TEMPLATE", "build_format_payload", "render_line"]
