"""Rich-powered console sink implementing :class:`PublicationSinkPort`.

Purpose
-------
Print flushed events to a terminal with per-level styling. Intended for
development, demos and CLI tools; it gives no durability beyond the terminal.

Contents
--------
* :data:`_STYLE_MAP` - default level-to-style mapping.
* :class:`RichConsoleSink` - sink constructed by the runtime when the console
  sink is selected.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Mapping, MutableMapping

from rich.console import Console

from lib_log_durable.application.ports.sink import PublicationSinkPort
from lib_log_durable.domain.events import LogEvent
from lib_log_durable.domain.levels import LogLevel

from .._formatting import render_line


#: Default Rich styles keyed by :class:`LogLevel`.
_STYLE_MAP: Mapping[LogLevel, str] = {
    LogLevel.INFO: "cyan",
    LogLevel.WARN: "yellow",
    LogLevel.ERROR: "bold red",
}


class RichConsoleSink(PublicationSinkPort):
    """Render published batches using Rich formatting with style overrides."""

    def __init__(
        self,
        *,
        console: Console | None = None,
        force_color: bool = False,
        no_color: bool = False,
        styles: MutableMapping[LogLevel | str, str] | None = None,
        template: str | None = None,
    ) -> None:
        """Configure the sink with colour, style and template overrides."""
        if console is not None:
            self._console = console
        else:
            self._console = Console(force_terminal=force_color, no_color=no_color)
        self._no_color = no_color
        self._template = template
        merged = dict(_STYLE_MAP)
        for key, value in (styles or {}).items():
            level = LogLevel.from_name(key) if isinstance(key, str) else key
            merged[level] = value
        self._style_map = merged

    def publish(self, events: Sequence[LogEvent]) -> None:
        """Print every event of the batch in order.

        Examples
        --------
        >>> from datetime import datetime, timezone
        >>> from io import StringIO
        >>> event = LogEvent('id', datetime(2025, 9, 30, 12, 0, tzinfo=timezone.utc), 'app.run', None, 'msg', LogLevel.INFO)
        >>> console = Console(file=StringIO(), record=True)
        >>> RichConsoleSink(console=console).publish([event])
        >>> 'msg' in console.export_text()
        True
        """
        for event in events:
            style = "" if self._no_color else self._style_map.get(event.level, "")
            self._console.print(render_line(event, self._template), style=style, highlight=False, markup=False, soft_wrap=True)


__all__ = ["RichConsoleSink"]
