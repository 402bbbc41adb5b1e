"""Text rendering for errors and protocol exchanges.

Purpose
-------
Turn non-string logging subjects into deterministic, human-readable,
multi-line text that becomes a :class:`LogRecord` message.

Contents
--------
* :class:`Formatter` - renders exceptions (with their cause chain) and
  client/server request-response pairs.
* :func:`safe_text` - ``str()`` that never raises.

System Role
-----------
Pure domain service used by the record builder. Nothing here raises on
malformed input: absent fields render as empty sections. An exception that
was never raised carries no traceback, so its location and stack trace come
from the call stack that is formatting it, minus this package's own frames.
"""

from __future__ import annotations

import os
import traceback
from collections.abc import Iterator, Mapping
from typing import Any

from .exchanges import ClientExchange, ServerExchange, ServerRequest, ServerResponse


CAUSE_SEPARATOR = "--- Caused by ---"

_PACKAGE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__))) + os.sep


def safe_text(value: Any) -> str:
    """Return ``str(value)`` or a placeholder when ``__str__`` itself fails.

    Examples
    --------
    >>> safe_text(None)
    ''
    >>> safe_text(b"caf\\xc3\\xa9")
    'café'
    >>> class Broken:
    ...     def __str__(self):
    ...         raise RuntimeError("nope")
    >>> safe_text(Broken())
    '<unprintable Broken>'
    """

    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8", errors="replace")
    try:
        return str(value)
    except Exception:
        return f"<unprintable {type(value).__name__}>"


def _qualified_type(error: BaseException) -> str:
    cls = type(error)
    module = cls.__module__
    if module in ("builtins", "__main__"):
        return cls.__qualname__
    return f"{module}.{cls.__qualname__}"


def _error_frames(error: BaseException) -> list[traceback.FrameSummary]:
    """Frames where ``error`` was raised, or the calling stack when it never was."""
    if error.__traceback__ is not None:
        return list(traceback.extract_tb(error.__traceback__))
    return [frame for frame in traceback.extract_stack() if not os.path.abspath(frame.filename).startswith(_PACKAGE_DIR)]


def _cause_chain(error: BaseException) -> Iterator[BaseException]:
    """Yield ``error`` followed by its explicit or implicit causes, cycle-free."""
    seen: set[int] = set()
    current: BaseException | None = error
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        yield current
        if current.__cause__ is not None:
            current = current.__cause__
        elif not current.__suppress_context__:
            current = current.__context__
        else:
            current = None


class Formatter:
    """Render errors and request/response pairs as canonical text.

    Examples
    --------
    >>> from lib_log_durable.domain.exchanges import ClientRequest
    >>> print(Formatter().format_exchange(ClientRequest(method="GET", endpoint="https://api.test/ping"), None))
    CLIENT REQUEST: GET https://api.test/ping
    Body:
    """

    def format(self, subject: Any, response: Any = None) -> str:
        """Route ``subject`` to :meth:`format_error` or :meth:`format_exchange`."""

        if isinstance(subject, BaseException):
            return self.format_error(subject)
        return self.format_exchange(subject, response)

    def format_error(self, error: BaseException | None) -> str:
        """Render ``error`` and its full cause chain.

        Each exception contributes ``Message``, ``Type``, ``Location`` and
        ``Stack trace`` sections; causes follow under :data:`CAUSE_SEPARATOR`.
        """

        if error is None:
            return ""
        blocks = [self._render_error(exc) for exc in _cause_chain(error)]
        return f"\n{CAUSE_SEPARATOR}\n".join(blocks)

    def format_exchange(self, request: Any, response: Any = None) -> str:
        """Render a client- or server-style pair; absent sides are omitted."""

        if isinstance(request, (ClientExchange, ServerExchange)):
            server = isinstance(request, ServerExchange)
            request, response = request.request, request.response
        else:
            server = isinstance(request, ServerRequest) or isinstance(response, ServerResponse)
        blocks: list[str] = []
        if server:
            if request is not None:
                blocks.append(self._render_server_request(request))
            if response is not None:
                blocks.append(self._render_response("SERVER RESPONSE", response))
        else:
            if request is not None:
                blocks.append(self._render_client_request(request))
            if response is not None:
                blocks.append(self._render_response("CLIENT RESPONSE", response))
        return "\n\n".join(blocks)

    @staticmethod
    def _render_error(error: BaseException) -> str:
        frames = _error_frames(error)
        location = ""
        if frames:
            last = frames[-1]
            location = f"{last.filename}:{last.lineno} in {last.name}"
        stack = "".join(traceback.format_list(frames)).rstrip("\n")
        lines = [
            f"Message: {safe_text(error)}",
            f"Type: {_qualified_type(error)}",
            f"Location: {location}",
            "Stack trace:",
        ]
        if stack:
            lines.append(stack)
        return "\n".join(lines)

    def _render_client_request(self, request: Any) -> str:
        status_line = _join(getattr(request, "method", None), getattr(request, "endpoint", None))
        lines = [_labelled("CLIENT REQUEST", status_line)]
        lines.extend(_render_mapping("Headers", getattr(request, "headers", None)))
        lines.extend(_render_body(getattr(request, "body", None)))
        return "\n".join(lines)

    def _render_server_request(self, request: Any) -> str:
        status_line = _join(getattr(request, "http_method", None), getattr(request, "request_uri", None))
        lines = [_labelled("SERVER REQUEST", status_line)]
        resource_path = getattr(request, "resource_path", None)
        if resource_path:
            lines.append(f"Resource: {safe_text(resource_path)}")
        remote_address = getattr(request, "remote_address", None)
        if remote_address:
            lines.append(f"Remote address: {safe_text(remote_address)}")
        lines.extend(_render_mapping("Headers", getattr(request, "headers", None)))
        lines.extend(_render_mapping("Parameters", getattr(request, "params", None)))
        lines.extend(_render_body(getattr(request, "body", None)))
        return "\n".join(lines)

    def _render_response(self, label: str, response: Any) -> str:
        status_line = _join(getattr(response, "status_code", None), getattr(response, "status", None))
        lines = [_labelled(label, status_line)]
        lines.extend(_render_mapping("Headers", getattr(response, "headers", None)))
        lines.extend(_render_body(getattr(response, "body", None)))
        return "\n".join(lines)


def _join(*parts: Any) -> str:
    return " ".join(text for text in (safe_text(part) for part in parts) if text)


def _labelled(label: str, status_line: str) -> str:
    return f"{label}: {status_line}" if status_line else f"{label}:"


def _render_mapping(title: str, mapping: Any) -> list[str]:
    if not isinstance(mapping, Mapping) or not mapping:
        return []
    lines = [f"{title}:"]
    for key in sorted(mapping, key=safe_text):
        lines.append(f"  {safe_text(key)}: {safe_text(mapping[key])}")
    return lines


def _render_body(body: Any) -> list[str]:
    text = safe_text(body)
    return ["Body:", text] if text else ["Body:"]


__all__ = ["CAUSE_SEPARATOR", "Formatter", "safe_text"]
