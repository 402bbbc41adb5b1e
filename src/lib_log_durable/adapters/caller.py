"""Stack-introspecting caller resolver.

Purpose
-------
Identify the function that issued a logging call by walking the interpreter
stack past the logger's own frames.

Contents
--------
* :data:`DEFAULT_IGNORED_PREFIXES` - module prefixes treated as internal.
* :class:`StackCallerResolver` - concrete :class:`CallerResolverPort`.
"""

from __future__ import annotations

import sys
from collections.abc import Iterable
from types import FrameType

from lib_log_durable.application.ports.caller import CallerResolverPort


DEFAULT_IGNORED_PREFIXES: tuple[str, ...] = (
    "lib_log_durable.logger",
    "lib_log_durable.application",
    "lib_log_durable.adapters",
    "lib_log_durable.runtime",
    "contextlib",
)

UNKNOWN_CALLER = "<unknown>"


def _frame_identifier(frame: FrameType) -> str:
    module = frame.f_globals.get("__name__", "")
    code = frame.f_code
    qualname = getattr(code, "co_qualname", code.co_name)
    return f"{module}.{qualname}" if module else qualname


class StackCallerResolver(CallerResolverPort):
    """Return ``module.qualname`` of the first frame outside the logger.

    Examples
    --------
    >>> def checkout():
    ...     return StackCallerResolver(ignored_prefixes=()).current_caller_id()
    >>> checkout().endswith('checkout')
    True
    """

    def __init__(self, *, ignored_prefixes: Iterable[str] = DEFAULT_IGNORED_PREFIXES) -> None:
        self._ignored = tuple(ignored_prefixes)

    def current_caller_id(self) -> str:
        frame: FrameType | None = sys._getframe(1)
        try:
            while frame is not None:
                module = frame.f_globals.get("__name__", "")
                if not self._is_ignored(module):
                    return _frame_identifier(frame)
                frame = frame.f_back
            return UNKNOWN_CALLER
        finally:
            del frame

    def _is_ignored(self, module: str) -> bool:
        return any(module == prefix or module.startswith(prefix + ".") for prefix in self._ignored)


__all__ = ["DEFAULT_IGNORED_PREFIXES", "StackCallerResolver", "UNKNOWN_CALLER"]
