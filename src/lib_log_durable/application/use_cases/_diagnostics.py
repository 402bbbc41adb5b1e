"""Diagnostic hook plumbing shared by the use cases."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from ._types import DiagnosticHook

logger = logging.getLogger(__name__)


def build_diagnostic_emitter(diagnostic: DiagnosticHook) -> Callable[[str, dict[str, Any]], None]:
    """Wrap ``diagnostic`` so hook failures are logged and never propagate.

    Examples
    --------
    >>> seen = []
    >>> emit = build_diagnostic_emitter(lambda name, payload: seen.append((name, payload)))
    >>> emit("flush_completed", {"flushed": 2})
    >>> seen
    [('flush_completed', {'flushed': 2})]
    >>> build_diagnostic_emitter(None)("ignored", {})
    """

    if diagnostic is None:

        def _noop(name: str, payload: dict[str, Any]) -> None:
            return None

        return _noop

    def _emit(name: str, payload: dict[str, Any]) -> None:
        try:
            diagnostic(name, payload)
        except Exception:
            logger.exception("diagnostic hook failed for %s", name)

    return _emit


__all__ = ["build_diagnostic_emitter"]
