"""Shutdown orchestration for the logging runtime.

Purpose
-------
Flush whatever deferred loggers still hold when the host shuts the runtime
down in an orderly way. Abrupt termination still loses deferred records.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import Protocol


logger = logging.getLogger(__name__)


class _Flushable(Protocol):
    def flush(self) -> dict: ...


def create_shutdown(*, loggers: Callable[[], Iterable[_Flushable]]) -> Callable[[], int]:
    """Return a callable flushing every live logger; it reports the record count.

    Examples
    --------
    >>> class Pending:
    ...     def flush(self):
    ...         return {'ok': True, 'flushed': 3}
    >>> create_shutdown(loggers=lambda: [Pending(), Pending()])()
    6
    """

    def shutdown() -> int:
        """Flush pending records of every live logger."""
        total = 0
        for live in list(loggers()):
            result = live.flush()
            total += int(result.get("flushed", 0))
        if total:
            logger.debug("shutdown flushed %d pending records", total)
        return total

    return shutdown


__all__ = ["create_shutdown"]
