"""Port resolving the function that initiated a logging call."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class CallerResolverPort(Protocol):
    """Return an opaque identifier for the frame that invoked the logger."""

    def current_caller_id(self) -> str:
        """Return the qualified name of the invoking function; safe at any depth."""


__all__ = ["CallerResolverPort"]
