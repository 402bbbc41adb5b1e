"""Port supplying the acting principal stamped at flush time."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class PrincipalProviderPort(Protocol):
    """Resolve the user/principal on whose behalf records are flushed."""

    def current_principal(self) -> str | None:
        """Return the principal id, or ``None`` when it is unknown."""


__all__ = ["PrincipalProviderPort"]
