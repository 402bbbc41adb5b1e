"""Principal binding built atop :mod:`contextvars`.

Purpose
-------
Track the acting principal (user or service account) for the current
execution flow so the flush engine can stamp it onto every published event
without threading it through each logging call.

Contents
--------
* :class:`PrincipalContext` - immutable frame describing the principal.
* :class:`PrincipalBinder` - stack manager with ``bind``/``current`` helpers.

System Role
-----------
Backs :class:`~lib_log_durable.adapters.identity.BoundPrincipalProvider`.
Concurrent request handlers each see their own frame because the stack lives
in a :class:`contextvars.ContextVar`.
"""

from __future__ import annotations

import contextvars
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator


@dataclass(slots=True, frozen=True)
class PrincipalContext:
    """Principal bound to one execution scope.

    Attributes
    ----------
    user_id:
        Identifier stamped onto flushed events; must not be blank.
    """

    user_id: str

    def __post_init__(self) -> None:
        if not self.user_id or not self.user_id.strip():
            raise ValueError("user_id must not be empty")


class PrincipalBinder:
    """Manage :class:`PrincipalContext` frames bound to the current flow."""

    _stack_var: contextvars.ContextVar[tuple[PrincipalContext, ...]]

    def __init__(self) -> None:
        self._stack_var = contextvars.ContextVar("lib_log_durable_principal_stack", default=())

    @contextmanager
    def bind(self, user_id: str) -> Iterator[PrincipalContext]:
        """Bind ``user_id`` as the acting principal for the ``with`` block."""

        context = PrincipalContext(user_id=user_id)
        token = self._stack_var.set(self._stack_var.get() + (context,))
        try:
            yield context
        finally:
            self._stack_var.reset(token)

    def current(self) -> PrincipalContext | None:
        """Return the principal bound to the current scope, if any."""

        stack = self._stack_var.get()
        return stack[-1] if stack else None

    def clear(self) -> None:
        """Remove all bound principal information."""

        self._stack_var.set(())


__all__ = ["PrincipalBinder", "PrincipalContext"]
