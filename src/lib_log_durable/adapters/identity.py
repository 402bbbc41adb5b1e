"""Principal providers stamping the acting user onto flushed events."""

from __future__ import annotations

import getpass

from lib_log_durable.application.ports.identity import PrincipalProviderPort
from lib_log_durable.domain.context import PrincipalBinder


class SystemPrincipalProvider(PrincipalProviderPort):
    """Use the operating-system account running the process."""

    def current_principal(self) -> str | None:
        try:
            return getpass.getuser()
        except (KeyError, OSError):
            return None


class StaticPrincipalProvider(PrincipalProviderPort):
    """Always report the same principal (service accounts, tests)."""

    def __init__(self, user_id: str | None) -> None:
        self._user_id = user_id

    def current_principal(self) -> str | None:
        return self._user_id


class BoundPrincipalProvider(PrincipalProviderPort):
    """Read the principal bound via :class:`PrincipalBinder`, else fall back.

    Examples
    --------
    >>> binder = PrincipalBinder()
    >>> provider = BoundPrincipalProvider(binder, fallback=StaticPrincipalProvider('svc'))
    >>> provider.current_principal()
    'svc'
    >>> with binder.bind('alice'):
    ...     provider.current_principal()
    'alice'
    """

    def __init__(self, binder: PrincipalBinder, *, fallback: PrincipalProviderPort | None = None) -> None:
        self._binder = binder
        self._fallback = fallback

    def current_principal(self) -> str | None:
        context = self._binder.current()
        if context is not None:
            return context.user_id
        if self._fallback is not None:
            return self._fallback.current_principal()
        return None


__all__ = ["BoundPrincipalProvider", "StaticPrincipalProvider", "SystemPrincipalProvider"]
