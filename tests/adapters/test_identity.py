from __future__ import annotations

import getpass

import pytest

from lib_log_durable.adapters import BoundPrincipalProvider, StaticPrincipalProvider, SystemPrincipalProvider
from lib_log_durable.domain import PrincipalBinder


def test_system_provider_reports_os_account(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(getpass, "getuser", lambda: "svc-orders")

    assert SystemPrincipalProvider().current_principal() == "svc-orders"


def test_system_provider_returns_none_when_account_unknown(monkeypatch: pytest.MonkeyPatch) -> None:
    def missing() -> str:
        raise OSError("no login name")

    monkeypatch.setattr(getpass, "getuser", missing)

    assert SystemPrincipalProvider().current_principal() is None


def test_static_provider_returns_configured_value() -> None:
    assert StaticPrincipalProvider("batch").current_principal() == "batch"
    assert StaticPrincipalProvider(None).current_principal() is None


def test_bound_provider_prefers_binding_over_fallback() -> None:
    binder = PrincipalBinder()
    provider = BoundPrincipalProvider(binder, fallback=StaticPrincipalProvider("svc"))

    with binder.bind("alice"):
        assert provider.current_principal() == "alice"
    assert provider.current_principal() == "svc"


def test_bound_provider_without_fallback_returns_none() -> None:
    assert BoundPrincipalProvider(PrincipalBinder()).current_principal() is None
