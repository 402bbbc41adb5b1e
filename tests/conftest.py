"""Shared fixtures for the lib_log_durable test-suite."""

from __future__ import annotations

import io
from collections.abc import Iterator

import pytest
from rich.console import Console

from fakes import RecordingSink
from lib_log_durable import runtime
from lib_log_durable.runtime._state import clear_runtime

RUNTIME_ENV_VARS = (
    "LOG_DURABLE_IMMEDIATE",
    "LOG_DURABLE_MIN_LEVEL",
    "LOG_DURABLE_LEVELS",
    "LOG_DURABLE_USER",
    "LOG_DURABLE_SINK",
)


@pytest.fixture
def record_console() -> Console:
    """Rich console capturing output for assertions."""

    return Console(file=io.StringIO(), record=True, width=200, force_terminal=False, color_system=None)


@pytest.fixture
def recording_sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def clean_runtime_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove every ``LOG_DURABLE_*`` variable so host settings cannot leak in."""

    for name in RUNTIME_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def reset_runtime(clean_runtime_env: None) -> Iterator[None]:
    """Tear down any runtime a test left installed."""

    yield
    if runtime.is_initialised():
        clear_runtime()
