"""Concrete adapters implementing the application ports."""

from __future__ import annotations

from .caller import StackCallerResolver
from .clock import SystemClock, UuidProvider
from .console import RichConsoleSink
from .identity import BoundPrincipalProvider, StaticPrincipalProvider, SystemPrincipalProvider
from .level_gate import LevelSetGate, ThresholdLevelGate
from .memory import InMemorySink
from .structured import StdlibLoggingSink

__all__ = [
    "BoundPrincipalProvider",
    "InMemorySink",
    "LevelSetGate",
    "RichConsoleSink",
    "StackCallerResolver",
    "StaticPrincipalProvider",
    "StdlibLoggingSink",
    "SystemClock",
    "SystemPrincipalProvider",
    "ThresholdLevelGate",
    "UuidProvider",
]
