"""Protocols describing the collaborators the logging core depends on."""

from __future__ import annotations

from .caller import CallerResolverPort
from .identity import PrincipalProviderPort
from .level_gate import LevelGatePort
from .sink import PublicationSinkPort
from .time import ClockPort, IdProvider

__all__ = [
    "CallerResolverPort",
    "ClockPort",
    "IdProvider",
    "LevelGatePort",
    "PrincipalProviderPort",
    "PublicationSinkPort",
]
