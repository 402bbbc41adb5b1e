"""Level gates deciding which severities are recorded.

Both gates are immutable after construction, so ``is_enabled`` stays a pure,
cheap predicate.
"""

from __future__ import annotations

from collections.abc import Iterable

from lib_log_durable.application.ports.level_gate import LevelGatePort
from lib_log_durable.domain.levels import LogLevel


class ThresholdLevelGate(LevelGatePort):
    """Enable every level at or above ``min_level``.

    Examples
    --------
    >>> gate = ThresholdLevelGate(LogLevel.WARN)
    >>> gate.is_enabled(LogLevel.INFO), gate.is_enabled(LogLevel.ERROR)
    (False, True)
    """

    def __init__(self, min_level: LogLevel = LogLevel.INFO) -> None:
        self._min_level = min_level

    @property
    def min_level(self) -> LogLevel:
        return self._min_level

    def is_enabled(self, level: LogLevel) -> bool:
        return level.value >= self._min_level.value


class LevelSetGate(LevelGatePort):
    """Enable exactly the levels listed (per-level switches).

    Examples
    --------
    >>> gate = LevelSetGate([LogLevel.INFO, LogLevel.ERROR])
    >>> gate.is_enabled(LogLevel.WARN)
    False
    """

    def __init__(self, levels: Iterable[LogLevel]) -> None:
        self._levels = frozenset(levels)

    @property
    def levels(self) -> frozenset[LogLevel]:
        return self._levels

    def is_enabled(self, level: LogLevel) -> bool:
        return level in self._levels


__all__ = ["LevelSetGate", "ThresholdLevelGate"]
