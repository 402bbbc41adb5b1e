"""Runtime configuration and environment overrides.

Purpose
-------
Translate :class:`RuntimeConfig` plus ``LOG_DURABLE_*`` environment variables
into validated :class:`RuntimeSettings` consumed by the composition root.

Contents
--------
* :class:`RuntimeConfig` - caller-facing configuration object.
* :class:`RuntimeSettings` - resolved, validated settings.
* :func:`build_runtime_settings` - merge config and environment.
* Parsing helpers for booleans, levels and sink names.

System Role
-----------
Environment variables win over code-supplied values so operators can adjust a
deployed service without redeploying it.
"""

from __future__ import annotations

import os
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from lib_log_durable.application.ports import (
    CallerResolverPort,
    LevelGatePort,
    PrincipalProviderPort,
    PublicationSinkPort,
)
from lib_log_durable.application.use_cases._types import DiagnosticHook
from lib_log_durable.domain.levels import LogLevel

ENV_IMMEDIATE = "LOG_DURABLE_IMMEDIATE"
ENV_MIN_LEVEL = "LOG_DURABLE_MIN_LEVEL"
ENV_LEVELS = "LOG_DURABLE_LEVELS"
ENV_USER = "LOG_DURABLE_USER"
ENV_SINK = "LOG_DURABLE_SINK"

SINK_NAMES: tuple[str, ...] = ("memory", "console", "logging")

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class RuntimeConfig:
    """Caller-facing configuration accepted by :func:`lib_log_durable.init`.

    Attributes
    ----------
    immediate:
        Default mode of loggers handed out by :func:`get`.
    min_level:
        Threshold used when ``enabled_levels`` is not given.
    enabled_levels:
        Explicit per-level switches; wins over ``min_level``.
    sink:
        Sink name (``memory``, ``console``, ``logging``) or a sink instance.
    user_id:
        Static principal used when none is bound for the current scope.
    caller_resolver, level_gate, principal:
        Optional collaborators replacing the defaults entirely.
    console_*:
        Options forwarded to the Rich console sink.
    diagnostic_hook:
        Optional ``(name, payload)`` callback receiving pipeline milestones.
    """

    immediate: bool = True
    min_level: str | LogLevel = LogLevel.INFO
    enabled_levels: Iterable[str | LogLevel] | None = None
    sink: str | PublicationSinkPort = "memory"
    user_id: str | None = None
    caller_resolver: CallerResolverPort | None = None
    level_gate: LevelGatePort | None = None
    principal: PrincipalProviderPort | None = None
    console_force_color: bool = False
    console_no_color: bool = False
    console_styles: Mapping[str, str] | None = None
    console_template: str | None = None
    diagnostic_hook: DiagnosticHook = None


@dataclass(frozen=True)
class ConsoleSettings:
    force_color: bool = False
    no_color: bool = False
    styles: dict[str, str] = field(default_factory=dict)
    template: str | None = None


@dataclass(frozen=True)
class RuntimeSettings:
    """Validated settings after environment overrides were applied."""

    immediate: bool
    min_level: LogLevel
    enabled_levels: frozenset[LogLevel] | None
    sink: str | PublicationSinkPort
    user_id: str | None
    console: ConsoleSettings
    caller_resolver: CallerResolverPort | None = None
    level_gate: LevelGatePort | None = None
    principal: PrincipalProviderPort | None = None
    diagnostic_hook: DiagnosticHook = None


def build_runtime_settings(config: RuntimeConfig | None = None, **overrides: Any) -> RuntimeSettings:
    """Resolve ``config`` (plus keyword overrides) against the environment.

    Raises
    ------
    ValueError
        When a level name or sink name is unknown, naming the offending
        variable.
    TypeError
        When an unknown keyword override is supplied.

    Examples
    --------
    >>> _ = os.environ.pop(ENV_MIN_LEVEL, None)
    >>> build_runtime_settings(min_level="warn").min_level
    <LogLevel.WARN: 30>
    """

    base = config or RuntimeConfig()
    if overrides:
        base = _apply_overrides(base, overrides)

    immediate = _env_bool(ENV_IMMEDIATE, base.immediate)
    min_level = _parse_level(os.getenv(ENV_MIN_LEVEL), source=ENV_MIN_LEVEL) or _coerce(base.min_level, "min_level")
    enabled_levels = _parse_level_list(os.getenv(ENV_LEVELS), source=ENV_LEVELS)
    if enabled_levels is None and base.enabled_levels is not None:
        enabled_levels = frozenset(_coerce(level, "enabled_levels") for level in base.enabled_levels)
    sink = _resolve_sink(os.getenv(ENV_SINK), base.sink)
    user_id = _strip_or_none(os.getenv(ENV_USER)) or base.user_id

    return RuntimeSettings(
        immediate=immediate,
        min_level=min_level,
        enabled_levels=enabled_levels,
        sink=sink,
        user_id=user_id,
        console=ConsoleSettings(
            force_color=base.console_force_color,
            no_color=base.console_no_color,
            styles=dict(base.console_styles or {}),
            template=base.console_template,
        ),
        caller_resolver=base.caller_resolver,
        level_gate=base.level_gate,
        principal=base.principal,
        diagnostic_hook=base.diagnostic_hook,
    )


def _apply_overrides(config: RuntimeConfig, overrides: Mapping[str, Any]) -> RuntimeConfig:
    known = set(RuntimeConfig.__dataclass_fields__)
    unknown = sorted(set(overrides) - known)
    if unknown:
        raise TypeError(f"Unknown runtime option(s): {', '.join(unknown)}")
    data = {name: getattr(config, name) for name in known}
    data.update(overrides)
    return RuntimeConfig(**data)


def _env_bool(name: str, default: bool) -> bool:
    """Return the boolean value of an environment variable with fallback.

    Examples
    --------
    >>> _ = os.environ.pop('LOG_DURABLE_EXAMPLE_BOOL', None)
    >>> _env_bool('LOG_DURABLE_EXAMPLE_BOOL', default=True)
    True
    >>> os.environ['LOG_DURABLE_EXAMPLE_BOOL'] = 'off'
    >>> _env_bool('LOG_DURABLE_EXAMPLE_BOOL', default=True)
    False
    >>> del os.environ['LOG_DURABLE_EXAMPLE_BOOL']
    """
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    lowered = value.strip().lower()
    if lowered in _TRUTHY:
        return True
    if lowered in _FALSY:
        return False
    raise ValueError(f"{name} must be a boolean (1/0, true/false, yes/no, on/off), got {value!r}")


def _coerce(level: str | LogLevel, source: str) -> LogLevel:
    if isinstance(level, LogLevel):
        return level
    try:
        return LogLevel.from_name(level)
    except ValueError as exc:
        raise ValueError(f"{source}: {exc}") from exc


def _parse_level(raw: str | None, *, source: str) -> LogLevel | None:
    text = _strip_or_none(raw)
    if text is None:
        return None
    return _coerce(text, source)


def _parse_level_list(raw: str | None, *, source: str) -> frozenset[LogLevel] | None:
    """Parse ``info,error`` style lists.

    Examples
    --------
    >>> sorted(level.name for level in _parse_level_list('info, error', source='X'))
    ['ERROR', 'INFO']
    >>> _parse_level_list(None, source='X') is None
    True
    """
    text = _strip_or_none(raw)
    if text is None:
        return None
    return frozenset(_coerce(chunk.strip(), source) for chunk in text.split(",") if chunk.strip())


def _resolve_sink(raw: str | None, fallback: str | PublicationSinkPort) -> str | PublicationSinkPort:
    name = _strip_or_none(raw)
    if name is not None:
        return _validate_sink_name(name.lower(), source=ENV_SINK)
    if isinstance(fallback, str):
        return _validate_sink_name(fallback.strip().lower(), source="sink")
    return fallback


def _validate_sink_name(name: str, *, source: str) -> str:
    if name not in SINK_NAMES:
        raise ValueError(f"{source} must be one of {', '.join(SINK_NAMES)}, got {name!r}")
    return name


def _strip_or_none(value: str | None) -> str | None:
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None


__all__ = [
    "ConsoleSettings",
    "ENV_IMMEDIATE",
    "ENV_LEVELS",
    "ENV_MIN_LEVEL",
    "ENV_SINK",
    "ENV_USER",
    "RuntimeConfig",
    "RuntimeSettings",
    "SINK_NAMES",
    "build_runtime_settings",
]
