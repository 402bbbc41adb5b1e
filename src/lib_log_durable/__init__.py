"""Public package surface for lib_log_durable.

Buffered logging for units of work: every :class:`DurableLogger` owns a
private buffer and commits records to a durable sink either immediately or
as one deferred batch, so log output survives rollbacks of the surrounding
transaction. Hosts normally call :func:`init` once, then obtain loggers via
:func:`get` or :func:`session`.
"""

from __future__ import annotations

from .adapters import (
    InMemorySink,
    LevelSetGate,
    RichConsoleSink,
    StackCallerResolver,
    StaticPrincipalProvider,
    StdlibLoggingSink,
    ThresholdLevelGate,
)
from .application.ports import (
    CallerResolverPort,
    LevelGatePort,
    PrincipalProviderPort,
    PublicationSinkPort,
)
from .domain import (
    BufferState,
    ClientExchange,
    ClientRequest,
    ClientResponse,
    Formatter,
    LogEvent,
    LogLevel,
    LogRecord,
    ServerExchange,
    ServerRequest,
    ServerResponse,
)
from .logger import DurableLogger
from .runtime import (
    RuntimeConfig,
    RuntimeSnapshot,
    bind_principal,
    get,
    init,
    inspect_runtime,
    is_initialised,
    session,
    shutdown,
)

__all__ = [
    "BufferState",
    "CallerResolverPort",
    "ClientExchange",
    "ClientRequest",
    "ClientResponse",
    "DurableLogger",
    "Formatter",
    "InMemorySink",
    "LevelGatePort",
    "LevelSetGate",
    "LogEvent",
    "LogLevel",
    "LogRecord",
    "PrincipalProviderPort",
    "PublicationSinkPort",
    "RichConsoleSink",
    "RuntimeConfig",
    "RuntimeSnapshot",
    "ServerExchange",
    "ServerRequest",
    "ServerResponse",
    "StackCallerResolver",
    "StaticPrincipalProvider",
    "StdlibLoggingSink",
    "ThresholdLevelGate",
    "bind_principal",
    "get",
    "init",
    "inspect_runtime",
    "is_initialised",
    "session",
    "shutdown",
]
