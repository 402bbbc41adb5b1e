"""Domain entities and value objects used by the durable logging core."""

from __future__ import annotations

from .buffer import BufferState, LogBuffer
from .context import PrincipalBinder, PrincipalContext
from .events import LogEvent
from .exchanges import (
    ClientExchange,
    ClientRequest,
    ClientResponse,
    ServerExchange,
    ServerRequest,
    ServerResponse,
    pair_exchange,
)
from .formatting import Formatter
from .inputs import ErrorInput, LogInput, MessageInput, PrebuiltInput, as_log_input
from .levels import LogLevel
from .record import LogRecord

__all__ = [
    "BufferState",
    "ClientExchange",
    "ClientRequest",
    "ClientResponse",
    "ErrorInput",
    "Formatter",
    "LogBuffer",
    "LogEvent",
    "LogInput",
    "LogLevel",
    "LogRecord",
    "MessageInput",
    "PrebuiltInput",
    "PrincipalBinder",
    "PrincipalContext",
    "ServerExchange",
    "ServerRequest",
    "ServerResponse",
    "as_log_input",
    "pair_exchange",
]
