"""Tagged variant over the input shapes a logging call accepts.

Purpose
-------
Collapse the combination of input shapes (message, pre-built record, error,
client or server exchange) into one type so the record builder exposes a
single polymorphic operation instead of one entry point per shape.

Contents
--------
* :class:`MessageInput`, :class:`PrebuiltInput`, :class:`ErrorInput` variants.
* :data:`LogInput` union (the two exchange types are variants as well).
* :func:`as_log_input` classifying raw Python values.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

from .exchanges import ClientExchange, ServerExchange
from .formatting import safe_text
from .record import LogRecord


@dataclass(slots=True, frozen=True)
class MessageInput:
    """Bare message text."""

    text: str = ""


@dataclass(slots=True, frozen=True)
class PrebuiltInput:
    """Record supplying its own message and reference id."""

    record: LogRecord


@dataclass(slots=True, frozen=True)
class ErrorInput:
    """Exception whose rendering becomes the message."""

    error: BaseException | None


LogInput = Union[MessageInput, PrebuiltInput, ErrorInput, ClientExchange, ServerExchange]

_VARIANTS = (MessageInput, PrebuiltInput, ErrorInput, ClientExchange, ServerExchange)


def as_log_input(subject: Any) -> LogInput:
    """Classify ``subject`` into a :data:`LogInput` variant.

    Examples
    --------
    >>> as_log_input("hello")
    MessageInput(text='hello')
    >>> as_log_input(None)
    MessageInput(text='')
    >>> type(as_log_input(ValueError("x"))).__name__
    'ErrorInput'
    >>> as_log_input(42)
    MessageInput(text='42')
    """

    if isinstance(subject, _VARIANTS):
        return subject
    if subject is None:
        return MessageInput("")
    if isinstance(subject, str):
        return MessageInput(subject)
    if isinstance(subject, LogRecord):
        return PrebuiltInput(subject)
    if isinstance(subject, BaseException):
        return ErrorInput(subject)
    return MessageInput(safe_text(subject))


__all__ = [
    "ErrorInput",
    "LogInput",
    "MessageInput",
    "PrebuiltInput",
    "as_log_input",
]
