"""Canonical log record produced by the record builder.

Purpose
-------
Describe the single unit of logging that travels from the builder into a
logger's buffer and, once flushed, into a publication sink.

Contents
--------
* :class:`LogRecord` frozen dataclass with copy helpers.

System Role
-----------
Sits in the domain layer. Records are immutable once buffered; the acting
principal is stamped onto a flushed copy via :meth:`LogRecord.with_user`.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any

from .levels import LogLevel


@dataclass(slots=True, frozen=True)
class LogRecord:
    """Immutable log record.

    Attributes
    ----------
    caller_id:
        Qualified name of the function that issued the logging call. Set once
        by the builder; pre-built records may leave it blank.
    reference_id:
        Optional correlation identifier linking related records (transaction,
        request or job id).
    message:
        Final human-readable body. Never ``None``; empty text is allowed.
    level:
        :class:`LogLevel` severity.
    user_id:
        Acting principal. Only populated on the copy produced at flush time.

    Examples
    --------
    >>> LogRecord(message="saved", reference_id="order-7").caller_id
    ''
    >>> LogRecord(message=None).message
    ''
    """

    caller_id: str = ""
    reference_id: str | None = None
    message: str = ""
    level: LogLevel = LogLevel.INFO
    user_id: str | None = None

    def __post_init__(self) -> None:
        if self.message is None:
            object.__setattr__(self, "message", "")
        elif not isinstance(self.message, str):
            object.__setattr__(self, "message", str(self.message))
        if self.caller_id is None:
            object.__setattr__(self, "caller_id", "")
        if not isinstance(self.level, LogLevel):
            raise TypeError(f"level must be a LogLevel, got {self.level!r}")

    def with_user(self, user_id: str | None) -> "LogRecord":
        """Return a copy carrying ``user_id``; the original stays untouched."""

        return replace(self, user_id=user_id)

    def replace(self, **changes: Any) -> "LogRecord":
        """Return a copied record with ``changes`` applied."""

        return replace(self, **changes)

    def to_dict(self) -> dict[str, Any]:
        """Serialize the record to a plain dictionary."""

        return {
            "caller_id": self.caller_id,
            "reference_id": self.reference_id,
            "message": self.message,
            "level": self.level.severity,
            "user_id": self.user_id,
        }


__all__ = ["LogRecord"]
