"""Use cases composing the record builder and the flush engine."""

from __future__ import annotations

from .build_record import create_build_record
from .flush import create_flush
from .shutdown import create_shutdown

__all__ = ["create_build_record", "create_flush", "create_shutdown"]
