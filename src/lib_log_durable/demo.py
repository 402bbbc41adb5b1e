"""Scripted unit of work showing immediate and deferred commits.

The demo simulates an order workflow that talks to a payment provider and
serves an HTTP response. Records are printed through the Rich console sink so
the difference between the two modes is visible: immediate mode prints one
batch per record while deferred mode prints a single batch at the end.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from rich.console import Console

from .adapters import RichConsoleSink, StaticPrincipalProvider
from .application.ports import PublicationSinkPort
from .domain import (
    ClientRequest,
    ClientResponse,
    LogEvent,
    LogLevel,
    LogRecord,
    ServerRequest,
    ServerResponse,
)
from .logger import DurableLogger


class _BatchCounter(PublicationSinkPort):
    """Forward batches to ``inner`` while counting them."""

    def __init__(self, inner: PublicationSinkPort, console: Console) -> None:
        self._inner = inner
        self._console = console
        self.batches = 0
        self.events = 0

    def publish(self, events: Sequence[LogEvent]) -> None:
        self.batches += 1
        self.events += len(events)
        self._console.print(f"--- batch {self.batches} ({len(events)} record(s)) ---", markup=False, highlight=False, soft_wrap=True)
        self._inner.publish(events)


class _ProviderDeclined(RuntimeError):
    pass


def _charge_card(amount: int) -> None:
    try:
        raise ConnectionError("payment gateway timed out")
    except ConnectionError as exc:
        raise _ProviderDeclined(f"charge of {amount} could not be confirmed") from exc


def logdemo(
    *,
    immediate: bool = False,
    user: str = "demo-user",
    console: Console | None = None,
) -> dict[str, Any]:
    """Run the order workflow once and return what reached the sink.

    Examples
    --------
    >>> from io import StringIO
    >>> result = logdemo(immediate=False, console=Console(file=StringIO()))
    >>> result['batches'], result['events']
    (1, 6)
    >>> logdemo(immediate=True, console=Console(file=StringIO()))['batches']
    6
    """

    target = console or Console()
    counter = _BatchCounter(RichConsoleSink(console=target), target)
    log = DurableLogger(sink=counter, immediate=immediate, principal=StaticPrincipalProvider(user))

    log.info("order received", reference_id="order-1001")
    log.warn("stock below reorder point for sku-42", reference_id="order-1001")
    try:
        _charge_card(4200)
    except _ProviderDeclined as exc:
        log.error(exc, reference_id="order-1001")
    log.exchange(
        LogLevel.INFO,
        ClientRequest(method="POST", endpoint="https://pay.example.test/charges", headers={"Accept": "application/json"}, body='{"amount": 4200}'),
        ClientResponse(status_code=504, status="Gateway Timeout"),
        reference_id="order-1001",
    )
    log.exchange(
        LogLevel.INFO,
        ServerRequest(http_method="POST", request_uri="/orders/1001/pay", params={"retry": "0"}),
        ServerResponse(status_code=202, body="queued for retry"),
        reference_id="order-1001",
    )
    log.assert_or_log(False, LogRecord(message="payment retry queue is empty", reference_id="order-1001"))
    log.flush()

    return {
        "mode": "immediate" if immediate else "deferred",
        "user": user,
        "batches": counter.batches,
        "events": counter.events,
    }


__all__ = ["logdemo"]
