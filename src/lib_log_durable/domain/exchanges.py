"""Request/response value objects for protocol exchange logging.

Two shapes are supported: a client-style pair (an outbound call made by the
application) and a server-style pair (an inbound call handled by the
application). Every field is optional so partially-populated objects coming
from failed calls can still be logged.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping


Body = str | bytes | None


@dataclass(slots=True, frozen=True)
class ClientRequest:
    """Outbound request issued by the application."""

    method: str | None = None
    endpoint: str | None = None
    headers: Mapping[str, str] = field(default_factory=dict)
    body: Body = None


@dataclass(slots=True, frozen=True)
class ClientResponse:
    """Response received for a :class:`ClientRequest`."""

    status_code: int | None = None
    status: str | None = None
    headers: Mapping[str, str] = field(default_factory=dict)
    body: Body = None


@dataclass(slots=True, frozen=True)
class ServerRequest:
    """Inbound request handled by the application."""

    http_method: str | None = None
    request_uri: str | None = None
    resource_path: str | None = None
    remote_address: str | None = None
    headers: Mapping[str, str] = field(default_factory=dict)
    params: Mapping[str, str] = field(default_factory=dict)
    body: Body = None


@dataclass(slots=True, frozen=True)
class ServerResponse:
    """Response returned for a :class:`ServerRequest`."""

    status_code: int | None = None
    headers: Mapping[str, str] = field(default_factory=dict)
    body: Body = None


@dataclass(slots=True, frozen=True)
class ClientExchange:
    """Client-style request/response pair; either side may be ``None``."""

    request: ClientRequest | None = None
    response: ClientResponse | None = None


@dataclass(slots=True, frozen=True)
class ServerExchange:
    """Server-style request/response pair; either side may be ``None``."""

    request: ServerRequest | None = None
    response: ServerResponse | None = None


def pair_exchange(request: object, response: object) -> ClientExchange | ServerExchange:
    """Wrap a raw request/response pair in the matching exchange shape.

    Examples
    --------
    >>> type(pair_exchange(None, ServerResponse(status_code=204))).__name__
    'ServerExchange'
    >>> pair_exchange(ClientRequest(method="GET"), None).response is None
    True
    """

    if isinstance(request, ServerRequest) or isinstance(response, ServerResponse):
        return ServerExchange(request=request, response=response)  # type: ignore[arg-type]
    return ClientExchange(request=request, response=response)  # type: ignore[arg-type]


__all__ = [
    "ClientExchange",
    "ClientRequest",
    "ClientResponse",
    "ServerExchange",
    "ServerRequest",
    "ServerResponse",
    "pair_exchange",
]
