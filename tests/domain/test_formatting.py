from __future__ import annotations

import os

import pytest

from lib_log_durable.domain import (
    ClientExchange,
    ClientRequest,
    ClientResponse,
    Formatter,
    ServerExchange,
    ServerRequest,
    ServerResponse,
)
from lib_log_durable.domain.formatting import CAUSE_SEPARATOR, safe_text


class InventoryError(RuntimeError):
    pass


def reserve_stock() -> None:
    raise KeyError("sku-42")


def checkout() -> None:
    try:
        reserve_stock()
    except KeyError as exc:
        raise InventoryError("could not reserve stock") from exc


def _caught(func) -> BaseException:  # noqa: ANN001
    try:
        func()
    except BaseException as exc:  # noqa: BLE001
        return exc
    raise AssertionError("expected an exception")


@pytest.fixture
def formatter() -> Formatter:
    return Formatter()


def test_error_rendering_lists_message_type_location_and_stack(formatter: Formatter) -> None:
    text = formatter.format_error(_caught(reserve_stock))

    lines = text.splitlines()
    assert lines[0] == "Message: 'sku-42'"
    assert lines[1] == "Type: KeyError"
    assert lines[2].startswith("Location: ")
    assert lines[2].endswith("in reserve_stock")
    assert "Stack trace:" in lines
    assert "reserve_stock" in text


def test_error_rendering_follows_explicit_cause_chain(formatter: Formatter) -> None:
    text = formatter.format_error(_caught(checkout))

    outer, inner = text.split(f"\n{CAUSE_SEPARATOR}\n")
    assert "Message: could not reserve stock" in outer
    assert f"Type: {__name__}.InventoryError" in outer
    assert "in checkout" in outer
    assert "Message: 'sku-42'" in inner
    assert "in reserve_stock" in inner


def test_error_rendering_follows_implicit_context(formatter: Formatter) -> None:
    def handler() -> None:
        try:
            raise ValueError("first")
        except ValueError:
            raise RuntimeError("second")

    text = formatter.format_error(_caught(handler))

    assert text.count(CAUSE_SEPARATOR) == 1
    assert "Message: first" in text


def test_suppressed_context_is_not_rendered(formatter: Formatter) -> None:
    def handler() -> None:
        try:
            raise ValueError("hidden")
        except ValueError:
            raise RuntimeError("shown") from None

    text = formatter.format_error(_caught(handler))

    assert CAUSE_SEPARATOR not in text
    assert "hidden" not in text


def test_never_raised_error_is_located_at_the_formatting_caller(formatter: Formatter) -> None:
    def allocate_pallet() -> str:
        return formatter.format_error(ValueError("constructed"))

    text = allocate_pallet()

    assert "Message: constructed" in text
    assert "in allocate_pallet\n" in text
    assert f"{os.sep}domain{os.sep}formatting.py" not in text


def test_cyclic_cause_chain_terminates(formatter: Formatter) -> None:
    first = ValueError("a")
    second = ValueError("b")
    first.__cause__ = second
    second.__cause__ = first

    assert formatter.format_error(first).count(CAUSE_SEPARATOR) == 1


def test_client_exchange_renders_both_sides(formatter: Formatter) -> None:
    request = ClientRequest(
        method="POST",
        endpoint="https://pay.test/charges",
        headers={"X-Trace": "t1", "Accept": "application/json"},
        body='{"amount": 10}',
    )
    response = ClientResponse(status_code=201, status="Created", body="ok")

    text = formatter.format_exchange(ClientExchange(request, response))

    assert text == (
        "CLIENT REQUEST: POST https://pay.test/charges\n"
        "Headers:\n"
        "  Accept: application/json\n"
        "  X-Trace: t1\n"
        "Body:\n"
        '{"amount": 10}\n'
        "\n"
        "CLIENT RESPONSE: 201 Created\n"
        "Body:\n"
        "ok"
    )


def test_server_exchange_renders_parameters_and_remote_address(formatter: Formatter) -> None:
    request = ServerRequest(
        http_method="GET",
        request_uri="/orders/7",
        remote_address="10.0.0.5",
        params={"expand": "lines"},
    )

    text = formatter.format_exchange(ServerExchange(request, ServerResponse(status_code=200)))

    assert text.startswith("SERVER REQUEST: GET /orders/7\n")
    assert "Remote address: 10.0.0.5" in text
    assert "Parameters:\n  expand: lines" in text
    assert "SERVER RESPONSE: 200" in text


def test_one_sided_exchange_omits_missing_side(formatter: Formatter) -> None:
    only_response = formatter.format_exchange(None, ClientResponse(status_code=503))
    only_request = formatter.format_exchange(ServerRequest(http_method="DELETE"), None)

    assert only_response == "CLIENT RESPONSE: 503\nBody:"
    assert "RESPONSE" not in only_request
    assert only_request.startswith("SERVER REQUEST: DELETE")


def test_empty_exchange_renders_empty_text(formatter: Formatter) -> None:
    assert formatter.format_exchange(None, None) == ""


def test_format_routes_by_subject_type(formatter: Formatter) -> None:
    assert formatter.format(ValueError("x")).startswith("Message: x")
    assert formatter.format(ClientRequest(method="GET")).startswith("CLIENT REQUEST: GET")


def test_bytes_bodies_are_decoded(formatter: Formatter) -> None:
    text = formatter.format_exchange(ClientRequest(body=b"caf\xc3\xa9"), None)

    assert text.endswith("Body:\ncafé")


def test_safe_text_survives_broken_str() -> None:
    class Broken:
        def __str__(self) -> str:
            raise RuntimeError("nope")

    assert safe_text(Broken()) == "<unprintable Broken>"
