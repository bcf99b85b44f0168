from decimal import Decimal
from urllib.parse import unquote

import pytest

from twin_client.core.payloads import (
    build_micropay_request,
    build_transfer_request,
    encode_destination_url,
    format_amount,
)

ADDRESS = "41d83ecbac7b2a50e451ee2a453fb8f46a32fa071c9fab08f0d597eed3d0e74a0e"
TOKEN = "41f88b1490292e22ac37a5da7d9cdb88cffda408ae12a188243ad209e6f9fa5ef9"


def test_micropay_path_shape():
    request = build_micropay_request(ADDRESS, TOKEN, 1, "https://paywall.example/paywall")

    assert request.method == "GET"
    assert request.path == (
        f"/pay/{ADDRESS}/{TOKEN}/1/https%3A%2F%2Fpaywall.example%2Fpaywall"
    )
    assert request.json is None
    assert request.data is None


@pytest.mark.parametrize(
    "url",
    [
        "https://41d83ecbac7b2a50e451ee2a453fb8f4.tq.biz.todaq.net/paywall",
        "http://localhost:8090/paywall?item=42&format=json",
        "https://example.com/a b/ünï/#frag",
        "https://user:pw@example.com:8443/path;params?q=%2F",
    ],
)
def test_destination_url_survives_round_trip(url):
    request = build_micropay_request(ADDRESS, TOKEN, 1, url)

    segment = request.path.rsplit("/", 1)[1]
    assert "/" not in segment
    assert "?" not in segment
    assert ":" not in segment
    assert unquote(segment) == url


def test_encoding_matches_encode_uri_component():
    assert encode_destination_url("a-b_c.d!e~f*g'h(i)") == "a-b_c.d!e~f*g'h(i)"
    assert encode_destination_url("a b&c=d") == "a%20b%26c%3Dd"


@pytest.mark.parametrize(
    "amount, expected",
    [
        (1, "1"),
        (1.0, "1"),
        (0.1, "0.1"),
        (2.5, "2.5"),
        (Decimal("0.000001"), "0.000001"),
        (Decimal("1E+2"), "100"),
        ("3.14", "3.14"),
    ],
)
def test_amount_formatting(amount, expected):
    assert format_amount(amount) == expected


def test_amount_is_not_validated():
    request = build_micropay_request(ADDRESS, TOKEN, -5, "https://example.com")
    assert f"/{TOKEN}/-5/" in request.path


def test_method_and_json_body():
    request = build_micropay_request(
        ADDRESS, TOKEN, 1, "https://example.com", method="post", body={"q": "hi"}
    )

    assert request.method == "POST"
    assert request.json == {"q": "hi"}
    assert request.data is None


def test_bytes_body_is_sent_raw():
    request = build_micropay_request(
        ADDRESS, TOKEN, 1, "https://example.com", method="POST", body=b"\x00raw"
    )

    assert request.data == b"\x00raw"
    assert request.json is None


def test_transfer_request():
    request = build_transfer_request(ADDRESS, TOKEN, 1)

    assert request.method == "POST"
    assert request.path == "/pay"
    assert request.json == {"address": ADDRESS, "typeHash": TOKEN, "amount": 1}


def test_transfer_request_sends_decimal_amount_as_number():
    whole = build_transfer_request(ADDRESS, TOKEN, Decimal("1"))
    fraction = build_transfer_request(ADDRESS, TOKEN, Decimal("0.50"))

    assert whole.json["amount"] == 1
    assert type(whole.json["amount"]) is int
    assert fraction.json["amount"] == 0.5
    assert type(fraction.json["amount"]) is float
