import pytest

from conftest import PAYWALL_ADDRESS, PAYWALL_CONFIG, PAYWALL_URL, make_response
from twin_client.core.errors import TwinAuthError, TwinError
from twin_client.core.info import Paywall, TwinInfo, fetch_info


def test_fetch_info_parses_paywall(session, paywall_info):
    session.add("GET", f"{PAYWALL_URL}/info", make_response(200, paywall_info))

    info = fetch_info(session, PAYWALL_URL)

    assert info.address == PAYWALL_ADDRESS
    assert info.binder_id == "41aa00ff"
    assert info.paywall == Paywall(
        target_url=PAYWALL_CONFIG["targetUrl"],
        target_pay_type=PAYWALL_CONFIG["targetPayType"],
        target_pay_quantity=PAYWALL_CONFIG["targetPayQuantity"],
    )
    assert info.raw == paywall_info

    call = session.calls[0]
    assert call["params"] is None
    assert call["headers"] == {"Content-Type": "application/json"}


def test_fetch_info_attaches_api_key(session, paywall_info):
    session.add("GET", f"{PAYWALL_URL}/info", make_response(200, paywall_info))

    fetch_info(session, f"{PAYWALL_URL}/", api_key="secret", timeout=5)

    call = session.calls[0]
    assert call["url"] == f"{PAYWALL_URL}/info"
    assert call["params"] == {"apiKey": "secret"}
    assert call["timeout"] == 5


def test_fetch_info_without_paywall(session):
    session.add("GET", f"{PAYWALL_URL}/info", make_response(200, {"address": "41abcd"}))

    info = fetch_info(session, PAYWALL_URL)

    assert info == TwinInfo(address="41abcd")
    assert info.paywall is None


@pytest.mark.parametrize("status", [400, 403, 404, 500])
def test_fetch_info_failures_are_generic(session, status):
    session.add("GET", f"{PAYWALL_URL}/info", make_response(status, {"error": "nope"}))

    with pytest.raises(TwinError) as excinfo:
        fetch_info(session, PAYWALL_URL)

    assert type(excinfo.value) is TwinError
    assert not isinstance(excinfo.value, TwinAuthError)
    assert excinfo.value.data == {"error": "nope"}
    assert excinfo.value.status == status


@pytest.mark.parametrize(
    "payload",
    [{"binderId": "41aa"}, {"address": ""}, ["41abcd"], "41abcd"],
)
def test_fetch_info_rejects_documents_without_address(session, payload):
    session.add("GET", f"{PAYWALL_URL}/info", make_response(200, payload))

    with pytest.raises(TwinError) as excinfo:
        fetch_info(session, PAYWALL_URL)

    assert excinfo.value.data == payload


def test_fetch_info_accepts_any_reported_address(session):
    session.add("GET", f"{PAYWALL_URL}/info", make_response(200, {"address": "41mockaddress"}))

    assert fetch_info(session, PAYWALL_URL).address == "41mockaddress"
