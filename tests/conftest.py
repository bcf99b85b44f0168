"""
Shared fixtures: a scripted stand-in for ``requests.Session``.
"""

import json
from http import HTTPStatus
from typing import Any, Dict, List, Optional, Tuple, Union

import pytest
import requests

PAYER_URL = "https://4112873c42e819316dcfafdddb95a5cf.tq.biz.todaq.net"
PAYER_API_KEY = "41b95538-b2a5-4aea-9121-a7d4e8558a63"

PAYWALL_URL = "https://41d83ecbac7b2a50e451ee2a453fb8f4.tq.biz.todaq.net"
PAYWALL_ADDRESS = "41d83ecbac7b2a50e451ee2a453fb8f46a32fa071c9fab08f0d597eed3d0e74a0e"
PAYWALL_CONFIG = {
    "targetUrl": "https://example.com",
    "targetPayType": "41f88b1490292e22ac37a5da7d9cdb88cffda408ae12a188243ad209e6f9fa5ef9",
    "targetPayQuantity": 1,
}


def make_response(
    status: int,
    body: Any = None,
    *,
    reason: Optional[str] = None,
    url: str = "",
) -> requests.Response:
    """Build a ``requests.Response`` without touching the network."""
    response = requests.Response()
    response.status_code = status
    response.url = url
    if reason is None:
        reason = HTTPStatus(status).phrase
    response.reason = reason
    if body is None:
        response._content = b""
    elif isinstance(body, bytes):
        response._content = body
        response.headers["Content-Type"] = "application/octet-stream"
    else:
        response._content = json.dumps(body).encode("utf-8")
        response.headers["Content-Type"] = "application/json"
    response.encoding = "utf-8"
    return response


Route = Tuple[str, str]
Reply = Union[requests.Response, List[requests.Response]]


class ScriptedSession(requests.Session):
    """
    Session answering from a route table keyed by ``(METHOD, url)``.

    The url is matched without its query string; every call is recorded.
    """

    def __init__(self, routes: Optional[Dict[Route, Reply]] = None) -> None:
        super().__init__()
        self.routes: Dict[Route, Reply] = dict(routes or {})
        self.calls: List[Dict[str, Any]] = []

    def add(self, method: str, url: str, response: requests.Response) -> None:
        self.routes[(method.upper(), url)] = response

    def request(self, method, url, params=None, data=None, headers=None, json=None, **kwargs):
        method = method.upper()
        self.calls.append(
            {
                "method": method,
                "url": url,
                "params": params,
                "headers": headers,
                "json": json,
                "data": data,
                "timeout": kwargs.get("timeout"),
            }
        )
        key = (method, url.split("?", 1)[0])
        if key not in self.routes:
            raise AssertionError(f"Unexpected request {method} {url}")
        reply = self.routes[key]
        if isinstance(reply, list):
            response = reply.pop(0)
        else:
            response = reply
        response.url = url
        return response


@pytest.fixture
def session():
    return ScriptedSession()


@pytest.fixture
def paywall_info():
    return {
        "address": PAYWALL_ADDRESS,
        "binderId": "41aa00ff",
        "paywall": dict(PAYWALL_CONFIG),
    }
