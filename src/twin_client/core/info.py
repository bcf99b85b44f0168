"""
Resolution of a twin's public ``/info`` document.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Union

import requests

from .errors import TwinError
from .responses import response_body, status_text

__all__ = [
    "JSON_HEADERS",
    "Paywall",
    "TwinInfo",
    "fetch_info",
]

JSON_HEADERS = {"Content-Type": "application/json"}


@dataclass(frozen=True)
class Paywall:
    target_url: Optional[str]
    target_pay_type: Optional[str]
    target_pay_quantity: Optional[Union[int, float]]

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "Paywall":
        return cls(
            target_url=values.get("targetUrl"),
            target_pay_type=values.get("targetPayType"),
            target_pay_quantity=values.get("targetPayQuantity"),
        )


@dataclass(frozen=True)
class TwinInfo:
    address: str
    binder_id: Optional[str] = None
    paywall: Optional[Paywall] = None
    raw: Dict[str, Any] = field(default_factory=dict, compare=False)

    @classmethod
    def from_response(cls, payload: Any) -> "TwinInfo":
        if not isinstance(payload, Mapping):
            raise TwinError("Twin info document has no valid address", payload)

        address = payload.get("address")
        if not isinstance(address, str) or not address:
            raise TwinError("Twin info document has no valid address", payload)

        paywall = payload.get("paywall")
        return cls(
            address=address,
            binder_id=payload.get("binderId"),
            paywall=Paywall.from_mapping(paywall) if isinstance(paywall, Mapping) else None,
            raw=dict(payload),
        )


def fetch_info(
    session: requests.Session,
    base_url: str,
    *,
    api_key: Optional[str] = None,
    timeout: float = 30,
) -> TwinInfo:
    """
    Fetch and parse the ``/info`` document of the twin at ``base_url``.

    Any non-2xx response raises a plain :class:`TwinError`; credential and
    paywall classification only applies to payment calls.
    """
    info_url = f"{base_url.rstrip('/')}/info"
    params = {"apiKey": api_key} if api_key else None
    logging.info("Resolving twin info from %s", info_url)

    response = session.get(info_url, params=params, headers=JSON_HEADERS, timeout=timeout)
    if not 200 <= response.status_code < 300:
        raise TwinError(
            status_text(response),
            response_body(response),
            status=response.status_code,
        )
    return TwinInfo.from_response(response_body(response))
