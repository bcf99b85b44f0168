"""
Helpers for constructing the payment requests sent to a twin.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Optional, Union
from urllib.parse import quote

__all__ = [
    "Amount",
    "PaymentRequest",
    "build_micropay_request",
    "build_transfer_request",
    "encode_destination_url",
    "format_amount",
]

Amount = Union[Decimal, int, float, str]

# Characters left unescaped by JavaScript's encodeURIComponent.
_URL_COMPONENT_SAFE = "-_.!~*'()"


@dataclass(frozen=True)
class PaymentRequest:
    method: str
    path: str
    json: Optional[Any] = None
    data: Optional[bytes] = None


def encode_destination_url(url: str) -> str:
    """
    Percent-encode ``url`` so it travels as a single path segment.
    """
    return quote(url, safe=_URL_COMPONENT_SAFE)


def format_amount(amount: Amount) -> str:
    """
    Serialise ``amount`` as a plain decimal string without rounding.
    """
    if isinstance(amount, float) and amount.is_integer():
        return str(int(amount))
    if isinstance(amount, Decimal):
        return format(amount, "f")
    return str(amount)


def _json_amount(amount: Amount) -> Union[int, float, str]:
    if isinstance(amount, Decimal):
        return int(amount) if amount == amount.to_integral_value() else float(amount)
    if isinstance(amount, (int, float)):
        return amount
    return format_amount(amount)


def build_micropay_request(
    destination_address: str,
    token_type_hash: str,
    amount: Amount,
    destination_url: str,
    *,
    method: str = "GET",
    body: Optional[Any] = None,
) -> PaymentRequest:
    """
    Build the ``/pay/{address}/{type}/{amount}/{url}`` micropayment request.

    ``body`` is sent raw when it is ``bytes`` and as JSON otherwise. The amount
    is not validated here; the paying twin reports mismatches back.
    """
    path = "/pay/{}/{}/{}/{}".format(
        destination_address,
        token_type_hash,
        format_amount(amount),
        encode_destination_url(destination_url),
    )
    if isinstance(body, (bytes, bytearray)):
        return PaymentRequest(method=method.upper(), path=path, data=bytes(body))
    return PaymentRequest(method=method.upper(), path=path, json=body)


def build_transfer_request(
    destination_address: str,
    token_type_hash: str,
    amount: Amount,
) -> PaymentRequest:
    """Build the direct ``POST /pay`` transfer from the caller's own twin."""
    return PaymentRequest(
        method="POST",
        path="/pay",
        json={
            "address": destination_address,
            "typeHash": token_type_hash,
            "amount": _json_amount(amount),
        },
    )
