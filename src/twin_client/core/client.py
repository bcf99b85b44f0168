"""
HTTP client for a twin's informational and payment endpoints.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests

from .config import ClientConfig
from .info import JSON_HEADERS, TwinInfo, fetch_info
from .payloads import (
    Amount,
    PaymentRequest,
    build_micropay_request,
    build_transfer_request,
)
from .responses import Operation, classify_response

__all__ = [
    "BINARY_HEADERS",
    "TwinClient",
]

BINARY_HEADERS = {"Content-Type": "application/octet-stream"}

DEFAULT_PAYWALL_PATH = "/paywall"


class TwinClient:
    """
    Client bound to a single twin.

    The ``session`` is the transport: it must return responses for non-2xx
    statuses without raising, which is what :class:`requests.Session` does.
    Pass a prepared session to control pooling, retries or tests.
    """

    def __init__(
        self,
        config: ClientConfig,
        *,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.config = config
        self.session = session or requests.Session()

    def _send(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        data: Optional[bytes] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> requests.Response:
        return self.session.request(
            method,
            self.config.url_for(path),
            params=self.config.params,
            headers=dict(headers or JSON_HEADERS),
            json=json,
            data=data,
            timeout=self.config.timeout_seconds,
        )

    def _send_payment(self, payment: PaymentRequest) -> requests.Response:
        headers = BINARY_HEADERS if payment.data is not None else JSON_HEADERS
        return self._send(
            payment.method,
            payment.path,
            json=payment.json,
            data=payment.data,
            headers=headers,
        )

    def request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        data: Optional[bytes] = None,
    ) -> Any:
        """
        Send an arbitrary request to this twin and return the response body.
        """
        headers = BINARY_HEADERS if data is not None else JSON_HEADERS
        response = self._send(method.upper(), path, json=json, data=data, headers=headers)
        return classify_response(response, Operation.GENERIC)

    def info(self) -> Dict[str, Any]:
        """Return this twin's ``/info`` document."""
        response = self._send("GET", "/info")
        return classify_response(response, Operation.INFO)

    def twin_info(self) -> TwinInfo:
        return fetch_info(
            self.session,
            self.config.base_url,
            api_key=self.config.api_key,
            timeout=self.config.timeout_seconds,
        )

    def resolve(self, url: str) -> TwinInfo:
        """
        Resolve the twin at ``url``. Foreign twins are queried without our key.
        """
        return fetch_info(self.session, url, timeout=self.config.timeout_seconds)

    def pay(self, url: str, token_type_hash: str, amount: Amount) -> Any:
        """
        Transfer ``amount`` tokens of ``token_type_hash`` to the twin at ``url``.
        """
        destination = self.resolve(url)
        payment = build_transfer_request(destination.address, token_type_hash, amount)
        logging.info(
            "Transferring %s of %s to %s", amount, token_type_hash, destination.address
        )
        response = self._send_payment(payment)
        return classify_response(response, Operation.PAY)

    def micropay(
        self,
        url: str,
        token_type_hash: str,
        amount: Amount,
        *,
        method: str = "GET",
        body: Any = None,
        paywall_path: str = DEFAULT_PAYWALL_PATH,
    ) -> Any:
        """
        Pay the paywall of the twin at ``url`` through this twin.

        The destination address is read from the paywalled twin's ``/info``
        document; the payment itself is routed through this client's own
        twin, which forwards ``method``/``body`` to ``url + paywall_path``.
        """
        destination = self.resolve(url)
        destination_url = f"{url.rstrip('/')}{paywall_path}" if paywall_path else url
        payment = build_micropay_request(
            destination.address,
            token_type_hash,
            amount,
            destination_url,
            method=method,
            body=body,
        )
        logging.info(
            "Submitting micropayment of %s %s to %s", amount, token_type_hash, destination_url
        )
        response = self._send_payment(payment)
        return classify_response(response, Operation.MICROPAY)

    def fetch(self, file_id: str) -> bytes:
        """Download the binary file ``file_id`` from this twin."""
        response = self._send("GET", f"/fetch/{file_id}")
        return classify_response(response, Operation.GENERIC, binary=True)

    def import_file(self, payload: bytes | str) -> Any:
        """Upload a binary file into this twin."""
        data = payload.encode("utf-8") if isinstance(payload, str) else bytes(payload)
        response = self._send("POST", "/import", data=data, headers=BINARY_HEADERS)
        return classify_response(response, Operation.GENERIC)
