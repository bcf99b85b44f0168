"""
Classification of twin HTTP responses into results or errors.

The twin does not always return a machine-readable error code, so the
classifier combines the intent of the call (was it a micropayment?) with
whatever the body offers, and falls back to :class:`TwinError` when nothing
more specific applies. Rules are evaluated in order, first match wins:

1. 401/403 -> :class:`TwinAuthError`
2. 4xx micropay reporting an amount disagreement -> amount mismatch
3. 4xx micropay reporting a token-type disagreement -> token mismatch
4. any other failed micropay -> :class:`TwinMicropayError`
5. any other non-2xx -> :class:`TwinError`
"""

from __future__ import annotations

import logging
from enum import Enum
from http import HTTPStatus
from typing import Any, Mapping, Optional

import requests

from .errors import (
    TwinAuthError,
    TwinError,
    TwinMicropayAmountMismatchError,
    TwinMicropayError,
    TwinMicropayTokenMismatchError,
)

__all__ = [
    "AMOUNT_MISMATCH_CODES",
    "AMOUNT_MISMATCH_MARKERS",
    "Operation",
    "TOKEN_MISMATCH_CODES",
    "TOKEN_MISMATCH_MARKERS",
    "classify_response",
    "error_for_response",
    "response_body",
    "status_text",
]

AUTH_STATUSES = frozenset({401, 403})

# Lower-cased fragments searched for in the body's "error"/"message" text.
AMOUNT_MISMATCH_MARKERS = (
    "amount mismatch",
    "quantity mismatch",
    "wrong amount",
    "incorrect amount",
)
TOKEN_MISMATCH_MARKERS = (
    "token mismatch",
    "type mismatch",
    "wrong token",
    "incorrect token",
)

# Exact values accepted in the body's "code" field.
AMOUNT_MISMATCH_CODES = frozenset({"AMOUNT_MISMATCH", "AmountMismatch"})
TOKEN_MISMATCH_CODES = frozenset({"TOKEN_MISMATCH", "TokenMismatch"})


class Operation(str, Enum):
    INFO = "info"
    PAY = "pay"
    MICROPAY = "micropay"
    GENERIC = "generic"


def status_text(response: requests.Response) -> str:
    if response.reason:
        return response.reason
    try:
        return HTTPStatus(response.status_code).phrase
    except ValueError:
        return f"HTTP {response.status_code}"


def response_body(response: requests.Response) -> Any:
    """
    Return the body as parsed JSON, falling back to text, or ``None`` if empty.
    """
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


def _redacted_url(response: requests.Response) -> str:
    # the apiKey travels in the query string
    return (response.url or "").split("?", 1)[0]


def _is_success(response: requests.Response) -> bool:
    return 200 <= response.status_code < 300


def _reported_text(body: Any) -> str:
    if isinstance(body, str):
        return body.lower()
    if not isinstance(body, Mapping):
        return ""
    parts = []
    for key in ("error", "message"):
        value = body.get(key)
        if isinstance(value, str):
            parts.append(value)
    return " ".join(parts).lower()


def _reports(body: Any, markers: tuple, codes: frozenset) -> bool:
    if isinstance(body, Mapping) and isinstance(body.get("code"), str):
        if body["code"] in codes:
            return True
    text = _reported_text(body)
    return any(marker in text for marker in markers)


def error_for_response(
    response: requests.Response,
    operation: Operation,
) -> Optional[TwinError]:
    """
    Return the error matching ``response``, or ``None`` for a 2xx response.
    """
    if _is_success(response):
        return None

    status = response.status_code
    message = status_text(response)
    body = response_body(response)

    if status in AUTH_STATUSES:
        return TwinAuthError(message, body, status=status)

    if operation is Operation.MICROPAY:
        if 400 <= status < 500:
            if _reports(body, AMOUNT_MISMATCH_MARKERS, AMOUNT_MISMATCH_CODES):
                return TwinMicropayAmountMismatchError(message, body, status=status)
            if _reports(body, TOKEN_MISMATCH_MARKERS, TOKEN_MISMATCH_CODES):
                return TwinMicropayTokenMismatchError(message, body, status=status)
        return TwinMicropayError(message, body, status=status)

    return TwinError(message, body, status=status)


def classify_response(
    response: requests.Response,
    operation: Operation,
    *,
    binary: bool = False,
) -> Any:
    """
    Return the body of a successful response or raise the matching error.

    With ``binary=True`` the raw bytes are returned instead of parsed JSON.
    """
    error = error_for_response(response, operation)
    if error is not None:
        logging.warning(
            "Twin %s request to %s failed with %s: %s",
            operation.value,
            _redacted_url(response),
            response.status_code,
            type(error).__name__,
        )
        raise error

    if binary:
        return response.content
    return response_body(response)
