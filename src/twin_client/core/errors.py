"""
Error taxonomy raised by the twin client.

Every error carries the HTTP status text as ``message`` and the response body
verbatim as ``data``. Each class also exposes a ``kind`` tag so callers can
branch on ``err.kind`` without walking the class hierarchy::

    TwinError (GENERIC)
    ├── TwinAuthError (AUTH)
    └── TwinMicropayError (MICROPAY)
        ├── TwinMicropayAmountMismatchError (AMOUNT_MISMATCH)
        └── TwinMicropayTokenMismatchError (TOKEN_MISMATCH)
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional

__all__ = [
    "ErrorKind",
    "TwinAuthError",
    "TwinError",
    "TwinMicropayAmountMismatchError",
    "TwinMicropayError",
    "TwinMicropayTokenMismatchError",
]


class ErrorKind(str, Enum):
    GENERIC = "generic"
    AUTH = "auth"
    MICROPAY = "micropay"
    AMOUNT_MISMATCH = "amount_mismatch"
    TOKEN_MISMATCH = "token_mismatch"


class TwinError(Exception):
    """Raised when a twin responds with a non-2xx status."""

    kind = ErrorKind.GENERIC

    def __init__(
        self,
        message: str,
        data: Any = None,
        *,
        status: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.data = data
        self.status = status

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(message={self.message!r}, "
            f"status={self.status!r}, data={self.data!r})"
        )


class TwinAuthError(TwinError):
    """Raised when the twin rejects the credentials (401/403)."""

    kind = ErrorKind.AUTH


class TwinMicropayError(TwinError):
    """Raised when a micropayment is rejected for an unrecognised reason."""

    kind = ErrorKind.MICROPAY


class TwinMicropayAmountMismatchError(TwinMicropayError):
    """Raised when the paid amount differs from the paywall's quantity."""

    kind = ErrorKind.AMOUNT_MISMATCH


class TwinMicropayTokenMismatchError(TwinMicropayError):
    """Raised when the paid token type differs from the paywall's type."""

    kind = ErrorKind.TOKEN_MISMATCH
