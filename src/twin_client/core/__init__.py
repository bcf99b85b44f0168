"""
Core primitives for resolving, paying and classifying twin responses.
"""

from .client import TwinClient
from .config import ClientConfig, ConfigError, load_client_config
from .environment import TwinEnvironment, build_environment
from .errors import (
    ErrorKind,
    TwinAuthError,
    TwinError,
    TwinMicropayAmountMismatchError,
    TwinMicropayError,
    TwinMicropayTokenMismatchError,
)
from .info import Paywall, TwinInfo, fetch_info
from .payloads import (
    PaymentRequest,
    build_micropay_request,
    build_transfer_request,
    encode_destination_url,
    format_amount,
)
from .responses import Operation, classify_response, error_for_response

__all__ = [
    "ClientConfig",
    "ConfigError",
    "ErrorKind",
    "Operation",
    "PaymentRequest",
    "Paywall",
    "TwinAuthError",
    "TwinClient",
    "TwinEnvironment",
    "TwinError",
    "TwinInfo",
    "TwinMicropayAmountMismatchError",
    "TwinMicropayError",
    "TwinMicropayTokenMismatchError",
    "build_environment",
    "build_micropay_request",
    "build_transfer_request",
    "classify_response",
    "encode_destination_url",
    "error_for_response",
    "fetch_info",
    "format_amount",
    "load_client_config",
]
