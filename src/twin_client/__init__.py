"""
Public facade for the twin client package.

Re-exports the most useful pieces so integrators can
``from twin_client import ...`` without navigating the package.
"""

from .api import create_twin_client, micropay
from .core import (
    ClientConfig,
    ConfigError,
    ErrorKind,
    Operation,
    PaymentRequest,
    Paywall,
    TwinAuthError,
    TwinClient,
    TwinEnvironment,
    TwinError,
    TwinInfo,
    TwinMicropayAmountMismatchError,
    TwinMicropayError,
    TwinMicropayTokenMismatchError,
    build_environment,
    build_micropay_request,
    build_transfer_request,
    classify_response,
    error_for_response,
    fetch_info,
    load_client_config,
)

__version__ = "0.1.0"

__all__ = (
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
    "create_twin_client",
    "error_for_response",
    "fetch_info",
    "load_client_config",
    "micropay",
)
