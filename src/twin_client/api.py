"""
Public, high-level helpers for talking to a twin.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

import requests

from .core.client import TwinClient
from .core.config import ClientConfig, ConfigError, load_client_config
from .core.payloads import Amount

__all__ = [
    "create_twin_client",
    "micropay",
]


def create_twin_client(
    *,
    config: Optional[ClientConfig] = None,
    session: Optional[requests.Session] = None,
    env_file: Optional[str] = ".env",
    overrides: Optional[Mapping[str, str]] = None,
    base: Optional[Mapping[str, str]] = None,
    url: Optional[str] = None,
    api_key: Optional[str] = None,
    timeout_seconds: Optional[float | str] = None,
) -> TwinClient:
    """
    Construct a :class:`TwinClient`.

    Callers can either supply a ready-made :class:`ClientConfig` or let the
    helper assemble one from environment data.
    """
    if config is not None:
        extras = (overrides, base, url, api_key, timeout_seconds)
        if any(item is not None and item != {} for item in extras):
            raise ConfigError(
                "Provide either a pre-built ClientConfig or individual parameters, not both."
            )
        cfg = config
    else:
        cfg = load_client_config(
            env_file=env_file,
            overrides=overrides,
            base=base,
            url=url,
            api_key=api_key,
            timeout_seconds=timeout_seconds,
        )
    return TwinClient(cfg, session=session)


def micropay(
    destination_url: str,
    token_type_hash: str,
    amount: Amount,
    *,
    config: Optional[ClientConfig] = None,
    session: Optional[requests.Session] = None,
    env_file: Optional[str] = ".env",
    method: str = "GET",
    body: Any = None,
) -> Any:
    """
    One-shot micropayment through the twin described by the environment.
    """
    client = create_twin_client(config=config, session=session, env_file=env_file)
    return client.micropay(
        destination_url,
        token_type_hash,
        amount,
        method=method,
        body=body,
    )
