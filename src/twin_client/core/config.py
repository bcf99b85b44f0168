"""
Configuration objects and helpers for the twin client.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional
from urllib.parse import urlparse

from .environment import build_environment

__all__ = [
    "ClientConfig",
    "ConfigError",
    "load_client_config",
]

_PARAMETER_TO_ENV_KEY = {
    "url": "TWIN_URL",
    "api_key": "TWIN_API_KEY",
    "timeout_seconds": "TWIN_TIMEOUT_SECONDS",
}

DEFAULT_TIMEOUT_SECONDS = 30.0


class ConfigError(Exception):
    """Raised when the supplied configuration is invalid."""


def _collect_parameter_overrides(explicit: Mapping[str, Any]) -> Dict[str, str]:
    overrides: Dict[str, str] = {}
    for key, value in explicit.items():
        if value is None:
            continue
        overrides[_PARAMETER_TO_ENV_KEY[key]] = str(value)
    return overrides


def _normalize_url(raw_url: str, field_name: str) -> str:
    value = raw_url.strip().rstrip("/")
    if not value:
        raise ConfigError(f"{field_name} must not be empty")
    parsed = urlparse(value)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ConfigError(f"{field_name} must be an absolute http(s) URL, got '{raw_url}'")
    return value


def _parse_timeout(raw_timeout: Any) -> float:
    try:
        timeout = float(raw_timeout)
    except (TypeError, ValueError) as exc:
        raise ConfigError(
            f"TWIN_TIMEOUT_SECONDS must be a number, got '{raw_timeout}'"
        ) from exc
    if timeout <= 0:
        raise ConfigError("TWIN_TIMEOUT_SECONDS must be greater than zero")
    return timeout


@dataclass(frozen=True)
class ClientConfig:
    """
    Immutable settings owned by a single :class:`TwinClient`.
    """

    base_url: str
    api_key: Optional[str] = None
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS

    def __post_init__(self) -> None:
        object.__setattr__(self, "base_url", _normalize_url(self.base_url, "base_url"))
        object.__setattr__(self, "api_key", self.api_key or None)
        object.__setattr__(self, "timeout_seconds", _parse_timeout(self.timeout_seconds))

    @property
    def params(self) -> Dict[str, str]:
        """Query parameters attached to every request."""
        return {"apiKey": self.api_key} if self.api_key else {}

    def url_for(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def __repr__(self) -> str:
        api_key = "***" if self.api_key else None
        return (
            f"ClientConfig(base_url={self.base_url!r}, api_key={api_key!r}, "
            f"timeout_seconds={self.timeout_seconds!r})"
        )

    @classmethod
    def from_mapping(cls, values: Mapping[str, str]) -> "ClientConfig":
        url_raw = values.get("TWIN_URL")
        if url_raw is None:
            raise ConfigError("TWIN_URL must be provided")

        return cls(
            base_url=_normalize_url(url_raw, "TWIN_URL"),
            api_key=(values.get("TWIN_API_KEY") or "").strip() or None,
            timeout_seconds=values.get("TWIN_TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SECONDS),
        )

    @classmethod
    def from_env(
        cls,
        *,
        env_file: Optional[str] = ".env",
        overrides: Optional[Mapping[str, str]] = None,
        base: Optional[Mapping[str, str]] = None,
        url: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout_seconds: Optional[float | str] = None,
    ) -> "ClientConfig":
        merged_overrides = dict(overrides or {})
        merged_overrides.update(
            _collect_parameter_overrides(
                {"url": url, "api_key": api_key, "timeout_seconds": timeout_seconds}
            )
        )

        environment = build_environment(
            env_file=env_file,
            base=base,
            overrides=merged_overrides,
        )
        return cls.from_mapping(environment.variables)


def load_client_config(
    *,
    env_file: Optional[str] = ".env",
    overrides: Optional[Mapping[str, str]] = None,
    base: Optional[Mapping[str, str]] = None,
    url: Optional[str] = None,
    api_key: Optional[str] = None,
    timeout_seconds: Optional[float | str] = None,
) -> ClientConfig:
    """
    Convenience wrapper that mirrors :meth:`ClientConfig.from_env`.

    The configuration can be provided through environment variables, a
    ``.env`` file, direct keyword arguments, or any combination of the three.
    """
    return ClientConfig.from_env(
        env_file=env_file,
        overrides=overrides,
        base=base,
        url=url,
        api_key=api_key,
        timeout_seconds=timeout_seconds,
    )
