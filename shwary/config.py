from __future__ import annotations

import math
import os
from dataclasses import dataclass, field
from numbers import Real
from typing import Any, Mapping
from urllib.parse import urlparse

from shwary.exceptions import ConfigurationError

DEFAULT_BASE_URL = "https://api.shwary.com"
DEFAULT_TIMEOUT = 30000  # milliseconds
MIN_TIMEOUT = 1000
API_VERSION = "v1"

TRUTHY_ENV_VALUES = ("true", "1", "yes")


def _parse_timeout(raw: Any) -> int | float:
    """Numbers pass through unchanged; strings are read as int, then float."""
    if isinstance(raw, Real) and not isinstance(raw, bool):
        return raw
    if isinstance(raw, str):
        try:
            return int(raw)
        except ValueError:
            try:
                return float(raw)
            except ValueError:
                pass
    raise ConfigurationError(f"timeout must be a number of milliseconds, got {raw!r}")


def _parse_flag(raw: Any) -> bool:
    if isinstance(raw, str):
        return raw.strip().lower() in TRUTHY_ENV_VALUES
    return bool(raw)


@dataclass(frozen=True)
class ShwaryConfig:
    """
    Shwary core configuration.
    merchant_id and merchant_key can be found in your Shwary dashboard.

    Immutable once built; every request made by a client reads from it.
    """

    merchant_id: str
    merchant_key: str = field(repr=False)
    base_url: str = DEFAULT_BASE_URL
    timeout: int | float = DEFAULT_TIMEOUT  # milliseconds
    sandbox: bool = False

    def __post_init__(self) -> None:
        if isinstance(self.base_url, str):
            object.__setattr__(self, "base_url", self.base_url.rstrip("/"))
        self.validate()

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> "ShwaryConfig":
        """
        Create config from environment variables.
        expected variables:
            - SHWARY_MERCHANT_ID
            - SHWARY_MERCHANT_KEY
            - SHWARY_BASE_URL (optional)
            - SHWARY_TIMEOUT (optional, milliseconds)
            - SHWARY_SANDBOX (optional, "true", "1" or "yes" enables it)
        Args:
            env: Mapping to read from instead of os.environ
        """
        if env is None:
            env = os.environ

        raw_timeout = env.get("SHWARY_TIMEOUT")
        timeout = _parse_timeout(raw_timeout) if raw_timeout else DEFAULT_TIMEOUT

        return cls(
            merchant_id=env.get("SHWARY_MERCHANT_ID", ""),
            merchant_key=env.get("SHWARY_MERCHANT_KEY", ""),
            base_url=env.get("SHWARY_BASE_URL") or DEFAULT_BASE_URL,
            timeout=timeout,
            sandbox=env.get("SHWARY_SANDBOX") in TRUTHY_ENV_VALUES,
        )

    @classmethod
    def from_dict(cls, config_dict: Mapping[str, Any]) -> "ShwaryConfig":
        """
        Create config from dictionary.
        expected keys (camelCase or snake_case):
            - merchantId / merchant_id
            - merchantKey / merchant_key
            - baseUrl / base_url
            - timeout
            - sandbox
        """
        timeout = _parse_timeout(config_dict.get("timeout") or DEFAULT_TIMEOUT)

        return cls(
            merchant_id=str(
                config_dict.get("merchantId") or config_dict.get("merchant_id") or ""
            ),
            merchant_key=str(
                config_dict.get("merchantKey") or config_dict.get("merchant_key") or ""
            ),
            base_url=str(
                config_dict.get("baseUrl") or config_dict.get("base_url") or DEFAULT_BASE_URL
            ),
            timeout=timeout,
            sandbox=_parse_flag(config_dict.get("sandbox") or False),
        )

    def validate(self) -> None:
        """Validate required configuration fields."""
        if not self.merchant_id or not isinstance(self.merchant_id, str):
            raise ConfigurationError("Merchant ID is required and must be a string")

        if not self.merchant_key or not isinstance(self.merchant_key, str):
            raise ConfigurationError("Merchant Key is required and must be a string")

        if (
            isinstance(self.timeout, bool)
            or not isinstance(self.timeout, Real)
            or not math.isfinite(self.timeout)
        ):
            raise ConfigurationError("Timeout must be a finite number of milliseconds")

        if self.timeout < MIN_TIMEOUT:
            raise ConfigurationError(f"Timeout must be at least {MIN_TIMEOUT} milliseconds")

        if not isinstance(self.base_url, str) or not self.base_url.startswith("https://"):
            raise ConfigurationError("base_url must start with https://")

        if not urlparse(self.base_url).netloc:
            raise ConfigurationError(f"Invalid base URL: {self.base_url}")

    @property
    def api_url(self) -> str:
        """Base URL joined with the API version segment."""
        return f"{self.base_url}/api/{API_VERSION}"

    @property
    def timeout_seconds(self) -> float:
        return self.timeout / 1000

    def is_sandbox(self) -> bool:
        return self.sandbox


class ConnectionConfig:
    """Configuration for Shwary connection settings."""

    def __init__(
        self,
        pool_size: int = 1,
        keep_alive: bool = True,
        max_retries: int = 0,
        backoff_factor: float = 0.3,
    ):
        self.pool_size = pool_size
        self.keep_alive = keep_alive
        self.max_retries = max_retries
        self.backoff_factor = backoff_factor

    @classmethod
    def default(cls) -> "ConnectionConfig":
        """One kept-alive connection and no retries; callers own the retry policy."""
        return cls(pool_size=1, keep_alive=True, max_retries=0)

    @classmethod
    def high_throughput(cls) -> "ConnectionConfig":
        """Configuration for many payments issued from several threads."""
        return cls(pool_size=5, keep_alive=True, max_retries=0)
