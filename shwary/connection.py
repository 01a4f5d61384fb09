from typing import Any
import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

import logging

from shwary.config import ConnectionConfig

logger = logging.getLogger(__name__)


class ConnectionPool:
    """
    Lazily created requests.Session with connection pooling.

    Retries are off unless max_retries is set; only idempotent GETs are ever retried,
    so a payment POST is sent at most once.
    """

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
        self.session: requests.Session | None = None

    @classmethod
    def from_config(cls, config: ConnectionConfig) -> "ConnectionPool":
        return cls(
            pool_size=config.pool_size,
            keep_alive=config.keep_alive,
            max_retries=config.max_retries,
            backoff_factor=config.backoff_factor,
        )

    def _get_session(self) -> requests.Session:
        """Get or create a session"""
        if self.session is None:
            self.session = self._create_session()
        return self.session

    def _create_session(self) -> requests.Session:
        """Create a new requests session with connection pooling and retry strategy."""
        session = requests.Session()

        retry_strategy = Retry(
            total=self.max_retries,
            read=False,  # read timeouts surface as requests.ReadTimeout
            backoff_factor=self.backoff_factor,
            status_forcelist=[429, 500, 502, 503, 504],
            allowed_methods=["GET"],
            raise_on_status=False,  # hand the last response back so it can be classified
        )

        adapter = HTTPAdapter(
            pool_connections=self.pool_size,
            pool_maxsize=self.pool_size,
            max_retries=retry_strategy,
        )

        session.mount("https://", adapter)

        if self.keep_alive:
            session.headers.update({
                "Connection": "keep-alive",
                "Keep-Alive": "timeout=30, max=100",
            })

        return session

    def request(
        self,
        method: str,
        url: str,
        headers: dict[str, str] | None = None,
        json: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
        **kwargs,
    ) -> requests.Response:
        """
        Make an HTTP request using the connection pool.

        Args:
            method: HTTP method (GET, POST, etc.)
            url: Target URL
            headers: Optional headers dict
            json: JSON payload for POST/PUT requests
            params: URL parameters
            **kwargs: Additional arguments passed to requests (timeout, ...)

        Returns:
            requests.Response object

        Raises:
            ValueError: For non-HTTPS URLs
            requests.RequestException: For connection errors and timeouts
        """
        if not url.startswith("https://"):
            raise ValueError("Only HTTPS URLs are allowed for security reasons")

        session = self._get_session()

        try:
            return session.request(
                method=method.upper(),
                url=url,
                headers=headers,
                json=json,
                params=params,
                **kwargs,
            )
        except requests.exceptions.RequestException as e:
            logger.error(f"Request failed: {method} {url} - {e}")
            raise

    def close(self) -> None:
        """Close the session"""
        if self.session is not None:
            self.session.close()
            self.session = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
