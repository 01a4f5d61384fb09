from __future__ import annotations

import logging
from typing import Any

import requests

from shwary.config import ShwaryConfig
from shwary.connection import ConnectionPool
from shwary.exceptions import ApiError, AuthenticationError
from shwary.utility import SupportsLogging, sanitize_for_log


class HttpClient:
    """
    Sends authenticated JSON requests to the Shwary API and turns the outcome
    into either the parsed body or a ShwaryError.

    HttpClient.post(endpoint, data) / HttpClient.get(endpoint, params) return the parsed body.
    Raises AuthenticationError on 401, ApiError on any other failure.
    """

    def __init__(
        self,
        config: ShwaryConfig,
        pool: ConnectionPool | None = None,
        logger: SupportsLogging | None = None,
    ) -> None:
        self.config = config
        self.pool = pool or ConnectionPool()
        self.logger = logger or logging.getLogger(__name__)

    def post(self, endpoint: str, data: dict[str, Any]) -> Any:
        return self.request("POST", endpoint, json=data)

    def get(self, endpoint: str, params: dict[str, Any] | None = None) -> Any:
        if params:
            params = {k: v for k, v in params.items() if v is not None}
        return self.request("GET", endpoint, params=params or None)

    def request(
        self,
        method: str,
        endpoint: str,
        json: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """
        Make a request and classify the response.

        Raises:
            AuthenticationError: on HTTP 401
            ApiError: on any other non-2xx status (code = status),
                or on timeouts and transport failures (code 0)
        """
        url = self.build_url(endpoint)
        headers = self.get_headers()

        self.logger.debug(
            f"{method} {endpoint} headers={sanitize_for_log(headers)} "
            f"body={sanitize_for_log(json)}"
        )

        try:
            response = self.pool.request(
                method,
                url,
                headers=headers,
                json=json,
                params=params,
                timeout=self.config.timeout_seconds,
            )
        except requests.exceptions.Timeout as e:
            self.logger.error(f"Request timeout: {method} {endpoint}")
            raise ApiError.network_error(
                f"Request timeout after {self.config.timeout}ms", e
            ) from e
        except requests.exceptions.RequestException as e:
            self.logger.error(f"Network error: {method} {endpoint} - {e}")
            raise ApiError.network_error(f"Network error: {e}", e) from e

        self.logger.debug(f"{method} {endpoint} - {response.status_code}")
        return self.handle_response(response)

    def get_headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "x-merchant-id": self.config.merchant_id,
            "x-merchant-key": self.config.merchant_key,
        }

    def build_url(self, endpoint: str) -> str:
        """Absolute endpoints are used as-is, anything else is joined to the API url."""
        if endpoint.startswith(("http://", "https://")):
            return endpoint
        return f"{self.config.api_url}/{endpoint.lstrip('/')}"

    def handle_response(self, response: requests.Response) -> Any:
        body = self.parse_body(response)

        if not 200 <= response.status_code < 300:
            if response.status_code == 401:
                raise AuthenticationError.invalid_credentials()
            # 404 and 502 go through the same path; the status table gives them their messages
            raise ApiError.from_response(
                response.status_code, body, response.reason or "", response
            )

        return body

    def parse_body(self, response: requests.Response) -> Any:
        """
        Best-effort body decoding: JSON when the content type says so, raw text
        when it does not or when decoding fails, None if the body cannot be read.
        """
        try:
            content_type = response.headers.get("Content-Type", "")
            if "application/json" in content_type:
                try:
                    return response.json()
                except ValueError:
                    return response.text
            return response.text
        except Exception as e:
            self.logger.debug(f"Could not read response body: {e}")
            return None
