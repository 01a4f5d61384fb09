from __future__ import annotations

import logging
from typing import Any, Mapping
from urllib.parse import quote

from shwary.config import ConnectionConfig, ShwaryConfig
from shwary.connection import ConnectionPool
from shwary.countries import Country, CountryMetadata
from shwary.exceptions import ApiError, ValidationError
from shwary.http import HttpClient
from shwary.models import PaymentRequest, Transaction
from shwary.utility import SupportsLogging, mask_phone_number
from shwary.webhook import WebhookHandler


class ShwaryClient:
    """
    Client for the Shwary payment API.

        config = ShwaryConfig.from_env()
        with ShwaryClient(config) as client:
            transaction = client.pay_drc(5000, "+243812345678")

    Every call is independent: one request, no retries. Payment methods raise
    ValidationError before anything is sent when the input is invalid.
    """

    def __init__(
        self,
        config: ShwaryConfig,
        logger: SupportsLogging | None = None,
        connection_config: ConnectionConfig | None = None,
        pool: ConnectionPool | None = None,
    ) -> None:
        self.config = config
        self.logger = logger or logging.getLogger(__name__)
        self.pool = pool or ConnectionPool.from_config(
            connection_config or ConnectionConfig.default()
        )
        self.http = HttpClient(config, self.pool, logger=self.logger)
        self.webhook_handler = WebhookHandler()

    @classmethod
    def from_env(
        cls, env: Mapping[str, str] | None = None, logger: SupportsLogging | None = None
    ) -> "ShwaryClient":
        """Create a client from SHWARY_* environment variables, see ShwaryConfig.from_env"""
        return cls(ShwaryConfig.from_env(env), logger=logger)

    @classmethod
    def from_dict(
        cls, config: Mapping[str, Any], logger: SupportsLogging | None = None
    ) -> "ShwaryClient":
        return cls(ShwaryConfig.from_dict(config), logger=logger)

    def create_payment(self, request: PaymentRequest) -> Transaction:
        """
        Send a payment request.
        Routed to the sandbox endpoint when the client is configured for sandbox.

        Raises:
            AuthenticationError: if the merchant credentials are rejected
            ApiError: for any other API or network failure
        """
        return self._send_payment(self._payment_endpoint(request.country), request)

    def create_sandbox_payment(self, request: PaymentRequest) -> Transaction:
        """
        Send a payment request to the sandbox endpoint, regardless of configuration.
        Sandbox payments complete immediately without reaching a mobile money provider.
        """
        return self._send_payment(self._sandbox_payment_endpoint(request.country), request)

    def pay(
        self,
        amount: int | float,
        phone: str,
        country: CountryMetadata,
        callback_url: str | None = None,
    ) -> Transaction:
        """
        Create a payment.
        Args:
            amount: Amount in the country's currency
            phone: Customer phone number in E.164 format, with the country's dial code
            country: One of Country.DRC, Country.KENYA, Country.UGANDA
            callback_url: HTTPS url Shwary will post transaction updates to
        Raises:
            ValidationError, AuthenticationError, ApiError
        """
        request = PaymentRequest.create(amount, phone, country, callback_url)
        return self.create_payment(request)

    def sandbox_pay(
        self,
        amount: int | float,
        phone: str,
        country: CountryMetadata,
        callback_url: str | None = None,
    ) -> Transaction:
        request = PaymentRequest.create(amount, phone, country, callback_url)
        return self.create_sandbox_payment(request)

    def pay_drc(
        self, amount: int | float, phone: str, callback_url: str | None = None
    ) -> Transaction:
        """Payment in CDF; amount must be at least 2900 and phone must start with +243."""
        return self.pay(amount, phone, Country.DRC, callback_url)

    def pay_kenya(
        self, amount: int | float, phone: str, callback_url: str | None = None
    ) -> Transaction:
        """Payment in KES; phone must start with +254."""
        return self.pay(amount, phone, Country.KENYA, callback_url)

    def pay_uganda(
        self, amount: int | float, phone: str, callback_url: str | None = None
    ) -> Transaction:
        """Payment in UGX; phone must start with +256."""
        return self.pay(amount, phone, Country.UGANDA, callback_url)

    def get_transaction(self, transaction_id: str) -> Transaction:
        """Retrieve a transaction by its ID"""
        if not transaction_id:
            raise ValidationError.missing_required_field("id")

        endpoint = f"merchants/transactions/{quote(str(transaction_id), safe='')}"
        response = self.http.get(endpoint)
        return self._to_transaction(response)

    def webhook(self) -> WebhookHandler:
        return self.webhook_handler

    def parse_webhook(
        self, payload: str | bytes | Mapping[str, Any], strict: bool = False
    ) -> Transaction:
        """Parse a Shwary callback body into a Transaction, see WebhookHandler.parse"""
        return self.webhook_handler.parse(payload, strict=strict)

    def is_sandbox(self) -> bool:
        return self.config.is_sandbox()

    def get_config(self) -> ShwaryConfig:
        return self.config

    def close(self) -> None:
        self.pool.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def _send_payment(self, endpoint: str, request: PaymentRequest) -> Transaction:
        self.logger.info(
            f"Creating payment of {request.amount} {request.country.currency} "
            f"for {mask_phone_number(request.client_phone_number)}"
        )
        response = self.http.post(endpoint, request.to_api_payload())
        transaction = self._to_transaction(response)
        self.logger.info(f"Payment {transaction.id} created: {transaction.status.value}")
        return transaction

    @staticmethod
    def _to_transaction(response: Any) -> Transaction:
        if not isinstance(response, dict):
            raise ApiError.unexpected_response(200, response)
        return Transaction.from_api_response(response)

    def _payment_endpoint(self, country: CountryMetadata) -> str:
        if self.config.is_sandbox():
            return self._sandbox_payment_endpoint(country)
        return f"merchants/payment/{country.code.value}"

    @staticmethod
    def _sandbox_payment_endpoint(country: CountryMetadata) -> str:
        return f"merchants/payment/sandbox/{country.code.value}"
