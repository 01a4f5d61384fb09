from __future__ import annotations

from typing import Any, ClassVar, Mapping

from shwary.client import ShwaryClient
from shwary.config import ShwaryConfig
from shwary.countries import CountryMetadata
from shwary.exceptions import ConfigurationError
from shwary.models import PaymentRequest, Transaction
from shwary.utility import SupportsLogging
from shwary.webhook import WebhookHandler


class Shwary:
    """
    Process-wide entry point for simple integrations.
    Initialize once, then call the class methods anywhere:

        Shwary.init_from_env()
        transaction = Shwary.pay_drc(5000, "+243812345678")

    It only holds a ShwaryClient; build a ShwaryClient directly when you need
    more than one configuration or want to inject the client.
    """

    _instance: ClassVar[ShwaryClient | None] = None

    @classmethod
    def init(cls, config: ShwaryConfig, logger: SupportsLogging | None = None) -> None:
        cls._replace(ShwaryClient(config, logger=logger))

    @classmethod
    def init_from_env(
        cls, env: Mapping[str, str] | None = None, logger: SupportsLogging | None = None
    ) -> None:
        cls._replace(ShwaryClient.from_env(env, logger=logger))

    @classmethod
    def init_from_dict(
        cls, config: Mapping[str, Any], logger: SupportsLogging | None = None
    ) -> None:
        cls._replace(ShwaryClient.from_dict(config, logger=logger))

    @classmethod
    def client(cls) -> ShwaryClient:
        """
        Raises:
            ConfigurationError: if none of the init methods was called
        """
        if cls._instance is None:
            raise ConfigurationError(
                "Shwary SDK not initialized. Call Shwary.init(), "
                "Shwary.init_from_env(), or Shwary.init_from_dict() first."
            )
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Drop (and close) the held client. Mostly useful between tests."""
        cls._replace(None)

    @classmethod
    def _replace(cls, client: ShwaryClient | None) -> None:
        if cls._instance is not None:
            cls._instance.close()
        cls._instance = client

    @classmethod
    def create_payment(cls, request: PaymentRequest) -> Transaction:
        return cls.client().create_payment(request)

    @classmethod
    def create_sandbox_payment(cls, request: PaymentRequest) -> Transaction:
        return cls.client().create_sandbox_payment(request)

    @classmethod
    def pay(
        cls,
        amount: int | float,
        phone: str,
        country: CountryMetadata,
        callback_url: str | None = None,
    ) -> Transaction:
        return cls.client().pay(amount, phone, country, callback_url)

    @classmethod
    def sandbox_pay(
        cls,
        amount: int | float,
        phone: str,
        country: CountryMetadata,
        callback_url: str | None = None,
    ) -> Transaction:
        return cls.client().sandbox_pay(amount, phone, country, callback_url)

    @classmethod
    def pay_drc(cls, amount: int | float, phone: str, callback_url: str | None = None) -> Transaction:
        return cls.client().pay_drc(amount, phone, callback_url)

    @classmethod
    def pay_kenya(cls, amount: int | float, phone: str, callback_url: str | None = None) -> Transaction:
        return cls.client().pay_kenya(amount, phone, callback_url)

    @classmethod
    def pay_uganda(cls, amount: int | float, phone: str, callback_url: str | None = None) -> Transaction:
        return cls.client().pay_uganda(amount, phone, callback_url)

    @classmethod
    def get_transaction(cls, transaction_id: str) -> Transaction:
        return cls.client().get_transaction(transaction_id)

    @classmethod
    def webhook(cls) -> WebhookHandler:
        return cls.client().webhook()

    @classmethod
    def parse_webhook(
        cls, payload: str | bytes | Mapping[str, Any], strict: bool = False
    ) -> Transaction:
        return cls.client().parse_webhook(payload, strict=strict)

    @classmethod
    def is_sandbox(cls) -> bool:
        return cls.client().is_sandbox()

    @classmethod
    def get_config(cls) -> ShwaryConfig:
        return cls.client().get_config()
