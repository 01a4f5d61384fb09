"""
Python client for the Shwary mobile money payment API (DRC, Kenya, Uganda).

    from shwary import ShwaryClient, ShwaryConfig

    client = ShwaryClient(ShwaryConfig.from_env())
    transaction = client.pay_drc(5000, "+243812345678")
"""

import logging

from shwary.client import ShwaryClient
from shwary.config import ConnectionConfig, ShwaryConfig
from shwary.countries import Country, CountryCode, CountryMetadata
from shwary.exceptions import (
    ApiError,
    AuthenticationError,
    ConfigurationError,
    ShwaryError,
    ValidationError,
)
from shwary.facade import Shwary
from shwary.models import PaymentRequest, Transaction, TransactionStatus
from shwary.utility import SupportsLogging
from shwary.webhook import WebhookHandler, WebhookResponse

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "ApiError",
    "AuthenticationError",
    "ConfigurationError",
    "ConnectionConfig",
    "Country",
    "CountryCode",
    "CountryMetadata",
    "PaymentRequest",
    "Shwary",
    "ShwaryClient",
    "ShwaryConfig",
    "ShwaryError",
    "SupportsLogging",
    "Transaction",
    "TransactionStatus",
    "ValidationError",
    "WebhookHandler",
    "WebhookResponse",
]
