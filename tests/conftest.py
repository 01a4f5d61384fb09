"""Shared pytest fixtures for the test suite."""

from typing import Any

import pytest

from shwary.config import ShwaryConfig
from shwary.facade import Shwary


@pytest.fixture(autouse=True)
def reset_facade():
    yield
    Shwary.reset()


@pytest.fixture
def config() -> ShwaryConfig:
    return ShwaryConfig(merchant_id="merchant-id", merchant_key="merchant-secret-key")


@pytest.fixture
def sandbox_config() -> ShwaryConfig:
    return ShwaryConfig(
        merchant_id="merchant-id", merchant_key="merchant-secret-key", sandbox=True
    )


@pytest.fixture
def transaction_payload() -> dict[str, Any]:
    """A fully populated transaction as returned by the API."""
    return {
        "id": "c0fdfe50-24be-4de1-9f66-84608fd45a5f",
        "userId": "5c2d6a41-0b1e-4f5e-9a53-12c1b9c3e2aa",
        "amount": 5000,
        "currency": "CDF",
        "type": "deposit",
        "status": "completed",
        "recipientPhoneNumber": "+243812345678",
        "referenceId": "ref-0001",
        "metadata": {"orderId": "A-42"},
        "failureReason": None,
        "completedAt": "2024-01-15T12:05:00Z",
        "createdAt": "2024-01-15T12:00:00Z",
        "updatedAt": "2024-01-15T12:05:00Z",
        "isSandbox": False,
        "pretiumTransactionId": "pt-778899",
        "error": None,
    }
