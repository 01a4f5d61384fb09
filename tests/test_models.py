"""Tests for PaymentRequest, Transaction and TransactionStatus."""

from datetime import datetime, timezone

import pytest

from shwary.countries import Country
from shwary.exceptions import ValidationError
from shwary.models import PaymentRequest, Transaction, TransactionStatus

# =============================================================================
# TransactionStatus
# =============================================================================


class TestTransactionStatus:
    def test_values(self) -> None:
        assert {s.value for s in TransactionStatus} == {"pending", "completed", "failed"}

    def test_terminal_statuses(self) -> None:
        assert not TransactionStatus.PENDING.is_terminal()
        assert TransactionStatus.COMPLETED.is_terminal()
        assert TransactionStatus.FAILED.is_terminal()

    def test_only_completed_is_successful(self) -> None:
        assert TransactionStatus.COMPLETED.is_successful()
        assert not TransactionStatus.FAILED.is_successful()
        assert TransactionStatus.PENDING.is_pending()


# =============================================================================
# PaymentRequest
# =============================================================================


class TestPaymentRequest:
    def test_create_below_drc_minimum_fails_on_amount(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            PaymentRequest.create(1000, "+243812345678", Country.DRC)

        assert exc_info.value.context["field"] == "amount"

    def test_payload_omits_callback_url_when_absent(self) -> None:
        request = PaymentRequest.create(5000, "+243812345678", Country.DRC)

        assert request.to_api_payload() == {
            "amount": 5000,
            "clientPhoneNumber": "+243812345678",
        }

    def test_payload_includes_callback_url(self) -> None:
        request = PaymentRequest.create(
            5000, "+243812345678", Country.DRC, "https://shop.example/hook"
        )

        assert request.to_api_payload()["callbackUrl"] == "https://shop.example/hook"

    def test_direct_construction_is_validated(self) -> None:
        with pytest.raises(ValidationError):
            PaymentRequest(amount=100, client_phone_number="+256700000000", country=Country.KENYA)

    def test_is_frozen(self) -> None:
        request = PaymentRequest.create(100, "+256700000000", Country.UGANDA)

        with pytest.raises(AttributeError):
            request.amount = 1  # type: ignore[misc]

    def test_to_dict(self) -> None:
        request = PaymentRequest.create(100, "+256700000000", Country.UGANDA)

        assert request.to_dict() == {
            "amount": 100,
            "clientPhoneNumber": "+256700000000",
            "country": "UG",
            "callbackUrl": None,
        }


# =============================================================================
# Transaction.from_api_response (lenient)
# =============================================================================


class TestTransactionFromApiResponse:
    def test_full_payload(self, transaction_payload) -> None:
        transaction = Transaction.from_api_response(transaction_payload)

        assert transaction.id == "c0fdfe50-24be-4de1-9f66-84608fd45a5f"
        assert transaction.amount == 5000
        assert transaction.status is TransactionStatus.COMPLETED
        assert transaction.created_at == datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc)
        assert transaction.completed_at == datetime(2024, 1, 15, 12, 5, tzinfo=timezone.utc)
        assert transaction.metadata == {"orderId": "A-42"}
        assert transaction.pretium_transaction_id == "pt-778899"
        assert transaction.is_completed()
        assert transaction.is_terminal()

    def test_round_trip(self, transaction_payload) -> None:
        transaction = Transaction.from_api_response(transaction_payload)

        assert Transaction.from_api_response(transaction.to_dict()) == transaction

    def test_to_dict_uses_wire_names(self, transaction_payload) -> None:
        data = Transaction.from_api_response(transaction_payload).to_dict()

        assert data == transaction_payload

    def test_empty_payload_gets_defaults(self) -> None:
        before = datetime.now(timezone.utc)

        transaction = Transaction.from_api_response({})

        assert transaction.id == ""
        assert transaction.user_id == ""
        assert transaction.amount == 0
        assert transaction.type == "deposit"
        assert transaction.status is TransactionStatus.PENDING
        assert transaction.is_sandbox is False
        assert transaction.metadata is None
        assert transaction.completed_at is None
        assert transaction.created_at >= before
        assert transaction.is_pending()
        assert not transaction.is_terminal()

    def test_malformed_values_are_coerced(self) -> None:
        transaction = Transaction.from_api_response(
            {
                "amount": "not-a-number",
                "status": "refunded",
                "createdAt": "yesterday",
                "metadata": ["a"],
            }
        )

        assert transaction.amount == 0
        assert transaction.status is TransactionStatus.PENDING
        assert transaction.metadata is None

    def test_numeric_strings_are_parsed(self) -> None:
        transaction = Transaction.from_api_response({"amount": "1500", "isSandbox": "true"})

        assert transaction.amount == 1500
        assert transaction.is_sandbox is True

    def test_failed_transaction(self) -> None:
        transaction = Transaction.from_api_response(
            {"status": "failed", "failureReason": "Insufficient balance"}
        )

        assert transaction.is_failed()
        assert transaction.is_terminal()
        assert transaction.failure_reason == "Insufficient balance"


# =============================================================================
# Transaction.from_api_response (strict)
# =============================================================================


class TestTransactionStrictParsing:
    def test_full_payload_passes(self, transaction_payload) -> None:
        transaction = Transaction.from_api_response(transaction_payload, strict=True)

        assert transaction == Transaction.from_api_response(transaction_payload)

    def test_missing_field_raises(self, transaction_payload) -> None:
        del transaction_payload["referenceId"]

        with pytest.raises(ValidationError) as exc_info:
            Transaction.from_api_response(transaction_payload, strict=True)

        assert exc_info.value.context == {"field": "referenceId"}

    def test_unknown_status_raises(self, transaction_payload) -> None:
        transaction_payload["status"] = "refunded"

        with pytest.raises(ValidationError) as exc_info:
            Transaction.from_api_response(transaction_payload, strict=True)

        assert exc_info.value.context["field"] == "status"

    def test_bad_timestamp_raises(self, transaction_payload) -> None:
        transaction_payload["updatedAt"] = "yesterday"

        with pytest.raises(ValidationError) as exc_info:
            Transaction.from_api_response(transaction_payload, strict=True)

        assert exc_info.value.context["field"] == "updatedAt"
