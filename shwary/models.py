from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Mapping

from shwary.countries import CountryMetadata
from shwary.exceptions import ValidationError
from shwary.validation import validate_payment_request

logger = logging.getLogger(__name__)


class TransactionStatus(str, Enum):
    """pending is the initial status; completed and failed are terminal."""

    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"

    def is_terminal(self) -> bool:
        return self in (TransactionStatus.COMPLETED, TransactionStatus.FAILED)

    def is_successful(self) -> bool:
        return self is TransactionStatus.COMPLETED

    def is_pending(self) -> bool:
        return self is TransactionStatus.PENDING


@dataclass(frozen=True)
class PaymentRequest:
    """
    A validated payment request.
    Construction fails with ValidationError, so an instance is always valid.
    """

    amount: int | float
    client_phone_number: str
    country: CountryMetadata
    callback_url: str | None = None

    def __post_init__(self) -> None:
        validate_payment_request(self)

    @classmethod
    def create(
        cls,
        amount: int | float,
        phone: str,
        country: CountryMetadata,
        callback_url: str | None = None,
    ) -> "PaymentRequest":
        return cls(
            amount=amount,
            client_phone_number=phone,
            country=country,
            callback_url=callback_url,
        )

    def to_api_payload(self) -> dict[str, Any]:
        """Body sent to the payment endpoint. callbackUrl is omitted when not set."""
        payload: dict[str, Any] = {
            "amount": self.amount,
            "clientPhoneNumber": self.client_phone_number,
        }
        if self.callback_url:
            payload["callbackUrl"] = self.callback_url
        return payload

    def to_dict(self) -> dict[str, Any]:
        return {
            "amount": self.amount,
            "clientPhoneNumber": self.client_phone_number,
            "country": self.country.code.value,
            "callbackUrl": self.callback_url,
        }


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _format_timestamp(value: datetime | None) -> str | None:
    if value is None:
        return None
    return value.isoformat().replace("+00:00", "Z")


def _parse_timestamp(value: Any) -> datetime:
    """Parse an ISO-8601 string, assuming UTC when no offset is given."""
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value:
        parsed = datetime.fromisoformat(value)
    else:
        raise ValueError(f"not a timestamp: {value!r}")
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _to_number(value: Any) -> int | float:
    if isinstance(value, bool):
        raise ValueError(f"not a number: {value!r}")
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return float(value)
    raise ValueError(f"not a number: {value!r}")


def _to_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "yes")
    return bool(value)


def _optional_str(value: Any) -> str | None:
    return None if value is None else str(value)


@dataclass(frozen=True)
class Transaction:
    """A payment transaction as reported by the API or a webhook."""

    id: str
    user_id: str
    amount: int | float
    currency: str
    type: str
    status: TransactionStatus
    recipient_phone_number: str
    reference_id: str
    created_at: datetime
    updated_at: datetime
    is_sandbox: bool = False
    metadata: dict[str, Any] | None = None
    failure_reason: str | None = None
    completed_at: datetime | None = None
    pretium_transaction_id: str | None = None
    error: str | None = None

    REQUIRED_FIELDS = (
        "id",
        "userId",
        "amount",
        "currency",
        "status",
        "recipientPhoneNumber",
        "referenceId",
        "createdAt",
        "updatedAt",
    )

    @classmethod
    def from_api_response(cls, data: Mapping[str, Any], strict: bool = False) -> "Transaction":
        """
        Build a Transaction from a raw API or webhook payload (camelCase keys).

        Lenient mode (default) never fails on content: missing or malformed
        fields fall back to empty strings, amount 0, status pending and
        timestamps of "now". The result can look plausible while being wrong,
        so callers that need guarantees should pass strict=True.

        Args:
            data: Decoded JSON object
            strict: Raise ValidationError for missing or malformed fields
                instead of substituting defaults
        Returns:
            Transaction
        Raises:
            ValidationError: only in strict mode
        """
        if strict:
            missing = [key for key in cls.REQUIRED_FIELDS if data.get(key) is None]
            if missing:
                raise ValidationError.missing_required_field(missing[0])

        now = _utcnow()

        def coerce(field: str, convert, default, expected: str):
            value = data.get(field)
            if value is None:
                return default
            try:
                return convert(value)
            except (TypeError, ValueError):
                if strict:
                    raise ValidationError.invalid_field(field, value, expected)
                logger.debug(f"Coercing malformed transaction field '{field}': {value!r}")
                return default

        metadata = data.get("metadata")
        if metadata is not None and not isinstance(metadata, dict):
            if strict:
                raise ValidationError.invalid_field("metadata", metadata, "object")
            metadata = None

        return cls(
            id=str(data.get("id") or ""),
            user_id=str(data.get("userId") or ""),
            amount=coerce("amount", _to_number, 0, "number"),
            currency=str(data.get("currency") or ""),
            type=str(data.get("type") or "deposit"),
            status=coerce(
                "status", TransactionStatus, TransactionStatus.PENDING, "pending|completed|failed"
            ),
            recipient_phone_number=str(data.get("recipientPhoneNumber") or ""),
            reference_id=str(data.get("referenceId") or ""),
            created_at=coerce("createdAt", _parse_timestamp, now, "ISO-8601 timestamp"),
            updated_at=coerce("updatedAt", _parse_timestamp, now, "ISO-8601 timestamp"),
            is_sandbox=_to_bool(data.get("isSandbox", False)),
            metadata=metadata,
            failure_reason=_optional_str(data.get("failureReason")),
            completed_at=coerce("completedAt", _parse_timestamp, None, "ISO-8601 timestamp"),
            pretium_transaction_id=_optional_str(data.get("pretiumTransactionId")),
            error=_optional_str(data.get("error")),
        )

    def is_pending(self) -> bool:
        return self.status.is_pending()

    def is_completed(self) -> bool:
        return self.status.is_successful()

    def is_failed(self) -> bool:
        return self.status is TransactionStatus.FAILED

    def is_terminal(self) -> bool:
        """True when the status will not change anymore."""
        return self.status.is_terminal()

    def to_dict(self) -> dict[str, Any]:
        """JSON-serializable dict using the API's field names."""
        return {
            "id": self.id,
            "userId": self.user_id,
            "amount": self.amount,
            "currency": self.currency,
            "type": self.type,
            "status": self.status.value,
            "recipientPhoneNumber": self.recipient_phone_number,
            "referenceId": self.reference_id,
            "metadata": self.metadata,
            "failureReason": self.failure_reason,
            "completedAt": _format_timestamp(self.completed_at),
            "createdAt": _format_timestamp(self.created_at),
            "updatedAt": _format_timestamp(self.updated_at),
            "isSandbox": self.is_sandbox,
            "pretiumTransactionId": self.pretium_transaction_id,
            "error": self.error,
        }
