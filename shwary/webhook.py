import json
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Mapping

from shwary.exceptions import ValidationError
from shwary.models import Transaction

logger = logging.getLogger(__name__)


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass(frozen=True)
class WebhookResponse:
    """What your endpoint should answer to a Shwary callback."""

    success: bool
    message: str
    timestamp: str = field(default_factory=_timestamp)

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": self.success,
            "message": self.message,
            "timestamp": self.timestamp,
        }


class WebhookHandler:
    """Methods to handle Shwary transaction callbacks"""

    def parse(self, payload: str | bytes | Mapping[str, Any], strict: bool = False) -> Transaction:
        """
        Parse a callback body, either raw (str/bytes) or already decoded by your framework.
        """
        if isinstance(payload, Mapping):
            return self.parse_from_request(payload, strict=strict)
        return self.parse_payload(payload, strict=strict)

    def parse_payload(self, payload: str | bytes, strict: bool = False) -> Transaction:
        """
        Parse a raw JSON callback body.
        Raises:
            ValidationError: if the body is not valid JSON or not an object
        """
        try:
            data = json.loads(payload)
        except (TypeError, ValueError) as e:
            logger.error(f"Invalid JSON webhook payload received: {e}")
            raise ValidationError.invalid_webhook_payload("invalid_json", str(e)) from e

        return self.parse_from_request(data, strict=strict)

    def parse_from_request(self, body: Any, strict: bool = False) -> Transaction:
        """
        Parse an already decoded callback body.

        Missing fields are filled with defaults unless strict is set,
        see Transaction.from_api_response.
        Raises:
            ValidationError
        """
        if not isinstance(body, Mapping):
            logger.error(f"Webhook payload is not an object: {body!r}")
            raise ValidationError.invalid_webhook_payload("invalid_format")

        transaction = Transaction.from_api_response(body, strict=strict)
        logger.info(
            f"Webhook received for transaction {transaction.id}: {transaction.status.value}"
        )
        return transaction

    @staticmethod
    def is_terminal_status(transaction: Transaction) -> bool:
        return transaction.is_terminal()

    @staticmethod
    def create_response(success: bool, message: str | None = None) -> WebhookResponse:
        if not message:
            message = (
                "Webhook processed successfully" if success else "Failed to process webhook"
            )
        return WebhookResponse(success=success, message=message)
