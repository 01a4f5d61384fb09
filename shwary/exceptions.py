from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    import requests

    from shwary.countries import CountryMetadata


class ShwaryError(Exception):
    """
    Base exception for Shwary-related errors.

    Every error carries a numeric ``code`` (HTTP-status-like) and a ``context``
    dict with structured details meant for programmatic branching.
    Use the named constructors on the subclasses rather than building these directly.
    """

    def __init__(
        self,
        message: str,
        code: int = 0,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.context = context or {}

    @property
    def name(self) -> str:
        return type(self).__name__

    def to_dict(self) -> dict[str, Any]:
        """Plain-dict projection, safe to log or ship across processes."""
        return {
            "name": self.name,
            "message": self.message,
            "code": self.code,
            "context": self.context,
        }

    def __repr__(self) -> str:
        return f"{self.name}(message={self.message!r}, code={self.code}, context={self.context!r})"


class ValidationError(ShwaryError):
    """Raised when caller input is rejected before reaching the API."""

    def __init__(self, message: str, context: dict[str, Any] | None = None):
        super().__init__(message, 400, context)

    @classmethod
    def invalid_amount(cls, amount: Any, country: CountryMetadata) -> "ValidationError":
        return cls(
            f"Amount must be at least {country.minimum_amount} {country.currency}",
            {
                "field": "amount",
                "value": amount,
                "minimum": country.minimum_amount,
                "currency": country.currency,
            },
        )

    @classmethod
    def invalid_phone_number(cls, phone: Any, country: CountryMetadata) -> "ValidationError":
        return cls(
            f"Phone number must start with {country.dial_code} in E.164 format",
            {
                "field": "clientPhoneNumber",
                "value": phone,
                "expected": f"{country.dial_code}XXXXXXXXX",
                "dialCode": country.dial_code,
            },
        )

    @classmethod
    def invalid_callback_url(cls, url: Any) -> "ValidationError":
        return cls(
            "Callback URL must be a valid HTTPS URL",
            {"field": "callbackUrl", "value": url, "expected": "https://..."},
        )

    @classmethod
    def missing_required_field(cls, field: str) -> "ValidationError":
        return cls(f"Required field missing: {field}", {"field": field})

    @classmethod
    def invalid_field(cls, field: str, value: Any, expected: str) -> "ValidationError":
        return cls(
            f"Invalid value for field: {field}",
            {"field": field, "value": value, "expected": expected},
        )

    @classmethod
    def invalid_webhook_payload(cls, reason: str, detail: str | None = None) -> "ValidationError":
        messages = {
            "invalid_json": "Invalid webhook payload: failed to parse JSON",
            "invalid_format": "Invalid webhook payload: expected object",
        }
        context: dict[str, Any] = {"reason": reason}
        if detail:
            context["error"] = detail
        return cls(messages.get(reason, f"Invalid webhook payload: {reason}"), context)


class AuthenticationError(ShwaryError):
    """Raised when authentication fails."""

    def __init__(self, message: str, context: dict[str, Any] | None = None):
        super().__init__(message, 401, context)

    @classmethod
    def invalid_credentials(cls) -> "AuthenticationError":
        return cls(
            "Invalid merchant credentials. Please check your merchant ID and key.",
            {"reason": "invalid_credentials"},
        )


class ApiError(ShwaryError):
    """
    Raised when the API call fails.
    ``code`` is the HTTP status, or 0 for transport failures and timeouts.
    """

    STATUS_MESSAGES = {
        400: "Bad Request: Invalid payment parameters",
        401: "Unauthorized: Invalid merchant credentials",
        404: "Not Found: Client or merchant not found",
        502: "Bad Gateway: Payment provider unavailable",
    }

    def __init__(
        self,
        message: str,
        code: int = 0,
        context: dict[str, Any] | None = None,
        response: requests.Response | None = None,
    ):
        super().__init__(message, code, context)
        self.response = response

    @property
    def is_network_error(self) -> bool:
        return self.code == 0

    @classmethod
    def from_response(
        cls,
        status: int,
        body: Any,
        status_text: str = "",
        response: requests.Response | None = None,
    ) -> "ApiError":
        context: dict[str, Any] = {"status": status, "statusText": status_text}
        if isinstance(body, dict):
            context["body"] = body
        return cls(cls._message_for_status(status, body), status, context, response)

    @classmethod
    def network_error(cls, message: str, cause: BaseException | None = None) -> "ApiError":
        context: dict[str, Any] = {"reason": "network_error"}
        if cause is not None:
            context["cause"] = str(cause)
        return cls(message, 0, context)

    @classmethod
    def bad_gateway(cls, message: str | None = None) -> "ApiError":
        return cls(
            message or "Bad Gateway: Failed to reach payment provider",
            502,
            {"reason": "bad_gateway"},
        )

    @classmethod
    def client_not_found(cls, phone: str) -> "ApiError":
        return cls(
            f"Client not found: {phone}",
            404,
            {"reason": "client_not_found", "phone": phone},
        )

    @classmethod
    def unexpected_response(cls, status: int, body: Any) -> "ApiError":
        return cls(
            "Unexpected response body: expected a JSON object",
            status,
            {"reason": "unexpected_response", "body": body},
        )

    @classmethod
    def _message_for_status(cls, status: int, body: Any) -> str:
        if isinstance(body, dict) and "message" in body:
            return str(body["message"])
        return cls.STATUS_MESSAGES.get(status, f"API Error: {status}")


class ConfigurationError(ShwaryError):
    """Raised when configuration is invalid or missing."""
