"""
Pre-flight checks run on payment input before any request is sent.

Every validator raises ValidationError on the first problem it finds and
returns None otherwise.
"""

import math
import re
from numbers import Real
from typing import Any
from urllib.parse import urlparse

from shwary.countries import CountryMetadata
from shwary.exceptions import ValidationError

E164_PATTERN = re.compile(r"\+[0-9]{1,15}")


def validate_amount(amount: Any, country: CountryMetadata) -> None:
    """
    Amount must be a positive number and at least the country's minimum.
    The minimum itself is accepted.
    """
    if isinstance(amount, bool) or not isinstance(amount, Real):
        raise ValidationError.invalid_amount(amount, country)

    if not math.isfinite(amount) or amount <= 0:
        raise ValidationError.invalid_amount(amount, country)

    if amount < country.minimum_amount:
        raise ValidationError.invalid_amount(amount, country)


def validate_phone_number(phone: Any, country: CountryMetadata) -> None:
    """Phone must be E.164 and start with the country's dial code."""
    if not isinstance(phone, str) or not phone:
        raise ValidationError.invalid_phone_number(phone or "", country)

    if not E164_PATTERN.fullmatch(phone) or not phone.startswith(country.dial_code):
        raise ValidationError.invalid_phone_number(phone, country)


def validate_callback_url(url: Any = None) -> None:
    """Callback URL is optional, but when given it must be HTTPS."""
    if not url:
        return

    if not isinstance(url, str):
        raise ValidationError.invalid_callback_url(str(url))

    try:
        parsed = urlparse(url)
        parsed.port  # raises ValueError for a non-numeric or out of range port
    except ValueError:
        raise ValidationError.invalid_callback_url(url)

    host = parsed.hostname or ""
    if parsed.scheme != "https" or not host or any(c.isspace() for c in parsed.netloc):
        raise ValidationError.invalid_callback_url(url)


def validate_payment_request(request: Any) -> None:
    """
    Validate anything shaped like a PaymentRequest
    (amount, client_phone_number, country, callback_url attributes).

    Raises:
        ValidationError
    """
    amount = getattr(request, "amount", None)
    phone = getattr(request, "client_phone_number", None)
    country = getattr(request, "country", None)

    if not amount:
        raise ValidationError.missing_required_field("amount")
    if not phone:
        raise ValidationError.missing_required_field("clientPhoneNumber")
    if not country:
        raise ValidationError.missing_required_field("country")

    validate_amount(amount, country)
    validate_phone_number(phone, country)
    validate_callback_url(getattr(request, "callback_url", None))
