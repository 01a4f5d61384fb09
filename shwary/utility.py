from typing import Any, Protocol

MASK = "***MASKED***"
SENSITIVE_HEADERS = ("x-merchant-key",)


class SupportsLogging(Protocol):
    """
    Minimal logger capability the client needs.
    Any logging.Logger satisfies it.
    """

    def debug(self, msg: str, *args: Any, **kwargs: Any) -> None:
        ...

    def info(self, msg: str, *args: Any, **kwargs: Any) -> None:
        ...

    def error(self, msg: str, *args: Any, **kwargs: Any) -> None:
        ...


def mask_phone_number(phone: str) -> str:
    """Keep the dial code prefix and the last two digits: +2438******78"""
    if len(phone) <= 7:
        return "*" * len(phone)
    return f"{phone[:5]}{'*' * (len(phone) - 7)}{phone[-2:]}"


def sanitize_for_log(data: Any) -> Any:
    """
    Return a copy of headers or a payload that is safe to log.
    The merchant key is replaced and the client phone number is masked.
    """
    if not isinstance(data, dict):
        return data

    sanitized = dict(data)
    for key in sanitized:
        if key.lower() in SENSITIVE_HEADERS:
            sanitized[key] = MASK
    if "clientPhoneNumber" in sanitized:
        sanitized["clientPhoneNumber"] = mask_phone_number(str(sanitized["clientPhoneNumber"]))
    return sanitized
