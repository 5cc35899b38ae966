from enum import Enum
from typing import Optional, Union


class ErrorKind(Enum):
    RATE_LIMIT = "rate_limit"
    PAYMENT_REQUIRED = "payment_required"
    GENERIC = "generic"


def classify_error(reason: Optional[Union[str, int]]) -> ErrorKind:
    """Classify a remote error from its HTTP status or its message text."""
    if isinstance(reason, int):
        if reason == 429:
            return ErrorKind.RATE_LIMIT
        if reason == 402:
            return ErrorKind.PAYMENT_REQUIRED
        return ErrorKind.GENERIC

    text = (reason or "").lower()
    if "rate limit" in text:
        return ErrorKind.RATE_LIMIT
    if "payment required" in text:
        return ErrorKind.PAYMENT_REQUIRED
    return ErrorKind.GENERIC
