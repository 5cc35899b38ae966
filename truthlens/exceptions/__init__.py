from typing import Optional, Dict, Any

class TruthLensException(Exception):
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "details": self.details
        }

class ValidationException(TruthLensException):
    def __init__(self, field: str, reason: str):
        super().__init__(
            f"Validation failed for {field}: {reason}",
            {"field": field, "reason": reason}
        )
        self.reason = reason

class GatewayException(TruthLensException):
    def __init__(self, reason: str, recoverable: bool = True):
        super().__init__(
            f"AI gateway error: {reason}",
            {"reason": reason, "recoverable": recoverable}
        )

class RateLimitException(GatewayException):
    MESSAGE = "Rate limit exceeded. Please try again later."

    def __init__(self):
        TruthLensException.__init__(self, self.MESSAGE, {"reason": "rate_limited", "recoverable": True})

class PaymentRequiredException(GatewayException):
    MESSAGE = "Payment required. Please add credits to your workspace."

    def __init__(self):
        TruthLensException.__init__(self, self.MESSAGE, {"reason": "payment_required", "recoverable": False})

class ConfigurationException(TruthLensException):
    def __init__(self, setting: str):
        super().__init__(
            f"{setting} is not configured",
            {"setting": setting}
        )

class SessionRequiredException(TruthLensException):
    def __init__(self, operation: str):
        super().__init__(
            f"{operation} requires a signed-in session",
            {"operation": operation}
        )
