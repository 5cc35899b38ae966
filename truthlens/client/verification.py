from typing import Optional

from truthlens.config import logger
from truthlens.exceptions import TruthLensException
from truthlens.models.verification import VerificationResult, decode_verification_result
from .functions import FunctionsClient

VERIFY_FUNCTION = "verify-source"
FAILURE_MESSAGE = "Failed to verify source. Please try again."


class SourceVerifier:
    """Checks content against the official source it claims to come from."""

    def __init__(self, functions: FunctionsClient):
        self.functions = functions
        self.is_loading = False
        self.result: Optional[VerificationResult] = None
        self.error: Optional[str] = None

    async def verify(self, content: str, kind: str) -> Optional[VerificationResult]:
        if not content or not content.strip():
            return None

        self.is_loading = True
        self.error = None
        try:
            data = await self.functions.invoke(VERIFY_FUNCTION, {"content": content, "type": kind})
        except TruthLensException as e:
            logger.error("Verification error: %s", e.message)
            self.error = FAILURE_MESSAGE
            return None
        finally:
            self.is_loading = False

        if data.get("error"):
            self.error = str(data["error"])
            return None

        self.result = decode_verification_result(data)
        return self.result
