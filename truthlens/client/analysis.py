from pathlib import Path
from typing import Optional, Union

from truthlens.config import IMAGE_CONFIG, logger
from truthlens.exceptions import TruthLensException, ValidationException
from truthlens.models.analysis import (
    AnalysisRequest,
    AnalysisResult,
    ImageRequest,
    build_request,
    decode_analysis_result,
)
from .auth import AuthState
from .errors import ErrorKind, classify_error
from .functions import FunctionsClient
from .history import HistoryClient
from .notify import Notifier
from .usage import UsageLimiter

ANALYZE_FUNCTION = "analyze-content"

RATE_LIMIT_MESSAGE = "Rate limit exceeded. Please try again later."
PAYMENT_MESSAGE = "Usage limit reached. Please add credits."
FAILURE_MESSAGE = "Failed to analyze content. Please try again."
TRIAL_EXHAUSTED_MESSAGE = "Free trial exhausted. Please sign in to continue."
LARGE_IMAGE_MESSAGE = "Large image. Analysis may take a little longer."


def load_image(path: Union[str, Path]) -> ImageRequest:
    """Read an image file into a request."""
    path = Path(path)
    try:
        data = path.read_bytes()
    except OSError as e:
        raise ValidationException("image", f"cannot read {path}: {e.strerror or e}")
    return ImageRequest(data=data, filename=path.name)


class AnalysisClient:
    """Runs one analysis at a time and exposes loading/result/error state.

    A new result replaces the previous one wholesale; a failed call leaves no
    result behind.
    """

    def __init__(
        self,
        functions: FunctionsClient,
        limiter: UsageLimiter,
        notifier: Notifier,
        history: Optional[HistoryClient] = None,
        auth: Optional[AuthState] = None,
    ):
        self.functions = functions
        self.limiter = limiter
        self.notifier = notifier
        self.history = history
        self.auth = auth or limiter.auth

        self.is_loading = False
        self.result: Optional[AnalysisResult] = None
        self.last_error: Optional[ErrorKind] = None

    async def analyze_kind(self, kind: str, payload: Union[str, bytes]) -> Optional[AnalysisResult]:
        try:
            request = build_request(kind, payload)
        except ValidationException as e:
            self.notifier.error(e.reason)
            return None
        return await self.analyze(request)

    async def analyze(self, request: AnalysisRequest) -> Optional[AnalysisResult]:
        try:
            body = request.to_payload()
        except ValidationException as e:
            logger.info("Rejected %s analysis: %s", request.kind, e.message)
            self.notifier.error(e.reason)
            return None

        if isinstance(request, ImageRequest) and len(request.data) > IMAGE_CONFIG.MAX_BYTES:
            self.notifier.info(LARGE_IMAGE_MESSAGE)

        if not self.limiter.can_use():
            self.notifier.error(TRIAL_EXHAUSTED_MESSAGE)
            return None

        self.limiter.increment()
        self.is_loading = True
        self.result = None
        self.last_error = None

        session = self.auth.session
        try:
            data = await self.functions.invoke(
                ANALYZE_FUNCTION,
                body,
                access_token=session.access_token if session else None,
            )
        except TruthLensException as e:
            logger.error("Analysis error: %s", e.message)
            self.last_error = ErrorKind.GENERIC
            self.notifier.error(FAILURE_MESSAGE)
            return None
        finally:
            self.is_loading = False

        if data.get("error"):
            self._report_error(str(data["error"]))
            return None

        result = decode_analysis_result(data)
        self.result = result

        if self.history is not None and session is not None:
            await self.history.record(request, result, session=session)

        return result

    def reset(self) -> None:
        self.result = None
        self.last_error = None

    def _report_error(self, message: str) -> None:
        kind = classify_error(message)
        self.last_error = kind
        if kind is ErrorKind.RATE_LIMIT:
            self.notifier.error(RATE_LIMIT_MESSAGE)
        elif kind is ErrorKind.PAYMENT_REQUIRED:
            self.notifier.error(PAYMENT_MESSAGE)
        else:
            self.notifier.error(message)
