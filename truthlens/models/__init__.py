from .analysis import (
    Verdict,
    EvidenceType,
    AnalysisKind,
    Indicator,
    Evidence,
    AnalysisResult,
    FALLBACK_ANALYSIS,
    decode_analysis_result,
    TextRequest,
    LinkRequest,
    ImageRequest,
    AnalysisRequest,
    build_request,
    AnalyzeContentRequest,
)
from .verification import (
    VerificationStatus,
    Entity,
    VerificationDetail,
    VerificationResult,
    FALLBACK_VERIFICATION,
    decode_verification_result,
    VerifySourceRequest,
)
from .history import HistoryItem, HistoryFilter
from .chat import ChatMessage, ChatRole, ChatRequest

__all__ = [
    "Verdict",
    "EvidenceType",
    "AnalysisKind",
    "Indicator",
    "Evidence",
    "AnalysisResult",
    "FALLBACK_ANALYSIS",
    "decode_analysis_result",
    "TextRequest",
    "LinkRequest",
    "ImageRequest",
    "AnalysisRequest",
    "build_request",
    "AnalyzeContentRequest",

    "VerificationStatus",
    "Entity",
    "VerificationDetail",
    "VerificationResult",
    "FALLBACK_VERIFICATION",
    "decode_verification_result",
    "VerifySourceRequest",

    "HistoryItem",
    "HistoryFilter",

    "ChatMessage",
    "ChatRole",
    "ChatRequest",
]
