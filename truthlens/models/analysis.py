from typing import Annotated, Any, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from truthlens.config import logger
from truthlens.exceptions import ValidationException
from truthlens.utils.images import to_data_uri
from truthlens.utils.validation import InputValidator

Verdict = Literal["verified", "suspicious", "fake", "unknown"]
EvidenceType = Literal["info", "warning", "danger", "success"]
AnalysisKind = Literal["text", "link", "image"]


class Indicator(BaseModel):
    """A named 0-100 sub-score accompanying a verdict."""
    model_config = ConfigDict(frozen=True)

    label: str
    value: int = Field(ge=0, le=100)


class Evidence(BaseModel):
    """Short observation tagged with a severity class."""
    model_config = ConfigDict(frozen=True)

    type: EvidenceType
    text: str


class AnalysisResult(BaseModel):
    """Authenticity verdict as returned by the analyze-content function."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    verdict: Verdict
    confidence: int = Field(ge=0, le=100)
    explanation: str
    indicators: List[Indicator] = Field(default_factory=list)
    evidence: List[Evidence] = Field(default_factory=list)
    suggested_action: str = Field(default="", alias="suggestedAction")

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True)


FALLBACK_ANALYSIS = AnalysisResult(
    verdict="unknown",
    confidence=50,
    explanation="Unable to complete analysis. Please try again with different content.",
    indicators=[
        Indicator(label="AI-Generated Probability", value=50),
        Indicator(label="Scam Likelihood", value=50),
        Indicator(label="Manipulation Risk", value=50),
        Indicator(label="Emotional Manipulation", value=50),
    ],
    evidence=[Evidence(type="info", text="Analysis was inconclusive")],
    suggestedAction="Try rephrasing your content or providing more context for better analysis.",
)


def decode_analysis_result(data: Any) -> AnalysisResult:
    """Turn an untrusted body into an AnalysisResult, never raising.

    Anything that does not validate is replaced with FALLBACK_ANALYSIS so the
    rendering path always receives a well-formed result.
    """
    if isinstance(data, AnalysisResult):
        return data
    if not isinstance(data, dict):
        logger.warning("Analysis body is not an object, using fallback: %r", data)
        return FALLBACK_ANALYSIS
    try:
        return AnalysisResult.model_validate(data)
    except ValidationError as e:
        logger.warning("Analysis body failed validation, using fallback: %s", e)
        return FALLBACK_ANALYSIS


class TextRequest(BaseModel):
    kind: Literal["text"] = "text"
    content: str

    @property
    def label(self) -> Optional[str]:
        return self.content

    def to_payload(self) -> dict:
        return {"type": "text", "content": InputValidator.sanitize_content(self.content)}


class LinkRequest(BaseModel):
    kind: Literal["link"] = "link"
    url: str

    @property
    def label(self) -> Optional[str]:
        return self.url

    def to_payload(self) -> dict:
        return {"type": "link", "content": InputValidator.sanitize_url(self.url)}


class ImageRequest(BaseModel):
    kind: Literal["image"] = "image"
    data: bytes = Field(repr=False)
    filename: Optional[str] = None

    @property
    def label(self) -> Optional[str]:
        return self.filename

    def to_payload(self) -> dict:
        return {"type": "image", "imageBase64": to_data_uri(self.data)}


AnalysisRequest = Annotated[
    Union[TextRequest, LinkRequest, ImageRequest],
    Field(discriminator="kind"),
]


def build_request(kind: str, payload: Union[str, bytes]) -> Union[TextRequest, LinkRequest, ImageRequest]:
    """Build the request variant for ``kind`` from a raw payload."""
    if kind == "text":
        return TextRequest(content=payload if isinstance(payload, str) else payload.decode("utf-8"))
    if kind == "link":
        return LinkRequest(url=payload if isinstance(payload, str) else payload.decode("utf-8"))
    if kind == "image":
        if not isinstance(payload, (bytes, bytearray)):
            raise ValidationException("image", "payload must be raw image bytes")
        return ImageRequest(data=bytes(payload))
    raise ValidationException("type", f"unknown analysis type {kind!r}")


class AnalyzeContentRequest(BaseModel):
    """Body accepted by the analyze-content function."""
    model_config = ConfigDict(populate_by_name=True)

    type: AnalysisKind = "text"
    content: Optional[str] = None
    image_base64: Optional[str] = Field(default=None, alias="imageBase64")
