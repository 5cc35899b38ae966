from typing import Any, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from truthlens.config import logger

VerificationStatus = Literal["verified", "unverified", "misleading", "likely_fake"]
EntityType = Literal["government", "company", "organization", "unknown"]
MatchLevel = Literal["exact", "partial", "outdated", "not_found"]


class Entity(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    type: EntityType = "unknown"
    official_domain: Optional[str] = Field(default=None, alias="officialDomain")


class VerificationDetail(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    found_on_official: Optional[bool] = Field(default=None, alias="foundOnOfficial")
    match_level: MatchLevel = Field(default="not_found", alias="matchLevel")
    discrepancies: List[str] = Field(default_factory=list)
    last_known_update: Optional[str] = Field(default=None, alias="lastKnownUpdate")


class VerificationResult(BaseModel):
    """Outcome of checking a claim against the referenced official source."""
    model_config = ConfigDict(populate_by_name=True)

    status: VerificationStatus
    confidence: int = Field(ge=0, le=100)
    entity: Entity
    verification: VerificationDetail
    explanation: str
    suggested_action: str = Field(default="", alias="suggestedAction")
    sources: List[str] = Field(default_factory=list)

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True)


FALLBACK_VERIFICATION = VerificationResult(
    status="unverified",
    confidence=0,
    entity=Entity(name="Unknown", type="unknown", officialDomain=None),
    verification=VerificationDetail(
        foundOnOfficial=None,
        matchLevel="not_found",
        discrepancies=[],
        lastKnownUpdate=None,
    ),
    explanation="Unable to verify this content. Please check official sources manually.",
    suggestedAction="Search for official announcements from the relevant authority.",
    sources=[],
)


def decode_verification_result(data: Any) -> VerificationResult:
    if not isinstance(data, dict):
        logger.warning("Verification body is not an object, using fallback: %r", data)
        return FALLBACK_VERIFICATION
    try:
        return VerificationResult.model_validate(data)
    except ValidationError as e:
        logger.warning("Verification body failed validation, using fallback: %s", e)
        return FALLBACK_VERIFICATION


class VerifySourceRequest(BaseModel):
    content: str
    type: str = "text"
