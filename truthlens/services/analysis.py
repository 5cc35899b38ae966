from typing import Any, Dict

from truthlens.config import LLM_CONFIG, logger, settings
from truthlens.exceptions import ValidationException
from truthlens.models.analysis import (
    FALLBACK_ANALYSIS,
    AnalysisResult,
    AnalyzeContentRequest,
    decode_analysis_result,
)
from truthlens.prompts import (
    ANALYZE_IMAGE_PROMPT,
    ANALYZE_LINK_PROMPT,
    ANALYZE_SYSTEM_PROMPT,
    ANALYZE_TEXT_PROMPT,
)
from truthlens.utils.parsing import extract_json_block
from truthlens.utils.validation import InputValidator
from .llm import call_gateway


def build_user_message(req: AnalyzeContentRequest) -> Dict[str, Any]:
    """Build the user turn for an analyze-content request.

    Images go out as a multimodal message with the data URI attached; text and
    links are plain prompts.
    """
    if req.type == "image":
        if not req.image_base64 or not req.image_base64.startswith("data:image/"):
            raise ValidationException("imageBase64", "must be an image data URI")
        return {
            "role": "user",
            "content": [
                {"type": "text", "text": ANALYZE_IMAGE_PROMPT},
                {"type": "image_url", "image_url": {"url": req.image_base64}},
            ],
        }

    if req.type == "link":
        url = InputValidator.sanitize_url(req.content)
        return {"role": "user", "content": ANALYZE_LINK_PROMPT.format(url=url)}

    content = InputValidator.sanitize_content(req.content)
    return {"role": "user", "content": ANALYZE_TEXT_PROMPT.format(content=content)}


async def analyze_content(req: AnalyzeContentRequest) -> AnalysisResult:
    """Classify one piece of content through the AI gateway.

    Gateway errors propagate to the caller. A completion that does not contain
    a usable result object yields FALLBACK_ANALYSIS instead of an error.
    """
    user_message = build_user_message(req)
    text = await call_gateway(
        [{"role": "system", "content": ANALYZE_SYSTEM_PROMPT}, user_message],
        model=settings.ANALYZE_MODEL,
        temperature=LLM_CONFIG.ANALYZE_TEMPERATURE,
        max_tokens=LLM_CONFIG.ANALYZE_MAX_TOKENS,
    )

    parsed = extract_json_block(text)
    if parsed is None:
        logger.warning("Failed to parse AI response: %s", text)
        return FALLBACK_ANALYSIS

    return decode_analysis_result(parsed)
