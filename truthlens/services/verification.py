from truthlens.config import LLM_CONFIG, logger, settings
from truthlens.models.verification import (
    FALLBACK_VERIFICATION,
    VerificationResult,
    VerifySourceRequest,
    decode_verification_result,
)
from truthlens.prompts import VERIFY_SYSTEM_PROMPT, VERIFY_USER_PROMPT
from truthlens.utils.parsing import extract_json_block
from truthlens.utils.validation import InputValidator
from .llm import call_gateway


async def verify_source(req: VerifySourceRequest) -> VerificationResult:
    content = InputValidator.sanitize_content(req.content)
    kind = InputValidator.sanitize_content(req.type, field="type")

    text = await call_gateway(
        [
            {"role": "system", "content": VERIFY_SYSTEM_PROMPT},
            {"role": "user", "content": VERIFY_USER_PROMPT.format(type=kind, content=content)},
        ],
        model=settings.VERIFY_MODEL,
        temperature=LLM_CONFIG.VERIFY_TEMPERATURE,
        max_tokens=LLM_CONFIG.VERIFY_MAX_TOKENS,
    )

    parsed = extract_json_block(text)
    if parsed is None:
        logger.warning("Failed to parse verification response: %s", text)
        return FALLBACK_VERIFICATION

    return decode_verification_result(parsed)
