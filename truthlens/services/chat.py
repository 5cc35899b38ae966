import json
from typing import Any, Dict, List, Optional

from truthlens.config import LLM_CONFIG, settings
from truthlens.models.chat import ChatRequest
from truthlens.prompts import CHAT_CONTEXT_SUFFIX, CHAT_SYSTEM_PROMPT
from .llm import GatewayStream, open_gateway_stream


def build_system_prompt(analysis_context: Optional[Dict[str, Any]]) -> str:
    if not analysis_context:
        return CHAT_SYSTEM_PROMPT
    return CHAT_SYSTEM_PROMPT + CHAT_CONTEXT_SUFFIX.format(
        context=json.dumps(analysis_context, indent=2)
    )


def build_chat_messages(req: ChatRequest) -> List[Dict[str, Any]]:
    messages = [{"role": "system", "content": build_system_prompt(req.analysis_context)}]
    messages.extend(m.model_dump() for m in req.messages)
    return messages


async def start_chat_stream(req: ChatRequest) -> GatewayStream:
    return await open_gateway_stream(
        build_chat_messages(req),
        model=settings.CHAT_MODEL,
        temperature=LLM_CONFIG.CHAT_TEMPERATURE,
        max_tokens=LLM_CONFIG.CHAT_MAX_TOKENS,
    )
