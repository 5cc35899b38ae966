from .llm import call_gateway, open_gateway_stream, GatewayStream
from .analysis import analyze_content, build_user_message
from .verification import verify_source
from .chat import start_chat_stream, build_chat_messages, build_system_prompt

__all__ = [
    "call_gateway",
    "open_gateway_stream",
    "GatewayStream",
    "analyze_content",
    "build_user_message",
    "verify_source",
    "start_chat_stream",
    "build_chat_messages",
    "build_system_prompt",
]
