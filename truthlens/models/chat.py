from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

ChatRole = Literal["user", "assistant"]


class ChatMessage(BaseModel):
    role: ChatRole
    content: str


class ChatRequest(BaseModel):
    """Body accepted by the chat-assistant function."""
    model_config = ConfigDict(populate_by_name=True)

    messages: List[ChatMessage] = Field(default_factory=list)
    analysis_context: Optional[Dict[str, Any]] = Field(default=None, alias="analysisContext")
