from datetime import datetime
from typing import Any, Literal, Optional

from pydantic import BaseModel

HistoryFilter = Literal["all", "bookmarked"]


class HistoryItem(BaseModel):
    """One row of the remote analysis_history table."""

    id: str
    user_id: Optional[str] = None
    analysis_type: str
    content: Optional[str] = None
    verdict: str
    confidence: int
    explanation: str
    indicators: Any = None
    evidence: Any = None
    is_bookmarked: bool = False
    created_at: datetime
