from datetime import datetime, timedelta, timezone
from io import BytesIO
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from truthlens.client import AuthSession, AuthState, MemoryStore, Notifier, UsageLimiter
from truthlens.config import settings


@pytest.fixture
def gateway_key(monkeypatch):
    """Configure a gateway key for the duration of one test."""
    monkeypatch.setattr(settings, "LOVABLE_API_KEY", "test_gateway_key")
    return "test_gateway_key"


@pytest.fixture
def test_client():
    """Create a TestClient for the gateway app."""
    from truthlens.main import app
    return TestClient(app)


@pytest.fixture
def notifier():
    return MagicMock(spec=Notifier)


@pytest.fixture
def auth():
    return AuthState()


@pytest.fixture
def session():
    return AuthSession(access_token="user_token", user_id="user-1", email="user@example.com")


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def limiter(store, auth):
    return UsageLimiter(store, auth, cap=3)


@pytest.fixture
def sample_analysis():
    """Well-formed analyze-content body."""
    return {
        "verdict": "fake",
        "confidence": 92,
        "explanation": "Classic advance-fee lottery scam wording.",
        "indicators": [
            {"label": "AI-Generated Probability", "value": 35},
            {"label": "Scam Likelihood", "value": 95},
            {"label": "Manipulation Risk", "value": 88},
            {"label": "Emotional Manipulation", "value": 90},
        ],
        "evidence": [
            {"type": "danger", "text": "Unsolicited prize notification"},
            {"type": "warning", "text": "Creates false urgency"},
        ],
        "suggestedAction": "Do not reply or share personal details.",
    }


@pytest.fixture
def sample_verification():
    return {
        "status": "likely_fake",
        "confidence": 80,
        "entity": {"name": "Internal Revenue Service", "type": "government", "officialDomain": "irs.gov"},
        "verification": {
            "foundOnOfficial": False,
            "matchLevel": "not_found",
            "discrepancies": ["The IRS does not contact taxpayers by text message"],
            "lastKnownUpdate": None,
        },
        "explanation": "No matching notice exists on irs.gov.",
        "suggestedAction": "Check your account directly on irs.gov.",
        "sources": ["https://www.irs.gov/newsroom"],
    }


@pytest.fixture
def completion():
    """Build a non-streamed chat-completion body around ``text``."""
    def _build(text):
        return {"choices": [{"message": {"role": "assistant", "content": text}}]}
    return _build


@pytest.fixture
def png_bytes():
    buf = BytesIO()
    Image.new("RGB", (4, 4), color=(200, 10, 10)).save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture
def history_rows():
    now = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)
    return [
        {
            "id": "a1",
            "user_id": "user-1",
            "analysis_type": "text",
            "content": "Congratulations! You've won $1,000,000",
            "verdict": "fake",
            "confidence": 92,
            "explanation": "Lottery scam",
            "indicators": [],
            "evidence": [],
            "is_bookmarked": True,
            "created_at": now.isoformat(),
        },
        {
            "id": "a2",
            "user_id": "user-1",
            "analysis_type": "link",
            "content": "https://example.gov/notice",
            "verdict": "verified",
            "confidence": 70,
            "explanation": "Official domain",
            "indicators": [],
            "evidence": [],
            "is_bookmarked": False,
            "created_at": (now - timedelta(days=1)).isoformat(),
        },
        {
            "id": "a3",
            "user_id": "user-1",
            "analysis_type": "image",
            "content": None,
            "verdict": "suspicious",
            "confidence": 55,
            "explanation": "Possible AI artifacts",
            "indicators": [],
            "evidence": [],
            "is_bookmarked": True,
            "created_at": (now - timedelta(days=3)).isoformat(),
        },
    ]
