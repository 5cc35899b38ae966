import json

import httpx

BASE_URL = "https://project.supabase.co"
ANON_KEY = "test_anon_key"


def sse(*events):
    """Frame events as a text-event-stream body, ending with [DONE]."""
    lines = [f"data: {json.dumps(e)}\n\n" for e in events]
    lines.append("data: [DONE]\n\n")
    return "".join(lines).encode("utf-8")


def delta(text):
    return {"choices": [{"delta": {"content": text}}]}


def chunked(*chunks):
    async def _gen():
        for chunk in chunks:
            yield chunk
    return _gen()


def mock_transport(handler):
    return httpx.MockTransport(handler)
