from typing import Any, AsyncIterator, Dict, List, Optional

import httpx

from truthlens.config import LLM_CONFIG, logger, settings
from truthlens.exceptions import (
    ConfigurationException,
    GatewayException,
    PaymentRequiredException,
    RateLimitException,
)
from truthlens.utils.parsing import extract_message_content


def _gateway_headers() -> Dict[str, str]:
    if not settings.LOVABLE_API_KEY:
        logger.critical("LOVABLE_API_KEY not configured.")
        raise ConfigurationException("LOVABLE_API_KEY")
    return {
        "Authorization": f"Bearer {settings.LOVABLE_API_KEY}",
        "Content-Type": "application/json",
    }


def _raise_for_gateway_status(status_code: int, body: str) -> None:
    if status_code == 429:
        raise RateLimitException()
    if status_code == 402:
        raise PaymentRequiredException()
    logger.error("AI gateway error %s: %s", status_code, body)
    raise GatewayException(f"HTTP {status_code}", recoverable=status_code >= 500)


async def call_gateway(
    messages: List[Dict[str, Any]],
    model: str,
    temperature: float,
    max_tokens: int,
) -> str:
    """Run one non-streamed chat completion and return the assistant text."""
    headers = _gateway_headers()
    body = {
        "model": model,
        "messages": messages,
        "temperature": temperature,
        "max_tokens": max_tokens,
    }
    try:
        async with httpx.AsyncClient(timeout=LLM_CONFIG.REQUEST_TIMEOUT) as client:
            response = await client.post(settings.AI_GATEWAY_URL, headers=headers, json=body)
            if response.status_code != 200:
                _raise_for_gateway_status(response.status_code, response.text)
            data = response.json()
    except GatewayException:
        raise
    except httpx.RequestError as e:
        logger.error("AI gateway request error for URL %s: %s", settings.AI_GATEWAY_URL, str(e))
        raise GatewayException(f"Request failed: {str(e)}", recoverable=True)
    except ValueError as e:
        logger.error("AI gateway returned a non-JSON body: %s", e)
        raise GatewayException("Malformed gateway response", recoverable=True)

    text = extract_message_content(data)
    if not text:
        logger.error("AI gateway returned no completion text: %s", data)
        raise GatewayException("No response from AI", recoverable=True)
    return text


class GatewayStream:
    """An open streamed completion whose body is forwarded as-is."""

    def __init__(self, client: httpx.AsyncClient, response: httpx.Response):
        self._client = client
        self._response = response

    async def iter_bytes(self) -> AsyncIterator[bytes]:
        try:
            async for chunk in self._response.aiter_raw():
                yield chunk
        finally:
            await self.aclose()

    async def aclose(self) -> None:
        await self._response.aclose()
        await self._client.aclose()


async def open_gateway_stream(
    messages: List[Dict[str, Any]],
    model: str,
    temperature: float,
    max_tokens: int,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> GatewayStream:
    """Start a streamed chat completion, raising before any byte is forwarded."""
    headers = _gateway_headers()
    body = {
        "model": model,
        "messages": messages,
        "temperature": temperature,
        "max_tokens": max_tokens,
        "stream": True,
    }
    client = httpx.AsyncClient(timeout=LLM_CONFIG.STREAM_TIMEOUT, transport=transport)
    request = client.build_request("POST", settings.AI_GATEWAY_URL, headers=headers, json=body)
    try:
        response = await client.send(request, stream=True)
    except httpx.RequestError as e:
        await client.aclose()
        logger.error("AI gateway stream request error: %s", str(e))
        raise GatewayException(f"Request failed: {str(e)}", recoverable=True)

    if response.status_code != 200:
        error_body = (await response.aread()).decode("utf-8", errors="replace")
        await response.aclose()
        await client.aclose()
        _raise_for_gateway_status(response.status_code, error_body)

    return GatewayStream(client, response)
