from typing import Any, Dict, Optional

import httpx

from truthlens.config import LLM_CONFIG, logger, settings
from truthlens.exceptions import ConfigurationException, GatewayException


class FunctionsClient:
    """Invokes the hosted remote functions (analyze-content, verify-source, ...)."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        anon_key: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        base_url = base_url or settings.SUPABASE_URL
        if not base_url:
            raise ConfigurationException("SUPABASE_URL")
        self.base_url = base_url.rstrip("/")
        self.anon_key = anon_key or settings.SUPABASE_ANON_KEY
        self.transport = transport

    def url_for(self, name: str) -> str:
        return f"{self.base_url}/functions/v1/{name}"

    def headers(self, access_token: Optional[str] = None) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.anon_key:
            headers["apikey"] = self.anon_key
        token = access_token or self.anon_key
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    async def invoke(
        self,
        name: str,
        body: Dict[str, Any],
        access_token: Optional[str] = None,
    ) -> Dict[str, Any]:
        """POST ``body`` to a function and return its JSON object.

        Error statuses that still carry an ``{"error": ...}`` body are returned
        like any other body so callers can classify the message. A success
        status whose body is not a JSON object comes back as ``{}`` for the
        caller to decode into its fallback. Any other error status raises
        GatewayException.
        """
        try:
            async with httpx.AsyncClient(
                timeout=LLM_CONFIG.REQUEST_TIMEOUT, transport=self.transport
            ) as client:
                response = await client.post(self.url_for(name), headers=self.headers(access_token), json=body)
        except httpx.RequestError as e:
            logger.error("Function %s request error: %s", name, str(e))
            raise GatewayException(f"Request failed: {str(e)}", recoverable=True)

        try:
            data = response.json()
        except ValueError:
            data = None

        if isinstance(data, dict) and (response.is_success or "error" in data):
            if not response.is_success:
                logger.warning("Function %s returned %s: %s", name, response.status_code, data["error"])
            return data

        if response.is_success:
            logger.warning("Function %s returned a non-object body: %s", name, response.text[:200])
            return {}

        logger.error("Function %s returned %s: %s", name, response.status_code, response.text)
        raise GatewayException(f"HTTP {response.status_code}", recoverable=response.status_code >= 500)
