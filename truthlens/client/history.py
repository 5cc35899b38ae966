from typing import Any, Dict, List, Optional

import httpx
from pydantic import ValidationError

from truthlens.config import HISTORY_CONFIG, logger, settings
from truthlens.exceptions import ConfigurationException, SessionRequiredException
from truthlens.models.analysis import AnalysisResult
from truthlens.models.history import HistoryFilter, HistoryItem
from .auth import AuthSession, AuthState
from .notify import Notifier


class HistoryClient:
    """Reads and writes the signed-in user's analysis history.

    Talks to the hosted relational store through its REST interface; row level
    security scopes every request to the token's user. ``items`` is the list
    the UI renders.
    """

    def __init__(
        self,
        auth: AuthState,
        notifier: Notifier,
        base_url: Optional[str] = None,
        anon_key: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        base_url = base_url or settings.SUPABASE_URL
        if not base_url:
            raise ConfigurationException("SUPABASE_URL")
        self.table_url = f"{base_url.rstrip('/')}/rest/v1/{HISTORY_CONFIG.TABLE}"
        self.anon_key = anon_key or settings.SUPABASE_ANON_KEY
        self.auth = auth
        self.notifier = notifier
        self.transport = transport
        self.items: List[HistoryItem] = []

    def _headers(self, session: AuthSession) -> Dict[str, str]:
        headers = {
            "Authorization": f"Bearer {session.access_token}",
            "Content-Type": "application/json",
        }
        if self.anon_key:
            headers["apikey"] = self.anon_key
        return headers

    async def _request(
        self,
        method: str,
        session: AuthSession,
        params: Optional[Dict[str, str]] = None,
        json: Any = None,
        prefer: Optional[str] = None,
    ) -> httpx.Response:
        headers = self._headers(session)
        if prefer:
            headers["Prefer"] = prefer
        async with httpx.AsyncClient(
            timeout=HISTORY_CONFIG.REQUEST_TIMEOUT, transport=self.transport
        ) as client:
            response = await client.request(method, self.table_url, params=params, json=json, headers=headers)
            response.raise_for_status()
            return response

    async def list(self, filter: HistoryFilter = "all") -> List[HistoryItem]:
        """Fetch history newest first; an empty list when signed out."""
        session = self.auth.session
        if session is None:
            self.items = []
            return []

        params = {
            "select": "*",
            "user_id": f"eq.{session.user_id}",
            "order": "created_at.desc",
        }
        if filter == "bookmarked":
            params["is_bookmarked"] = "eq.true"

        try:
            response = await self._request("GET", session, params=params)
            rows = response.json()
            items = [HistoryItem.model_validate(row) for row in rows or []]
        except (httpx.HTTPError, ValueError, ValidationError) as e:
            logger.error("Failed to fetch history: %s", e)
            self.notifier.error("Failed to load history")
            return self.items

        items.sort(key=lambda item: item.created_at, reverse=True)
        self.items = items
        return items

    async def toggle_bookmark(self, item_id: str) -> Optional[HistoryItem]:
        """Flip the bookmark locally first, then persist it.

        The local change is kept even if the update fails.
        """
        session = self.auth.session
        if session is None:
            return None

        index = next((i for i, item in enumerate(self.items) if item.id == item_id), None)
        if index is None:
            logger.warning("Bookmark toggle for unknown history item %s", item_id)
            return None

        current = self.items[index]
        updated = current.model_copy(update={"is_bookmarked": not current.is_bookmarked})
        self.items[index] = updated

        try:
            await self._request(
                "PATCH",
                session,
                params={"id": f"eq.{item_id}"},
                json={"is_bookmarked": updated.is_bookmarked},
            )
        except httpx.HTTPError as e:
            logger.error("Failed to update bookmark %s: %s", item_id, e)
            self.notifier.error("Failed to update bookmark")
            return updated

        self.notifier.success("Added to bookmarks" if updated.is_bookmarked else "Removed from bookmarks")
        return updated

    async def delete(self, item_id: str) -> bool:
        session = self.auth.session
        if session is None:
            return False

        try:
            await self._request("DELETE", session, params={"id": f"eq.{item_id}"})
        except httpx.HTTPError as e:
            logger.error("Failed to delete history item %s: %s", item_id, e)
            self.notifier.error("Failed to delete item")
            return False

        self.items = [item for item in self.items if item.id != item_id]
        self.notifier.success("Item deleted")
        return True

    async def record(
        self,
        request: Any,
        result: AnalysisResult,
        session: Optional[AuthSession] = None,
    ) -> Optional[HistoryItem]:
        """Insert a row for a completed analysis and prepend it to ``items``.

        ``session`` is the one the analysis ran under; it defaults to the
        current session.
        """
        session = session or self.auth.session
        if session is None:
            raise SessionRequiredException("Saving history")

        row = {
            "user_id": session.user_id,
            "analysis_type": request.kind,
            "content": request.label,
            "verdict": result.verdict,
            "confidence": result.confidence,
            "explanation": result.explanation,
            "indicators": [i.model_dump() for i in result.indicators],
            "evidence": [e.model_dump() for e in result.evidence],
        }
        try:
            response = await self._request("POST", session, json=row, prefer="return=representation")
            created = response.json()
            item = HistoryItem.model_validate(created[0] if isinstance(created, list) else created)
        except (httpx.HTTPError, ValueError, ValidationError, IndexError) as e:
            logger.error("Failed to save analysis to history: %s", e)
            return None

        self.items.insert(0, item)
        return item

    def search(self, query: str) -> List[HistoryItem]:
        needle = query.strip().lower()
        if not needle:
            return list(self.items)
        return [
            item for item in self.items
            if needle in (item.content or "").lower() or needle in item.explanation.lower()
        ]
