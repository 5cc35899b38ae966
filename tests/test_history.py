import json

import httpx
import pytest

from helpers import ANON_KEY, BASE_URL, mock_transport
from truthlens.client import AuthState, HistoryClient
from truthlens.exceptions import SessionRequiredException
from truthlens.models import AnalysisResult, HistoryItem, TextRequest

TABLE_URL = f"{BASE_URL}/rest/v1/analysis_history"


class Recorder:

    def __init__(self, *responses):
        self.responses = list(responses)
        self.requests = []

    def __call__(self, request):
        self.requests.append(request)
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


def make_client(auth, notifier, recorder):
    return HistoryClient(auth, notifier, BASE_URL, ANON_KEY, transport=mock_transport(recorder))


@pytest.fixture
def signed_in(session):
    return AuthState(session)


@pytest.mark.asyncio
class TestHistoryList:

    async def test_signed_out_returns_empty_without_request(self, auth, notifier):
        recorder = Recorder()
        client = make_client(auth, notifier, recorder)

        assert await client.list() == []
        assert recorder.requests == []

    async def test_lists_newest_first(self, signed_in, notifier, history_rows):
        shuffled = [history_rows[2], history_rows[0], history_rows[1]]
        recorder = Recorder(httpx.Response(200, json=shuffled))
        client = make_client(signed_in, notifier, recorder)

        items = await client.list()

        assert [item.id for item in items] == ["a1", "a2", "a3"]
        assert client.items == items
        request = recorder.requests[0]
        assert request.method == "GET"
        assert str(request.url).startswith(TABLE_URL)
        assert request.url.params["user_id"] == "eq.user-1"
        assert request.url.params["order"] == "created_at.desc"
        assert "is_bookmarked" not in request.url.params
        assert request.headers["Authorization"] == "Bearer user_token"
        assert request.headers["apikey"] == ANON_KEY

    async def test_bookmarked_filter(self, signed_in, notifier, history_rows):
        bookmarked = [row for row in history_rows if row["is_bookmarked"]]
        recorder = Recorder(httpx.Response(200, json=bookmarked))
        client = make_client(signed_in, notifier, recorder)

        items = await client.list("bookmarked")

        assert recorder.requests[0].url.params["is_bookmarked"] == "eq.true"
        assert all(item.is_bookmarked for item in items)

    async def test_failure_keeps_previous_items(self, signed_in, notifier, history_rows):
        recorder = Recorder(httpx.Response(200, json=history_rows), httpx.Response(500, json={"message": "boom"}))
        client = make_client(signed_in, notifier, recorder)
        await client.list()

        items = await client.list()

        assert len(items) == 3
        notifier.error.assert_called_once_with("Failed to load history")


@pytest.mark.asyncio
class TestHistoryMutations:

    async def _loaded(self, signed_in, notifier, history_rows, *responses):
        recorder = Recorder(httpx.Response(200, json=history_rows), *responses)
        client = make_client(signed_in, notifier, recorder)
        await client.list()
        return client, recorder

    async def test_toggle_bookmark(self, signed_in, notifier, history_rows):
        client, recorder = await self._loaded(signed_in, notifier, history_rows, httpx.Response(204))

        updated = await client.toggle_bookmark("a2")

        assert updated.is_bookmarked is True
        assert client.items[1].is_bookmarked is True
        patch = recorder.requests[1]
        assert patch.method == "PATCH"
        assert patch.url.params["id"] == "eq.a2"
        assert json.loads(patch.content) == {"is_bookmarked": True}
        notifier.success.assert_called_once_with("Added to bookmarks")

    async def test_unbookmark(self, signed_in, notifier, history_rows):
        client, _ = await self._loaded(signed_in, notifier, history_rows, httpx.Response(204))

        await client.toggle_bookmark("a1")

        assert client.items[0].is_bookmarked is False
        notifier.success.assert_called_once_with("Removed from bookmarks")

    async def test_toggle_failure_is_not_rolled_back(self, signed_in, notifier, history_rows):
        client, _ = await self._loaded(signed_in, notifier, history_rows, httpx.Response(500))

        await client.toggle_bookmark("a2")

        assert client.items[1].is_bookmarked is True
        notifier.error.assert_called_once_with("Failed to update bookmark")
        notifier.success.assert_not_called()

    async def test_toggle_unknown_item(self, signed_in, notifier, history_rows):
        client, recorder = await self._loaded(signed_in, notifier, history_rows)

        assert await client.toggle_bookmark("missing") is None
        assert len(recorder.requests) == 1

    async def test_delete(self, signed_in, notifier, history_rows):
        client, recorder = await self._loaded(signed_in, notifier, history_rows, httpx.Response(204))

        assert await client.delete("a2") is True

        assert [item.id for item in client.items] == ["a1", "a3"]
        assert recorder.requests[1].method == "DELETE"
        assert recorder.requests[1].url.params["id"] == "eq.a2"
        notifier.success.assert_called_once_with("Item deleted")

    async def test_delete_failure_keeps_item(self, signed_in, notifier, history_rows):
        client, _ = await self._loaded(signed_in, notifier, history_rows, httpx.ConnectError("down"))

        assert await client.delete("a2") is False

        assert len(client.items) == 3
        notifier.error.assert_called_once_with("Failed to delete item")

    async def test_record_prepends_created_row(self, signed_in, notifier, history_rows, sample_analysis):
        created = dict(history_rows[0], id="new", created_at="2026-10-20T08:00:00+00:00")
        client, recorder = await self._loaded(
            signed_in, notifier, history_rows, httpx.Response(201, json=[created])
        )

        item = await client.record(TextRequest(content="hello"), AnalysisResult.model_validate(sample_analysis))

        assert item.id == "new"
        assert client.items[0] is item
        insert = recorder.requests[1]
        assert insert.headers["Prefer"] == "return=representation"
        row = json.loads(insert.content)
        assert row["user_id"] == "user-1"
        assert row["confidence"] == 92
        assert len(row["indicators"]) == 4

    async def test_record_failure_returns_none(self, signed_in, notifier, sample_analysis):
        client = make_client(signed_in, notifier, Recorder(httpx.Response(400, json={"message": "bad"})))

        item = await client.record(TextRequest(content="hello"), AnalysisResult.model_validate(sample_analysis))

        assert item is None
        assert client.items == []

    async def test_record_requires_session(self, auth, notifier, sample_analysis):
        client = make_client(auth, notifier, Recorder())

        with pytest.raises(SessionRequiredException):
            await client.record(TextRequest(content="hello"), AnalysisResult.model_validate(sample_analysis))


class TestHistorySearch:

    def test_matches_content_and_explanation(self, signed_in, notifier, history_rows):
        client = make_client(signed_in, notifier, Recorder())
        client.items = [HistoryItem.model_validate(row) for row in history_rows]

        assert [i.id for i in client.search("MILLION")] == []
        assert [i.id for i in client.search("won $1")] == ["a1"]
        assert [i.id for i in client.search("artifacts")] == ["a3"]
        assert len(client.search("  ")) == 3
