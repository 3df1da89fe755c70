"""Tests for the Algolia REST client (mocked HTTP)."""

import json

import httpx
import pytest
import respx

from cardsync.models.failure import SinkUnavailableError
from cardsync.sinks.search_index import SearchIndexClient

BASE_URL = "https://testapp.algolia.net"


@pytest.fixture
async def client():
    async with SearchIndexClient("testapp", "secret") as client:
        yield client


class TestDeleteIndex:
    @pytest.mark.asyncio
    @respx.mock
    async def test_sends_credentials(self, client: SearchIndexClient) -> None:
        """Application id and API key are sent as headers."""
        route = respx.delete(f"{BASE_URL}/1/indexes/cards").mock(
            return_value=httpx.Response(200, json={"taskID": 1})
        )

        await client.delete_index("cards")

        request = route.calls.last.request
        assert request.headers["X-Algolia-Application-Id"] == "testapp"
        assert request.headers["X-Algolia-API-Key"] == "secret"

    @pytest.mark.asyncio
    @respx.mock
    async def test_missing_index_is_not_an_error(self, client: SearchIndexClient) -> None:
        """Deleting an index that was never created succeeds."""
        respx.delete(f"{BASE_URL}/1/indexes/cards").mock(return_value=httpx.Response(404))

        await client.delete_index("cards")

    @pytest.mark.asyncio
    @respx.mock
    async def test_server_error_raises(self, client: SearchIndexClient) -> None:
        """A 5xx from the delete call is a sink failure."""
        respx.delete(f"{BASE_URL}/1/indexes/cards").mock(return_value=httpx.Response(503))

        with pytest.raises(SinkUnavailableError, match="search index"):
            await client.delete_index("cards")

    @pytest.mark.asyncio
    @respx.mock
    async def test_network_error_raises(self, client: SearchIndexClient) -> None:
        """Transport errors from the delete call are sink failures."""
        respx.delete(f"{BASE_URL}/1/indexes/cards").mock(
            side_effect=httpx.ConnectError("connection refused")
        )

        with pytest.raises(SinkUnavailableError):
            await client.delete_index("cards")

    @pytest.mark.asyncio
    @respx.mock
    async def test_index_name_is_quoted(self, client: SearchIndexClient) -> None:
        """Reserved characters in the index name stay inside one path segment."""
        route = respx.delete(host="testapp.algolia.net").mock(return_value=httpx.Response(200))

        await client.delete_index("cards/v2")

        assert route.calls.last.request.url.raw_path == b"/1/indexes/cards%2Fv2"


class TestRequest:
    @pytest.mark.asyncio
    @respx.mock
    async def test_not_found_raises_by_default(self, client: SearchIndexClient) -> None:
        """A 404 is a sink failure unless the caller allows it."""
        respx.get(f"{BASE_URL}/1/indexes/cards/settings").mock(return_value=httpx.Response(404))

        with pytest.raises(SinkUnavailableError, match="search index"):
            await client.request("GET", "/1/indexes/cards/settings")

    @pytest.mark.asyncio
    @respx.mock
    async def test_not_found_returned_when_missing_ok(self, client: SearchIndexClient) -> None:
        """missing_ok hands the 404 response back to the caller."""
        respx.get(f"{BASE_URL}/1/indexes/cards/settings").mock(return_value=httpx.Response(404))

        response = await client.request("GET", "/1/indexes/cards/settings", missing_ok=True)

        assert response.status_code == 404


class TestSaveObjects:
    @pytest.mark.asyncio
    @respx.mock
    async def test_posts_update_object_requests(self, client: SearchIndexClient) -> None:
        """Objects are sent as updateObject batch actions."""
        route = respx.post(f"{BASE_URL}/1/indexes/cards/batch").mock(
            return_value=httpx.Response(200, json={"taskID": 2, "objectIDs": ["1"]})
        )

        index = client.init_index("cards")
        saved = await index.save_objects([{"objectID": "1", "name": "Ice Wall"}])

        assert saved == 1
        body = json.loads(route.calls.last.request.content)
        assert body == {
            "requests": [{"action": "updateObject", "body": {"objectID": "1", "name": "Ice Wall"}}]
        }

    @pytest.mark.asyncio
    @respx.mock
    async def test_large_sets_are_split(self, client: SearchIndexClient) -> None:
        """More than 1000 objects go out in several batch requests."""
        route = respx.post(f"{BASE_URL}/1/indexes/cards/batch").mock(
            return_value=httpx.Response(200, json={"taskID": 3})
        )
        objects = [{"objectID": str(i)} for i in range(2500)]

        saved = await client.init_index("cards").save_objects(objects)

        assert saved == 2500
        sizes = [len(json.loads(call.request.content)["requests"]) for call in route.calls]
        assert sizes == [1000, 1000, 500]

    @pytest.mark.asyncio
    @respx.mock
    async def test_network_error_raises(self, client: SearchIndexClient) -> None:
        """Transport errors from a batch request are sink failures."""
        respx.post(f"{BASE_URL}/1/indexes/cards/batch").mock(
            side_effect=httpx.ConnectError("connection refused")
        )

        with pytest.raises(SinkUnavailableError):
            await client.init_index("cards").save_objects([{"objectID": "1"}])

    @pytest.mark.asyncio
    @respx.mock
    async def test_index_name_is_quoted(self, client: SearchIndexClient) -> None:
        """The batch path quotes the index name."""
        route = respx.post(host="testapp.algolia.net").mock(
            return_value=httpx.Response(200, json={"taskID": 4})
        )

        await client.init_index("cards v2").save_objects([{"objectID": "1"}])

        assert route.calls.last.request.url.raw_path == b"/1/indexes/cards%20v2/batch"
