"""
Search index sink.

Talks to the Algolia REST API over httpx. Only the calls needed for a
replace-all rebuild are implemented: delete an index, then bulk-save
objects into it.

API docs: https://www.algolia.com/doc/rest-api/search/
"""

import logging
from typing import Any, NoReturn
from urllib.parse import quote

import httpx

from cardsync.models.failure import SinkUnavailableError

logger = logging.getLogger(__name__)

# Algolia recommends batches of about 1000 objects per request
SAVE_OBJECTS_CHUNK_SIZE = 1000


def _index_path(name: str) -> str:
    return f"/1/indexes/{quote(name, safe='')}"


def _raise_sink_error(e: httpx.HTTPError) -> NoReturn:
    if isinstance(e, httpx.HTTPStatusError):
        raise SinkUnavailableError("search index", f"HTTP {e.response.status_code}") from e
    raise SinkUnavailableError("search index", str(e)) from e


class SearchIndex:
    """Handle on a single named index."""

    def __init__(self, client: "SearchIndexClient", name: str) -> None:
        self._client = client
        self.name = name

    async def save_objects(self, objects: list[dict[str, Any]]) -> int:
        """
        Add or replace objects by objectID.

        Returns:
            Number of objects submitted

        Raises:
            SinkUnavailableError: If any batch request fails
        """
        for start in range(0, len(objects), SAVE_OBJECTS_CHUNK_SIZE):
            chunk = objects[start : start + SAVE_OBJECTS_CHUNK_SIZE]
            payload = {"requests": [{"action": "updateObject", "body": obj} for obj in chunk]}
            await self._client.request("POST", f"{_index_path(self.name)}/batch", json=payload)

        return len(objects)


class SearchIndexClient:
    """Minimal async Algolia client."""

    def __init__(
        self,
        app_id: str,
        api_key: str,
        *,
        http_client: httpx.AsyncClient | None = None,
        base_url: str | None = None,
    ) -> None:
        self.app_id = app_id
        self.base_url = base_url or f"https://{app_id}.algolia.net"
        self._headers = {
            "X-Algolia-Application-Id": app_id,
            "X-Algolia-API-Key": api_key,
        }
        self._http = http_client or httpx.AsyncClient(timeout=30.0)
        self._owns_http = http_client is None

    async def __aenter__(self) -> "SearchIndexClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_http:
            await self._http.aclose()

    async def request(
        self, method: str, path: str, *, missing_ok: bool = False, **kwargs: Any
    ) -> httpx.Response:
        """
        Send an authenticated request.

        A 404 is returned as-is instead of raising when missing_ok is set.

        Raises:
            SinkUnavailableError: If the request fails or returns an error status
        """
        try:
            response = await self._http.request(
                method, f"{self.base_url}{path}", headers=self._headers, **kwargs
            )
            if missing_ok and response.status_code == 404:
                return response
            response.raise_for_status()
        except httpx.HTTPError as e:
            _raise_sink_error(e)
        return response

    async def delete_index(self, name: str) -> None:
        """Delete an index. Deleting an index that does not exist is not an error."""
        response = await self.request("DELETE", _index_path(name), missing_ok=True)
        if response.status_code == 404:
            logger.info("Index %s did not exist", name)

    def init_index(self, name: str) -> SearchIndex:
        return SearchIndex(self, name)
