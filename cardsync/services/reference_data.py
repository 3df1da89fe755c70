"""
Release reference data service.

Fetches packs and cycles from the NetrunnerDB public API and loads static
feed documents from disk.
"""

import json
import logging
from pathlib import Path
from typing import Any

import httpx

from cardsync.models.failure import ReferenceFetchError
from cardsync.models.release import ReleaseCatalog
from cardsync.parsers.netrunnerdb import NetrunnerCycle, NetrunnerPack, build_release_catalog

logger = logging.getLogger(__name__)

NETRUNNERDB_API = "https://netrunnerdb.com/api/2.0/public"


async def _fetch_data(client: httpx.AsyncClient, url: str) -> list[dict[str, Any]]:
    try:
        response = await client.get(url)
        response.raise_for_status()
        data: list[dict[str, Any]] = response.json()["data"]
    except httpx.HTTPStatusError as e:
        raise ReferenceFetchError(url, f"HTTP {e.response.status_code}") from e
    except httpx.RequestError as e:
        raise ReferenceFetchError(url, str(e)) from e
    except ValueError as e:
        raise ReferenceFetchError(url, f"Response is not JSON: {e}") from e
    except KeyError as e:
        raise ReferenceFetchError(url, "Response has no \"data\" field") from e

    return data


async def fetch_packs(
    client: httpx.AsyncClient, base_url: str = NETRUNNERDB_API
) -> list[NetrunnerPack]:
    """
    Fetch every pack from NetrunnerDB.

    Raises:
        ReferenceFetchError: If the request fails
    """
    data = await _fetch_data(client, f"{base_url}/packs")
    return [NetrunnerPack.model_validate(item) for item in data]


async def fetch_cycles(
    client: httpx.AsyncClient, base_url: str = NETRUNNERDB_API
) -> list[NetrunnerCycle]:
    """
    Fetch every cycle from NetrunnerDB.

    Raises:
        ReferenceFetchError: If the request fails
    """
    data = await _fetch_data(client, f"{base_url}/cycles")
    return [NetrunnerCycle.model_validate(item) for item in data]


async def fetch_release_catalog(
    client: httpx.AsyncClient, base_url: str = NETRUNNERDB_API
) -> ReleaseCatalog:
    """Fetch packs then cycles and combine them into a ReleaseCatalog."""
    packs = await fetch_packs(client, base_url)
    cycles = await fetch_cycles(client, base_url)
    logger.info("Fetched %d packs and %d cycles", len(packs), len(cycles))
    return build_release_catalog(packs, cycles)


def load_feed(path: Path) -> dict[str, Any]:
    """
    Load a static feed document.

    Raises:
        FileNotFoundError: If the feed file doesn't exist
    """
    if not path.exists():
        raise FileNotFoundError(f"Card feed not found at {path}.")

    with open(path, encoding="utf-8") as f:
        document: dict[str, Any] = json.load(f)

    return document
