from typing import Any

import pytest

from factories import FakeDocumentStore, FakeSearchClient, load_fixture


@pytest.fixture
def netrunnerdb_feed() -> dict[str, Any]:
    return load_fixture("netrunnerdb_cards.json")


@pytest.fixture
def packs_payload() -> dict[str, Any]:
    return load_fixture("packs.json")


@pytest.fixture
def cycles_payload() -> dict[str, Any]:
    return load_fixture("cycles.json")


@pytest.fixture
def card_set_archive() -> dict[str, Any]:
    return load_fixture("card_sets.json")


@pytest.fixture
def document_store() -> FakeDocumentStore:
    return FakeDocumentStore()


@pytest.fixture
def search_client() -> FakeSearchClient:
    return FakeSearchClient()
