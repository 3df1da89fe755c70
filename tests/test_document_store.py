"""Tests for the SQL-backed document store."""

from unittest.mock import MagicMock

import pytest
from sqlalchemy import select
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from cardsync.db.database import init_db
from cardsync.models.db import DocumentDB
from cardsync.models.failure import SinkUnavailableError
from cardsync.services.batch_publisher import publish_cards
from cardsync.sinks.document_store import DocumentRef, SqlDocumentStore
from factories import make_card


@pytest.fixture
async def async_engine():
    """Create an in-memory SQLite engine for testing."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)
    await init_db(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(async_engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
def store(session_factory: async_sessionmaker[AsyncSession]) -> SqlDocumentStore:
    return SqlDocumentStore(session_factory)


async def fetch_documents(
    session_factory: async_sessionmaker[AsyncSession], collection: str
) -> dict[str, dict]:
    async with session_factory() as session:
        result = await session.execute(
            select(DocumentDB).where(DocumentDB.collection == collection)
        )
        return {doc.doc_id: doc.data for doc in result.scalars()}


class TestAddressing:
    def test_collection_doc_ref(self, store: SqlDocumentStore) -> None:
        """collection().doc() builds a document reference."""
        ref = store.collection("cards").doc("01001")

        assert ref == DocumentRef(collection="cards", id="01001")


class TestWriteBatch:
    @pytest.mark.asyncio
    async def test_commit_writes_all_staged_documents(
        self, store: SqlDocumentStore, session_factory: async_sessionmaker[AsyncSession]
    ) -> None:
        """Commit persists every staged write."""
        batch = store.batch()
        batch.set(store.collection("cards").doc("1"), {"name": "Ice Wall"})
        batch.set(store.collection("cards").doc("2"), {"name": "Enigma"})

        assert len(batch) == 2
        await batch.commit()

        documents = await fetch_documents(session_factory, "cards")
        assert documents == {"1": {"name": "Ice Wall"}, "2": {"name": "Enigma"}}

    @pytest.mark.asyncio
    async def test_set_overwrites_existing_document(
        self, store: SqlDocumentStore, session_factory: async_sessionmaker[AsyncSession]
    ) -> None:
        """Setting an existing id replaces its document."""
        first = store.batch()
        first.set(store.collection("cards").doc("1"), {"name": "Ice Wall", "cost": "1[credit]"})
        await first.commit()

        second = store.batch()
        second.set(store.collection("cards").doc("1"), {"name": "Ice Wall", "cost": None})
        await second.commit()

        documents = await fetch_documents(session_factory, "cards")
        assert documents == {"1": {"name": "Ice Wall", "cost": None}}

    @pytest.mark.asyncio
    async def test_database_error_becomes_sink_error(self) -> None:
        """SQLAlchemy errors surface as SinkUnavailableError."""
        failing_factory = MagicMock(side_effect=OperationalError("INSERT", {}, Exception("down")))
        store = SqlDocumentStore(failing_factory)
        batch = store.batch()
        batch.set(store.collection("cards").doc("1"), {"name": "Ice Wall"})

        with pytest.raises(SinkUnavailableError, match="document store"):
            await batch.commit()


class TestDeleteCollection:
    @pytest.mark.asyncio
    async def test_deletes_only_named_collection(
        self, store: SqlDocumentStore, session_factory: async_sessionmaker[AsyncSession]
    ) -> None:
        """Other collections survive a delete."""
        batch = store.batch()
        batch.set(store.collection("cards").doc("1"), {"name": "Ice Wall"})
        batch.set(store.collection("decks").doc("1"), {"name": "Starter"})
        await batch.commit()

        deleted = await store.delete_collection("cards")

        assert deleted == 1
        assert await fetch_documents(session_factory, "cards") == {}
        assert await fetch_documents(session_factory, "decks") == {"1": {"name": "Starter"}}


class TestPublishToSql:
    @pytest.mark.asyncio
    async def test_publish_cards_round_trip(
        self, store: SqlDocumentStore, session_factory: async_sessionmaker[AsyncSession]
    ) -> None:
        """Published cards land in the documents table."""
        cards = [make_card(str(i)) for i in range(12)]

        report = await publish_cards(store, cards, max_batch_size=5)

        assert report.is_complete
        assert [chunk.size for chunk in report.chunks] == [5, 5, 2]
        documents = await fetch_documents(session_factory, "cards")
        assert len(documents) == 12
        assert documents["3"]["name"] == "Card 3"
