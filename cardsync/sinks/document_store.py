"""
Document store sink.

Documents are addressed as collection(name).doc(id). Writes are staged on
a WriteBatch and applied atomically by commit(). Nothing in the pipeline
reads documents back.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from cardsync.models.db import DocumentDB
from cardsync.models.failure import SinkUnavailableError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DocumentRef:
    collection: str
    id: str


@dataclass(frozen=True, slots=True)
class CollectionRef:
    name: str

    def doc(self, doc_id: str) -> DocumentRef:
        return DocumentRef(collection=self.name, id=doc_id)


class WriteBatch(ABC):
    """A set of staged writes applied in one atomic request."""

    def __init__(self) -> None:
        self._writes: list[tuple[DocumentRef, dict[str, Any]]] = []

    def __len__(self) -> int:
        return len(self._writes)

    def set(self, ref: DocumentRef, value: dict[str, Any]) -> None:
        """Stage a full overwrite of the document at ref."""
        self._writes.append((ref, value))

    @abstractmethod
    async def commit(self) -> None:
        """
        Apply every staged write atomically.

        Raises:
            SinkUnavailableError: If the store rejects the batch
        """
        ...


class DocumentStore(ABC):
    """Abstract base class for document store backends."""

    def collection(self, name: str) -> CollectionRef:
        return CollectionRef(name=name)

    @abstractmethod
    def batch(self) -> WriteBatch:
        """Create an empty write batch."""
        ...

    @abstractmethod
    async def delete_collection(self, name: str) -> int:
        """
        Delete every document in a collection.

        Returns:
            Number of documents deleted
        """
        ...


class SqlWriteBatch(WriteBatch):
    """Write batch applied in a single SQLAlchemy transaction."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        super().__init__()
        self._session_factory = session_factory

    async def commit(self) -> None:
        try:
            async with self._session_factory() as session, session.begin():
                for ref, value in self._writes:
                    await session.merge(
                        DocumentDB(collection=ref.collection, doc_id=ref.id, data=value)
                    )
        except SQLAlchemyError as e:
            raise SinkUnavailableError("document store", str(e)) from e


class SqlDocumentStore(DocumentStore):
    """Document store persisted in a relational database via SQLAlchemy."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    def batch(self) -> SqlWriteBatch:
        return SqlWriteBatch(self._session_factory)

    async def delete_collection(self, name: str) -> int:
        try:
            async with self._session_factory() as session, session.begin():
                result = await session.execute(
                    delete(DocumentDB).where(DocumentDB.collection == name)
                )
        except SQLAlchemyError as e:
            raise SinkUnavailableError("document store", str(e)) from e

        deleted: int = result.rowcount or 0
        logger.info("Deleted %d documents from %s", deleted, name)
        return deleted
