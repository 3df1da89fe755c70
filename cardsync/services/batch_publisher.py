"""
Batch publisher.

Writes canonical Cards to the document store in bounded, ordered chunks.
Each chunk is one atomic batch commit keyed by card id.

SEMANTICS:
- Card ids are validated before any chunk is built
- Chunks are independent: a failed commit is recorded and publishing
  continues with the remaining chunks
- Every commit is awaited; the report lists one result per chunk
- Re-publishing the same cards overwrites, so a partial run can be re-run
"""

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from cardsync.models.card import Card
from cardsync.models.failure import FailureDetail, InvalidCardError, SinkUnavailableError
from cardsync.sinks.document_store import DocumentStore

logger = logging.getLogger(__name__)

DEFAULT_MAX_BATCH_SIZE = 500
DEFAULT_COLLECTION = "cards"


@dataclass(frozen=True)
class ChunkResult:
    """Outcome of committing one chunk."""

    index: int
    card_ids: tuple[str, ...]
    failure: FailureDetail | None = None

    @property
    def ok(self) -> bool:
        return self.failure is None

    @property
    def size(self) -> int:
        return len(self.card_ids)


@dataclass
class PublishReport:
    """Per-chunk results of one publication run, in chunk order."""

    chunks: list[ChunkResult] = field(default_factory=list)

    @property
    def cards_written(self) -> int:
        return sum(chunk.size for chunk in self.chunks if chunk.ok)

    @property
    def failed_chunks(self) -> list[ChunkResult]:
        return [chunk for chunk in self.chunks if not chunk.ok]

    @property
    def is_complete(self) -> bool:
        """Whether every chunk committed. False means partial ingestion."""
        return not self.failed_chunks


def validate_card_ids(cards: Sequence[Card]) -> None:
    """
    Ensure every card has a usable document id.

    Raises:
        InvalidCardError: On the first card with an empty id
    """
    for position, card in enumerate(cards):
        if not card.id:
            raise InvalidCardError(
                f"Card '{card.name}' has no id and cannot be published",
                detail=f"position={position}",
            )


def partition(cards: Sequence[Card], max_batch_size: int) -> list[list[Card]]:
    """
    Split cards into consecutive chunks of at most max_batch_size.

    Order is preserved; only the final chunk may be smaller.
    """
    if max_batch_size < 1:
        raise ValueError(f"max_batch_size must be positive, got {max_batch_size}")
    return [list(cards[i : i + max_batch_size]) for i in range(0, len(cards), max_batch_size)]


async def commit_chunk(
    store: DocumentStore, collection: str, index: int, chunk: Sequence[Card]
) -> ChunkResult:
    """Stage and commit one chunk. Sink failures are captured in the result."""
    batch = store.batch()
    refs = store.collection(collection)
    for card in chunk:
        batch.set(refs.doc(card.id), card.to_document())

    card_ids = tuple(card.id for card in chunk)
    try:
        await batch.commit()
    except SinkUnavailableError as e:
        logger.error("Chunk %d (%d cards) failed to commit: %s", index, len(chunk), e)
        return ChunkResult(index=index, card_ids=card_ids, failure=e.to_detail())

    logger.info("Committed chunk %d (%d cards)", index, len(chunk))
    return ChunkResult(index=index, card_ids=card_ids)


async def publish_cards(
    store: DocumentStore,
    cards: Sequence[Card],
    *,
    collection: str = DEFAULT_COLLECTION,
    max_batch_size: int = DEFAULT_MAX_BATCH_SIZE,
    max_concurrency: int = 1,
) -> PublishReport:
    """
    Publish cards to the document store.

    Args:
        store: Document store to write to
        cards: Merged cards, in publication order
        collection: Target collection name
        max_batch_size: Maximum writes per batch commit
        max_concurrency: Number of chunk commits allowed in flight at once

    Returns:
        PublishReport with one ChunkResult per chunk

    Raises:
        InvalidCardError: If any card has an empty id (nothing is written)
    """
    validate_card_ids(cards)
    chunks = partition(cards, max_batch_size)
    logger.info("Publishing %d cards in %d chunks to %s", len(cards), len(chunks), collection)

    if max_concurrency <= 1:
        results = [
            await commit_chunk(store, collection, index, chunk)
            for index, chunk in enumerate(chunks)
        ]
    else:
        # Chunks address disjoint document ids, so commits may overlap
        semaphore = asyncio.Semaphore(max_concurrency)

        async def bounded(index: int, chunk: list[Card]) -> ChunkResult:
            async with semaphore:
                return await commit_chunk(store, collection, index, chunk)

        # Every commit runs to completion before an unexpected error propagates
        outcomes = await asyncio.gather(
            *(bounded(index, chunk) for index, chunk in enumerate(chunks)),
            return_exceptions=True,
        )
        results = []
        for outcome in outcomes:
            if isinstance(outcome, BaseException):
                raise outcome
            results.append(outcome)

    report = PublishReport(chunks=results)
    if report.is_complete:
        logger.info("Published %d cards", report.cards_written)
    else:
        logger.error(
            "Partial publication: %d of %d chunks failed (%s)",
            len(report.failed_chunks),
            len(report.chunks),
            ", ".join(str(chunk.index) for chunk in report.failed_chunks),
        )
    return report
