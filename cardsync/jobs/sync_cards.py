"""
Sync the card catalog to the document store and the search index.

Loads the configured raw feed, normalizes and merges it into canonical
cards, publishes them in batches, then rebuilds the search index.
Run as a standalone script or call run_sync() from a scheduler.
"""

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path

import httpx

from cardsync.config import Settings, get_settings
from cardsync.db.database import create_engine_for, create_session_factory, init_db
from cardsync.models.card import Card
from cardsync.parsers.card_set_archive import adapt_archive, parse_archive
from cardsync.parsers.netrunnerdb import adapt_cards, parse_feed
from cardsync.services.batch_publisher import PublishReport, publish_cards
from cardsync.services.index_projector import rebuild_index
from cardsync.services.merge_engine import merge_records
from cardsync.services.reference_data import fetch_release_catalog, load_feed
from cardsync.sinks.document_store import DocumentStore, SqlDocumentStore
from cardsync.sinks.search_index import SearchIndexClient

logger = logging.getLogger(__name__)


@dataclass
class SyncReport:
    """Summary of one sync run."""

    card_count: int
    publish: PublishReport
    indexed: int | None = None

    @property
    def is_complete(self) -> bool:
        return self.publish.is_complete


async def load_cards(settings: Settings, client: httpx.AsyncClient) -> list[Card]:
    """
    Load the configured source and merge it into canonical cards.

    Raises:
        MissingReferenceError: If the feed references an unknown release
        ReferenceFetchError: If pack or cycle data cannot be fetched
    """
    if settings.source == "archive":
        archive = parse_archive(load_feed(Path(settings.archive_path)))
        records = adapt_archive(archive)
    else:
        feed = parse_feed(load_feed(Path(settings.feed_path)))
        catalog = await fetch_release_catalog(client, settings.netrunnerdb_api_url)
        records = adapt_cards(feed, catalog, image_template=settings.card_image_template)

    cards = merge_records(records)
    logger.info("Loaded %d cards from %d %s records", len(cards), len(records), settings.source)
    return cards


async def publish(
    settings: Settings,
    cards: list[Card],
    store: DocumentStore,
    search_client: SearchIndexClient | None,
) -> SyncReport:
    """Publish merged cards to the document store, then rebuild the search index."""
    if settings.purge_before_publish:
        await store.delete_collection(settings.cards_collection)

    report = await publish_cards(
        store,
        cards,
        collection=settings.cards_collection,
        max_batch_size=settings.max_batch_size,
        max_concurrency=settings.max_concurrent_commits,
    )

    indexed = None
    if search_client is not None:
        indexed = await rebuild_index(search_client, cards, settings.search_index_name)

    return SyncReport(card_count=len(cards), publish=report, indexed=indexed)


async def run_sync(settings: Settings | None = None) -> SyncReport:
    """Run a full sync using sinks built from settings."""
    settings = settings or get_settings()

    engine = create_engine_for(settings.database_url, echo=settings.debug)
    try:
        await init_db(engine)
        store = SqlDocumentStore(create_session_factory(engine))

        async with httpx.AsyncClient(
            headers={"User-Agent": f"{settings.app_name}/1.0"},
            follow_redirects=True,
            timeout=30.0,
        ) as client:
            cards = await load_cards(settings, client)

            search_client = None
            if settings.rebuild_search_index:
                search_client = SearchIndexClient(
                    settings.algolia_app_id, settings.algolia_api_key, http_client=client
                )

            report = await publish(settings, cards, store, search_client)
    finally:
        await engine.dispose()

    if not report.is_complete:
        logger.error("Sync finished with partial publication; re-run to complete it")
    else:
        logger.info("Sync complete: %d cards", report.card_count)
    return report


def main() -> None:
    """CLI entry point."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    try:
        asyncio.run(run_sync())
    except Exception as e:
        logger.error("Card sync failed: %s", e)
        raise


if __name__ == "__main__":
    main()
