"""
Index projector.

Rebuilds the search index from scratch on every run: the target index is
deleted, then every card's projection is saved into it. Readers may see an
empty or partially filled index while a rebuild is in progress. A failed
rebuild is fixed by running it again in full.
"""

import logging
from collections.abc import Sequence

from cardsync.models.card import Card, IndexProjection
from cardsync.sinks.search_index import SearchIndexClient

logger = logging.getLogger(__name__)

DEFAULT_INDEX_NAME = "cards"


def project_card(card: Card) -> IndexProjection:
    """Reduce a card to its searchable fields."""
    flavor_text = card.printings[0].flavor_text if card.printings else None
    return IndexProjection(
        object_id=card.id,
        name=card.name,
        flavor_text=flavor_text,
        text=card.text,
    )


def project_cards(cards: Sequence[Card]) -> list[IndexProjection]:
    return [project_card(card) for card in cards]


async def rebuild_index(
    client: SearchIndexClient,
    cards: Sequence[Card],
    index_name: str = DEFAULT_INDEX_NAME,
) -> int:
    """
    Replace the whole index with projections of cards.

    Returns:
        Number of objects submitted

    Raises:
        SinkUnavailableError: If the delete or the save fails
    """
    records = [projection.to_record() for projection in project_cards(cards)]
    logger.info("Rebuilding index %s with %d objects", index_name, len(records))

    await client.delete_index(index_name)
    index = client.init_index(index_name)
    saved = await index.save_objects(records)

    logger.info("Index %s rebuilt", index_name)
    return saved
