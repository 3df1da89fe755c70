from cardsync.services.batch_publisher import (
    DEFAULT_MAX_BATCH_SIZE,
    ChunkResult,
    PublishReport,
    partition,
    publish_cards,
    validate_card_ids,
)
from cardsync.services.index_projector import project_card, project_cards, rebuild_index
from cardsync.services.merge_engine import merge_records
from cardsync.services.reference_data import fetch_release_catalog, load_feed

__all__ = [
    "ChunkResult",
    "DEFAULT_MAX_BATCH_SIZE",
    "PublishReport",
    "fetch_release_catalog",
    "load_feed",
    "merge_records",
    "partition",
    "project_card",
    "project_cards",
    "publish_cards",
    "rebuild_index",
    "validate_card_ids",
]
