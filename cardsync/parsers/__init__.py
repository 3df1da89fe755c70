from cardsync.parsers.card_set_archive import adapt_archive, parse_archive
from cardsync.parsers.netrunnerdb import adapt_cards, build_release_catalog, parse_feed

__all__ = [
    "adapt_archive",
    "adapt_cards",
    "build_release_catalog",
    "parse_archive",
    "parse_feed",
]
