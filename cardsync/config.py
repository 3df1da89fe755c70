from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env")

    app_name: str = "cardsync"
    debug: bool = False

    database_url: str = "postgresql+asyncpg://localhost:5432/cardsync"

    netrunnerdb_api_url: str = "https://netrunnerdb.com/api/2.0/public"
    # Overrides the feed's imageUrlTemplate when set
    card_image_template: str | None = None

    # Which raw feed to ingest
    source: Literal["netrunnerdb", "archive"] = "netrunnerdb"
    feed_path: str = "data/cards.json"
    archive_path: str = "data/card-sets.json"

    cards_collection: str = "cards"
    search_index_name: str = "cards"

    # Document store batch writes are capped at 500 operations
    max_batch_size: int = 500
    max_concurrent_commits: int = 1

    algolia_app_id: str = ""
    algolia_api_key: str = ""

    # Delete every document in the cards collection before publishing
    purge_before_publish: bool = False
    rebuild_search_index: bool = True


def get_settings() -> Settings:
    """Build settings from the current environment."""
    return Settings()
