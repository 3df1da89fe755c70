"""
NetrunnerDB API export adapter.

Converts the NetrunnerDB card export into IntermediateRecords, resolving
each card's pack (and the pack's cycle) for the printed-in label.

API docs: https://netrunnerdb.com/api/doc
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from cardsync.models.card import IntermediateRecord
from cardsync.models.release import Release, ReleaseCatalog, ReleaseGroup

DEFAULT_IMAGE_TEMPLATE = "https://netrunnerdb.com/card_image/{code}.png"
UNKNOWN_ARTIST = "Unknown"


class NetrunnerCard(BaseModel):
    """Card fields we read from a NetrunnerDB export."""

    model_config = ConfigDict(extra="ignore")

    code: str
    title: str
    pack_code: str
    type_code: str
    faction_code: str | None = None
    cost: int | None = None
    keywords: str | None = None
    text: str | None = None
    flavor: str | None = None
    illustrator: str | None = None
    image_url: str | None = None
    minimum_deck_size: int | None = None
    influence_limit: int | None = None


class NetrunnerPack(BaseModel):
    model_config = ConfigDict(extra="ignore")

    code: str
    name: str
    cycle_code: str | None = None


class NetrunnerCycle(BaseModel):
    model_config = ConfigDict(extra="ignore")

    code: str
    name: str


class NetrunnerFeed(BaseModel):
    """A full card export: {"data": [...], "imageUrlTemplate": "..."}."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    data: list[NetrunnerCard] = Field(default_factory=list)
    image_url_template: str | None = Field(default=None, alias="imageUrlTemplate")


def parse_feed(raw: dict[str, Any]) -> NetrunnerFeed:
    """Validate a raw export document."""
    return NetrunnerFeed.model_validate(raw)


def format_cost(cost: int | None) -> str:
    """
    Format a cost for display.

    Nonzero costs get the credit suffix; zero or missing costs are "0".
    """
    if cost:
        return f"{cost}[credit]"
    return "0"


def build_release_catalog(
    packs: list[NetrunnerPack], cycles: list[NetrunnerCycle]
) -> ReleaseCatalog:
    """Build a catalog with packs as releases and cycles as release groups."""
    return ReleaseCatalog(
        releases={
            p.code: Release(code=p.code, name=p.name, group_code=p.cycle_code) for p in packs
        },
        groups={c.code: ReleaseGroup(code=c.code, name=c.name) for c in cycles},
    )


def _image_for(card: NetrunnerCard, template: str) -> str:
    if card.image_url:
        return card.image_url
    return template.replace("{code}", card.code)


def adapt_cards(
    feed: NetrunnerFeed,
    catalog: ReleaseCatalog,
    image_template: str | None = None,
) -> list[IntermediateRecord]:
    """
    Convert a NetrunnerDB export into IntermediateRecords.

    Args:
        feed: Validated export document
        catalog: Packs and cycles to resolve release labels against
        image_template: Image URL template that overrides the feed's own.
            Without either, DEFAULT_IMAGE_TEMPLATE is used.

    Returns:
        One record per raw card, in feed order

    Raises:
        MissingReferenceError: If any pack or cycle code cannot be resolved
    """
    template = image_template or feed.image_url_template or DEFAULT_IMAGE_TEMPLATE
    records: list[IntermediateRecord] = []

    for card in feed.data:
        printed_in = catalog.printed_in(card.pack_code, referenced_by=f"card {card.code}")
        records.append(
            IntermediateRecord(
                source_id=card.code,
                name=card.title,
                faction=card.faction_code,
                cost=format_cost(card.cost),
                raw_type=card.type_code,
                keywords_raw=card.keywords or None,
                text=card.text or None,
                flavor_text=card.flavor or None,
                artist=card.illustrator or UNKNOWN_ARTIST,
                image=_image_for(card, template),
                release_code=card.pack_code,
                printed_in=printed_in,
                deck_minimum=card.minimum_deck_size,
                influence_limit=card.influence_limit,
            )
        )

    return records
