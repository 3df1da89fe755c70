"""
Static card-set archive adapter.

The archive is one JSON document with a flat "sets" collection and a
"cards" collection. Each set names its parent block inline.

Zero-cost convention: cards without a cost (or with cost 0) carry a typed
null, unlike the NetrunnerDB export which uses the string "0".
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from cardsync.models.card import IntermediateRecord
from cardsync.models.release import Release, ReleaseCatalog, ReleaseGroup
from cardsync.parsers.netrunnerdb import UNKNOWN_ARTIST


class ArchiveSet(BaseModel):
    model_config = ConfigDict(extra="ignore")

    code: str
    name: str
    block: str | None = None


class ArchiveCard(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: str
    name: str
    set_code: str = Field(alias="set")
    type: str
    faction: str | None = None
    cost: int | None = None
    subtypes: str | None = None
    text: str | None = None
    flavor: str | None = None
    artist: str | None = None
    image: str | None = None
    deck_minimum: int | None = None
    influence: int | None = None


class CardSetArchive(BaseModel):
    model_config = ConfigDict(extra="ignore")

    sets: list[ArchiveSet] = Field(default_factory=list)
    cards: list[ArchiveCard] = Field(default_factory=list)


def parse_archive(raw: dict[str, Any]) -> CardSetArchive:
    """Validate a raw archive document."""
    return CardSetArchive.model_validate(raw)


def format_cost(cost: int | None) -> str | None:
    """Nonzero costs get the credit suffix; zero or missing costs are None."""
    if cost:
        return f"{cost}[credit]"
    return None


def build_release_catalog(sets: list[ArchiveSet]) -> ReleaseCatalog:
    """Build a catalog from the flat sets list, using block names as group codes."""
    releases = {s.code: Release(code=s.code, name=s.name, group_code=s.block) for s in sets}
    groups = {s.block: ReleaseGroup(code=s.block, name=s.block) for s in sets if s.block}
    return ReleaseCatalog(releases=releases, groups=groups)


def adapt_archive(archive: CardSetArchive) -> list[IntermediateRecord]:
    """
    Convert a card-set archive into IntermediateRecords.

    Raises:
        MissingReferenceError: If a card's set code is not in the archive
    """
    catalog = build_release_catalog(archive.sets)
    records: list[IntermediateRecord] = []

    for card in archive.cards:
        printed_in = catalog.printed_in(card.set_code, referenced_by=f"card {card.id}")
        records.append(
            IntermediateRecord(
                source_id=card.id,
                name=card.name,
                faction=card.faction,
                cost=format_cost(card.cost),
                raw_type=card.type,
                keywords_raw=card.subtypes or None,
                text=card.text or None,
                flavor_text=card.flavor or None,
                artist=card.artist or UNKNOWN_ARTIST,
                image=card.image or None,
                release_code=card.set_code,
                printed_in=printed_in,
                deck_minimum=card.deck_minimum,
                influence_limit=card.influence,
            )
        )

    return records
