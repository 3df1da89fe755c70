"""
Card Models.

IntermediateRecord is one raw printing after source normalization.
Card is the canonical, deduplicated entity published downstream.

INVARIANTS:
- Exactly one Card exists per distinct name in an ingestion run
- A merged Card always has at least one Printing
- All models are frozen (immutable after construction)
"""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class IntermediateRecord:
    """
    One printing of a card, normalized from a source-specific record.

    Transient: produced by a source adapter and consumed by the merge engine.

    Attributes:
        source_id: The source's identifier for this printing
        name: Card name, the identity key for merging
        faction: Faction (or set family) code
        cost: Cost already formatted by the adapter's zero-cost convention
        raw_type: Type code as it appears in the source
        keywords_raw: Subtype string joined with " - ", or None
        text: Rules text, or None
        flavor_text: Flavor text of this printing, or None
        artist: Illustrator credit
        image: Image URL, or None
        release_code: Code of the release this printing appeared in
        printed_in: Human-readable release label
        deck_minimum: Minimum deck size (identities only)
        influence_limit: Influence limit (identities only)
    """

    source_id: str
    name: str
    faction: str | None
    cost: str | None
    raw_type: str
    keywords_raw: str | None
    text: str | None
    flavor_text: str | None
    artist: str
    image: str | None
    release_code: str
    printed_in: str
    deck_minimum: int | None = None
    influence_limit: int | None = None


@dataclass(frozen=True, slots=True)
class Printing:
    """One historical publication of a card."""

    artist: str
    flavor_text: str | None
    image: str | None
    printed_in: str

    def to_document(self) -> dict[str, Any]:
        return {
            "artist": self.artist,
            "flavorText": self.flavor_text,
            "image": self.image,
            "printedIn": self.printed_in,
        }


@dataclass(frozen=True, slots=True)
class ExtraAttribute:
    """A named display attribute shown for identity cards."""

    name: str
    value: str


@dataclass(frozen=True, slots=True)
class Card:
    """
    Canonical card merged across all of its printings.

    Attributes:
        id: Source identifier of the first-seen printing
        name: Card name (case-sensitive identity key)
        faction: Faction code
        cost: Formatted cost, or the source's zero value
        types: Display-cased type names
        subtypes: Subtype names, empty if none declared
        text: Rules text, or None
        search_id: Lowercase, whitespace-free form of name
        printings: Printings in first-encountered order
        extra_attributes: Identity attributes, empty for other cards
    """

    id: str
    name: str
    faction: str | None
    cost: str | None
    types: tuple[str, ...]
    subtypes: tuple[str, ...]
    text: str | None
    search_id: str
    printings: tuple[Printing, ...]
    extra_attributes: tuple[ExtraAttribute, ...] = ()

    def to_document(self) -> dict[str, Any]:
        """Render the payload stored in the document store."""
        document: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "faction": self.faction,
            "cost": self.cost,
            "types": list(self.types),
            "subtypes": list(self.subtypes),
            "text": self.text,
            "searchId": self.search_id,
            "printings": [printing.to_document() for printing in self.printings],
        }
        if self.extra_attributes:
            document["extraAttributes"] = [
                {"name": attr.name, "value": attr.value} for attr in self.extra_attributes
            ]
        return document


@dataclass(frozen=True, slots=True)
class IndexProjection:
    """Reduced, searchable view of a Card. Re-derivable at any time."""

    object_id: str
    name: str
    flavor_text: str | None
    text: str | None

    def to_record(self) -> dict[str, Any]:
        # Search index expects "objectID" spelled exactly like this
        return {
            "objectID": self.object_id,
            "name": self.name,
            "flavorText": self.flavor_text,
            "text": self.text,
        }
