"""
Merge engine.

Groups IntermediateRecords by card name into canonical Cards.

MERGE POLICY (first source wins):
- Cards are emitted in the order their name is first seen
- Scalar fields (id, faction, cost, types, text, ...) come from the
  first-seen record; later records that disagree are ignored
- Every record contributes exactly one Printing, appended in feed order
"""

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass, field

from cardsync.models.card import Card, ExtraAttribute, IntermediateRecord, Printing
from cardsync.models.failure import InvalidCardError

logger = logging.getLogger(__name__)

IDENTITY_TYPE = "identity"
IDENTITY_ATTRIBUTE_NAME = "Deck size minimum / Influence"
MISSING_VALUE = "--"

_WHITESPACE = re.compile(r"\s+")


def display_type(raw_type: str) -> str:
    """Upper-case the first character only ("identity" -> "Identity")."""
    return raw_type[:1].upper() + raw_type[1:]


def split_subtypes(keywords: str | None) -> tuple[str, ...]:
    """Split "Barrier - Bioroid" into ("Barrier", "Bioroid"). None gives ()."""
    if not keywords:
        return ()
    return tuple(keywords.split(" - "))


def search_id_for(name: str) -> str:
    """Lowercase name with all whitespace removed."""
    return _WHITESPACE.sub("", name).lower()


def is_identity(record: IntermediateRecord) -> bool:
    return record.raw_type.lower() == IDENTITY_TYPE


def identity_attributes(record: IntermediateRecord) -> tuple[ExtraAttribute, ...]:
    """Build the deck size / influence attribute for an identity card."""
    deck_minimum = MISSING_VALUE if record.deck_minimum is None else str(record.deck_minimum)
    # Influence 0 and missing both render as the placeholder
    influence = str(record.influence_limit) if record.influence_limit else MISSING_VALUE
    return (ExtraAttribute(name=IDENTITY_ATTRIBUTE_NAME, value=f"{deck_minimum} / {influence}"),)


def printing_from(record: IntermediateRecord) -> Printing:
    return Printing(
        artist=record.artist,
        flavor_text=record.flavor_text,
        image=record.image,
        printed_in=record.printed_in,
    )


@dataclass
class _CardDraft:
    """Mutable accumulator used only while a merge pass is running."""

    first: IntermediateRecord
    printings: list[Printing] = field(default_factory=list)

    def freeze(self) -> Card:
        record = self.first
        return Card(
            id=record.source_id,
            name=record.name,
            faction=record.faction,
            cost=record.cost,
            types=(display_type(record.raw_type),),
            subtypes=split_subtypes(record.keywords_raw),
            text=record.text,
            search_id=search_id_for(record.name),
            printings=tuple(self.printings),
            extra_attributes=identity_attributes(record) if is_identity(record) else (),
        )


def merge_records(records: Iterable[IntermediateRecord]) -> list[Card]:
    """
    Merge printings into one Card per distinct name.

    Args:
        records: All IntermediateRecords for one run, in feed order

    Returns:
        Cards in first-seen order

    Raises:
        InvalidCardError: If a record has an empty name
    """
    drafts: dict[str, _CardDraft] = {}
    record_count = 0

    for record in records:
        if not record.name:
            raise InvalidCardError(
                "Record has no card name",
                detail=f"source_id={record.source_id!r}",
            )

        draft = drafts.get(record.name)
        if draft is None:
            draft = _CardDraft(first=record)
            drafts[record.name] = draft
        elif record.text != draft.first.text:
            logger.debug("Ignoring differing text for %s from %s", record.name, record.source_id)

        draft.printings.append(printing_from(record))
        record_count += 1

    cards = [draft.freeze() for draft in drafts.values()]
    logger.info("Merged %d records into %d cards", record_count, len(cards))
    return cards
