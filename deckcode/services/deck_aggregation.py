"""
Deck Aggregation Adapter.

Turns a flat list of card IDs (one entry per copy) into counted entries
resolved against a catalog. Both deck code formats decode through here, so
the result does not depend on which codec produced the ID list.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from deckcode.models.card import CatalogCard
from deckcode.models.deck import CountedEntry, DeckDecodeResult
from deckcode.services.card_id import is_card_identifier

logger = logging.getLogger(__name__)


def count_card_ids(card_ids: Iterable[str]) -> dict[str, int]:
    """
    Count occurrences of each valid card ID.

    Blank and malformed IDs are dropped. Keys keep first-seen order.
    """
    counts: dict[str, int] = {}

    for raw_id in card_ids:
        card_id = (raw_id or "").strip()
        if not card_id:
            continue

        if not is_card_identifier(card_id):
            logger.debug("Dropping malformed card ID: %r", card_id)
            continue

        counts[card_id] = counts.get(card_id, 0) + 1

    return counts


def to_counted_entries(
    card_ids: Iterable[str],
    catalog: Iterable[CatalogCard],
) -> DeckDecodeResult:
    """
    Aggregate card IDs into catalog entries.

    Args:
        card_ids: One ID per copy, possibly untrimmed or malformed
        catalog: Known cards; looked up by ``id``

    Returns:
        DeckDecodeResult with resolved entries and the IDs the catalog lacks
    """
    cards_by_id = {card.id: card for card in catalog}

    resolved: list[CountedEntry] = []
    unresolved_ids: list[str] = []

    for card_id, count in count_card_ids(card_ids).items():
        card = cards_by_id.get(card_id)
        if card is not None:
            resolved.append(CountedEntry(card=card, count=count))
        else:
            unresolved_ids.append(card_id)

    return DeckDecodeResult(resolved=resolved, unresolved_ids=unresolved_ids)


def expand_entries(entries: Iterable[CountedEntry]) -> list[str]:
    """Expand counted entries into one card ID per copy, in entry order."""
    card_ids: list[str] = []
    for entry in entries:
        card_ids.extend([entry.card.id] * entry.count)
    return card_ids
