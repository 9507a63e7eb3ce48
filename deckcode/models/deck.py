from dataclasses import dataclass, field

from deckcode.models.card import CatalogCard


@dataclass(frozen=True, slots=True)
class CountedEntry:
    """A catalog card together with how many copies the deck holds."""

    card: CatalogCard
    count: int


@dataclass(frozen=True)
class DeckDecodeResult:
    """
    Card IDs resolved against a catalog.

    Attributes:
        resolved: Catalog cards with their counts, in first-seen order
        unresolved_ids: Grammatically valid IDs missing from the catalog,
            deduplicated, in first-seen order
    """

    resolved: list[CountedEntry] = field(default_factory=list)
    unresolved_ids: list[str] = field(default_factory=list)

    def total_cards(self) -> int:
        """Total number of resolved copies."""
        return sum(entry.count for entry in self.resolved)

    def is_partial(self) -> bool:
        """True when some cards resolved and some did not."""
        return bool(self.resolved) and bool(self.unresolved_ids)
