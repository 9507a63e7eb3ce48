"""
Deck code generation and import.

Ties the two codecs to a deck: generates both codes for a list of counted
entries, and imports a pasted code of either format against a catalog.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from enum import Enum

from deckcode.config import KCG_PREFIX, SLASH_SEPARATOR
from deckcode.models.card import CatalogCard
from deckcode.models.deck import CountedEntry, DeckDecodeResult
from deckcode.models.failure import DeckCodeError, DeckCodeErrorKind
from deckcode.services.deck_aggregation import expand_entries, to_counted_entries
from deckcode.services.kcg_codec import decode_compact, encode_compact
from deckcode.services.slash_codec import decode_delimited, encode_delimited

logger = logging.getLogger(__name__)


class DeckCodeFormat(str, Enum):
    """Deck code formats recognized on import."""

    KCG = "kcg"
    SLASH = "slash"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class GeneratedDeckCodes:
    """
    Both deck codes for one deck.

    ``kcg`` is None when the deck cannot be expressed in the KCG format;
    ``kcg_error`` then says why. The slash code is always produced.
    """

    slash: str
    kcg: str | None
    kcg_error: str | None = None


@dataclass(frozen=True)
class DeckImportResult:
    """Outcome of importing a deck code."""

    format: DeckCodeFormat
    resolved: list[CountedEntry] = field(default_factory=list)
    unresolved_ids: list[str] = field(default_factory=list)
    warning: str | None = None


def detect_deck_code_format(code: str) -> DeckCodeFormat:
    """Guess the format of a pasted deck code."""
    stripped = code.strip()
    if stripped.startswith(KCG_PREFIX):
        return DeckCodeFormat.KCG
    if SLASH_SEPARATOR in stripped:
        return DeckCodeFormat.SLASH
    return DeckCodeFormat.UNKNOWN


def generate_deck_codes(entries: Sequence[CountedEntry]) -> GeneratedDeckCodes:
    """
    Generate the slash and KCG codes for a deck.

    Args:
        entries: Deck contents in display order

    Returns:
        GeneratedDeckCodes; empty strings for an empty deck

    Raises:
        DeckCodeError: (generation) if the slash code cannot be built
    """
    return generate_codes_for_ids(expand_entries(entries))


def generate_codes_for_ids(card_ids: Sequence[str]) -> GeneratedDeckCodes:
    """
    Generate the slash and KCG codes for card IDs, one per copy.

    Raises:
        DeckCodeError: (generation) if the slash code cannot be built
    """
    if not card_ids:
        return GeneratedDeckCodes(slash="", kcg="")

    slash = encode_delimited(card_ids)

    try:
        kcg = encode_compact(card_ids)
    except DeckCodeError as e:
        message = f"Failed to generate the KCG deck code: {e.message}"
        logger.error("%s", message)
        return GeneratedDeckCodes(slash=slash, kcg=None, kcg_error=message)

    return GeneratedDeckCodes(slash=slash, kcg=kcg)


def import_deck_code(code: str, catalog: Iterable[CatalogCard]) -> DeckImportResult:
    """
    Import a deck code of either format.

    Args:
        code: Pasted deck code
        catalog: Known cards

    Returns:
        DeckImportResult with at least one resolved entry. ``warning`` lists
        card IDs missing from the catalog, if any.

    Raises:
        DeckCodeError: (validation) for empty or unrecognized codes,
            (decode) when the code is unreadable or no card resolves
    """
    stripped = code.strip()
    if not stripped:
        raise DeckCodeError(DeckCodeErrorKind.VALIDATION, "Deck code is empty")

    deck_format = detect_deck_code_format(stripped)
    cards = list(catalog)

    if deck_format is DeckCodeFormat.KCG:
        result = _import_kcg(stripped, cards)
        label = "KCG"
    elif deck_format is DeckCodeFormat.SLASH:
        result = _import_slash(stripped, cards)
        label = "slash-delimited"
    else:
        raise DeckCodeError(
            DeckCodeErrorKind.VALIDATION,
            "Unsupported deck code format. Use a slash-delimited code "
            f"or a KCG code (starting with '{KCG_PREFIX}').",
        )

    if not result.resolved:
        raise DeckCodeError(
            DeckCodeErrorKind.DECODE,
            _no_valid_cards_message(result.unresolved_ids),
            missing_ids=result.unresolved_ids,
        )

    warning = None
    if result.unresolved_ids:
        warning = (
            f"Imported {label} deck ({len(result.resolved)} distinct cards). "
            f"Missing card IDs: {', '.join(result.unresolved_ids)}"
        )

    return DeckImportResult(
        format=deck_format,
        resolved=result.resolved,
        unresolved_ids=result.unresolved_ids,
        warning=warning,
    )


def _import_kcg(code: str, catalog: list[CatalogCard]) -> DeckDecodeResult:
    try:
        card_ids = decode_compact(code)
    except DeckCodeError as e:
        raise DeckCodeError(DeckCodeErrorKind.DECODE, e.message) from e

    if not card_ids:
        raise DeckCodeError(
            DeckCodeErrorKind.DECODE,
            "Could not read any cards from the deck code.",
        )

    return to_counted_entries(card_ids, catalog)


def _import_slash(code: str, catalog: list[CatalogCard]) -> DeckDecodeResult:
    try:
        return decode_delimited(code, catalog)
    except DeckCodeError as e:
        raise DeckCodeError(DeckCodeErrorKind.DECODE, e.message) from e


def _no_valid_cards_message(missing: Sequence[str]) -> str:
    message = "No valid cards were found. Check that the card IDs are correct."
    if missing:
        message += f"\nMissing card IDs: {', '.join(missing)}"
    return message
