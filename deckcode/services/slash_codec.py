"""
Slash-Delimited Deck Codes.

The human-readable format: one card ID per copy, joined with "/".

    exA-1/exA-1/JS-12/prmD-9

Structural problems with the whole string (empty, too long, stray or doubled
separators) are hard failures. A single malformed ID among valid ones is
dropped so the rest of the deck still imports.
"""

from __future__ import annotations

from collections.abc import Iterable

from deckcode.config import SLASH_SEPARATOR, settings
from deckcode.models.card import CatalogCard
from deckcode.models.deck import DeckDecodeResult
from deckcode.models.failure import DeckCodeError, DeckCodeErrorKind
from deckcode.services.card_id import is_card_identifier
from deckcode.services.deck_aggregation import to_counted_entries


def encode_delimited(card_ids: Iterable[str]) -> str:
    """
    Join card IDs into a slash-delimited deck code.

    Order and repeats are kept exactly as given.

    Raises:
        DeckCodeError: (generation) if an ID does not match the card grammar
    """
    tokens: list[str] = []
    for card_id in card_ids:
        if not is_card_identifier(card_id):
            raise DeckCodeError(
                DeckCodeErrorKind.GENERATION,
                f"Invalid card ID format: {card_id}",
                invalid_id=card_id,
            )
        tokens.append(card_id.strip())

    return SLASH_SEPARATOR.join(tokens)


def validate_delimited(code: str, max_length: int | None = None) -> str:
    """
    Check the structure of a slash-delimited deck code.

    Individual tokens are NOT checked here.

    Returns:
        The trimmed code

    Raises:
        DeckCodeError: (validation) naming the first structural problem
    """
    limit = settings.max_deck_code_length if max_length is None else max_length
    trimmed = code.strip()

    if not trimmed:
        raise DeckCodeError(DeckCodeErrorKind.VALIDATION, "Deck code is empty")

    if len(trimmed) > limit:
        raise DeckCodeError(
            DeckCodeErrorKind.VALIDATION,
            f"Deck code is too long (maximum {limit} characters)",
        )

    if trimmed.startswith(SLASH_SEPARATOR) or trimmed.endswith(SLASH_SEPARATOR):
        raise DeckCodeError(
            DeckCodeErrorKind.VALIDATION,
            "Deck code must not start or end with '/'",
        )

    if SLASH_SEPARATOR * 2 in trimmed:
        raise DeckCodeError(
            DeckCodeErrorKind.VALIDATION,
            "Deck code must not contain '//'",
        )

    return trimmed


def decode_delimited(
    code: str,
    catalog: Iterable[CatalogCard],
    max_length: int | None = None,
) -> DeckDecodeResult:
    """
    Decode a slash-delimited deck code against a catalog.

    Args:
        code: Untrusted deck code
        catalog: Known cards
        max_length: Overrides settings.max_deck_code_length

    Returns:
        DeckDecodeResult; malformed tokens appear in neither list

    Raises:
        DeckCodeError: (validation) on structural problems
    """
    trimmed = validate_delimited(code, max_length=max_length)
    return to_counted_entries(trimmed.split(SLASH_SEPARATOR), catalog)
