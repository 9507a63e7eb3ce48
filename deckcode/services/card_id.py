"""
Card Identifier Grammar.

A card identifier looks like ``<expansion><type>-<number>``:

    exA-1    expansion "ex",  type A, number 1
    JS-12    expansion "J",   type S, number 12
    prmD-9   expansion "prm", type D, number 9

The expansion is a single uppercase letter or one of the literal tokens
``ex`` / ``prm``. The type is one of A, S, M, D. The number is a decimal
literal.

This module checks SHAPE ONLY. Whether a card exists is the catalog's
concern, not the grammar's.
"""

from __future__ import annotations

import re
from typing import NewType

from deckcode.models.failure import DeckCodeError, DeckCodeErrorKind

CardIdentifier = NewType("CardIdentifier", str)

# Groups: (expansion, type_code, number); ASCII digits only, use with fullmatch
CARD_ID_PATTERN = re.compile(r"([A-Z]|ex|prm)(A|S|M|D)-([0-9]+)")

# Type codes in their fixed order (A, S, M, D)
CARD_TYPE_CODES: tuple[str, ...] = ("A", "S", "M", "D")


def parse_card_identifier(raw: str) -> CardIdentifier:
    """
    Validate a raw token as a card identifier.

    Surrounding whitespace is trimmed; no other normalization happens.

    Args:
        raw: Untrusted token

    Returns:
        The trimmed identifier

    Raises:
        DeckCodeError: (validation) if the token is empty or malformed
    """
    candidate = raw.strip()
    if not candidate:
        raise DeckCodeError(DeckCodeErrorKind.VALIDATION, "Card ID is empty")

    if CARD_ID_PATTERN.fullmatch(candidate) is None:
        raise DeckCodeError(
            DeckCodeErrorKind.VALIDATION,
            f"Card ID is malformed: {candidate}",
            invalid_id=candidate,
        )

    return CardIdentifier(candidate)


def is_card_identifier(raw: str) -> bool:
    """Check a token against the grammar without raising."""
    return CARD_ID_PATTERN.fullmatch(raw.strip()) is not None

