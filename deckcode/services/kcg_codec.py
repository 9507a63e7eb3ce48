"""
KCG Deck Codes.

The compact format: ``KCG-`` followed by a header symbol and a body drawn
from a 64-symbol alphabet.

=============================================================================
ENCODING PIPELINE
=============================================================================

    card IDs ──► counts ──► 5-digit tuples ──► digit string
                                                   │
                                                   ▼
    KCG-<header><body> ◄── 6-bit symbols ◄── 10-bit chunks of (500 - 3 digits)

Each distinct card becomes the tuple ``c1 c2 c3c4 c5``:

    c1    expansion slot (0-9) in the low or the high expansion table
    c2    type code: A=1, S=2, M=3, D=4
    c3c4  card number, two digits (01-50)
    c5    copies (1-4), plus 5 when the expansion is in the high table

The digit string is cut into 3-digit runs regardless of tuple boundaries.
Each run ``e`` becomes ``500 - e`` as a 10-bit two's complement value. The
bit string is zero-padded to a multiple of 6 and every 6 bits select one
alphabet symbol (high 3 bits = row, low 3 bits = column).

The header symbol sits at row ``7 - padding`` and column
``7 - (number of "000" 3-bit groups mod 8)``.

=============================================================================
FAILURE POLICY
=============================================================================

Strict at the edges, lenient in the middle:

- Bad prefix, empty payload, unknown symbols, and unencodable cards are
  hard failures (DeckCodeError).
- Tuples that make no sense after unpacking are dropped and decoding
  continues.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from deckcode.config import (
    KCG_PREFIX,
    MAX_CARD_COPIES,
    MAX_CARD_NUMBER,
    MIN_CARD_COPIES,
    MIN_CARD_NUMBER,
)
from deckcode.models.failure import DeckCodeError, DeckCodeErrorKind
from deckcode.services.card_id import CARD_ID_PATTERN, CARD_TYPE_CODES

logger = logging.getLogger(__name__)

# =============================================================================
# STATIC TABLES
# =============================================================================

# Row = high 3 bits of a 6-bit group, column = low 3 bits
KCG_CHAR_MATRIX: tuple[tuple[str, ...], ...] = (
    ("A", "I", "Q", "Y", "g", "o", "w", "5"),
    ("B", "J", "R", "Z", "h", "p", "x", "6"),
    ("C", "K", "S", "a", "i", "q", "y", "7"),
    ("D", "L", "T", "b", "j", "r", "z", "8"),
    ("E", "M", "U", "c", "k", "s", "1", "9"),
    ("F", "N", "V", "d", "l", "t", "2", "!"),
    ("G", "O", "W", "e", "m", "u", "3", "?"),
    ("H", "P", "X", "f", "n", "v", "4", "/"),
)

# Copies 1-4 in c5
LOW_EXPANSIONS: tuple[str, ...] = ("ex", "A", "B", "C", "D", "E", "F", "G", "H", "I")

# Copies 6-9 in c5
HIGH_EXPANSIONS: tuple[str, ...] = ("prm", "J", "K", "L", "M", "N", "O", "P", "Q", "R")

# c5 offset marking the high expansion table
HIGH_TABLE_OFFSET = 5

TYPE_DIGITS: dict[str, int] = {code: digit for digit, code in enumerate(CARD_TYPE_CODES, 1)}
DIGIT_TYPES: dict[int, str] = {digit: code for code, digit in TYPE_DIGITS.items()}

# Numeric packing
_RUN_WIDTH = 3
_TUPLE_WIDTH = 5
_CHUNK_BITS = 10
_SYMBOL_BITS = 6
_GROUP_BITS = 3
_NEGATION_BASE = 500
_CHUNK_MODULUS = 1 << _CHUNK_BITS

# Stands in for a leading zero lost when a chunk is rendered back to digits
_PLACEHOLDER = "X"


def build_char_index(matrix: Sequence[Sequence[str]]) -> dict[str, int]:
    """
    Map each alphabet symbol to its 0-63 index (row * 8 + column).

    Raises:
        ValueError: if the matrix does not hold exactly 64 distinct symbols
    """
    flat = "".join("".join(row) for row in matrix)
    index = {char: position for position, char in enumerate(flat)}
    if len(flat) != 64 or len(index) != 64:
        raise ValueError("KCG alphabet must contain 64 unique characters")
    return index


KCG_CHAR_MAP = "".join("".join(row) for row in KCG_CHAR_MATRIX)
KCG_CHAR_INDEX: dict[str, int] = build_char_index(KCG_CHAR_MATRIX)


# =============================================================================
# ENCODING
# =============================================================================


def encode_compact(card_ids: Iterable[str]) -> str:
    """
    Encode card IDs (one per copy) into a KCG deck code.

    Args:
        card_ids: Card IDs; repeats are counted as copies

    Returns:
        Deck code starting with "KCG-"

    Raises:
        DeckCodeError: (generation) for unknown expansions or types, numbers
            outside 1-50, or more than 4 copies of a card
    """
    try:
        counts: dict[str, int] = {}
        for card_id in card_ids:
            counts[card_id] = counts.get(card_id, 0) + 1

        digits = "".join(_encode_tuple(card_id, count) for card_id, count in counts.items())
        bits = _digits_to_bits(digits)

        padding = 0
        while len(bits) % _SYMBOL_BITS != 0:
            bits += "0"
            padding += 1

        groups = [bits[i : i + _GROUP_BITS] for i in range(0, len(bits), _GROUP_BITS)]
        body = "".join(
            KCG_CHAR_MATRIX[int(groups[i], 2)][int(groups[i + 1], 2)]
            for i in range(0, len(groups) - 1, 2)
        )

        row = 7 - padding
        column = 7 - (groups.count("000") % 8)
        header = KCG_CHAR_MATRIX[row][column]
    except DeckCodeError:
        raise
    except (ValueError, KeyError, IndexError) as e:
        raise DeckCodeError(
            DeckCodeErrorKind.GENERATION,
            "Unexpected error while encoding the KCG deck code",
        ) from e

    return f"{KCG_PREFIX}{header}{body}"


def _encode_tuple(card_id: str, count: int) -> str:
    """Render one distinct card and its copy count as a 5-digit tuple."""
    match = CARD_ID_PATTERN.fullmatch(card_id)
    if match is None:
        raise DeckCodeError(
            DeckCodeErrorKind.GENERATION,
            f"Invalid card ID format: {card_id}",
            invalid_id=card_id,
        )
    expansion, type_code, number = match.groups()

    if expansion in LOW_EXPANSIONS:
        c1 = LOW_EXPANSIONS.index(expansion)
        high_table = False
    elif expansion in HIGH_EXPANSIONS:
        c1 = HIGH_EXPANSIONS.index(expansion)
        high_table = True
    else:
        raise DeckCodeError(
            DeckCodeErrorKind.GENERATION,
            f"Unknown expansion: {expansion}",
            invalid_id=card_id,
        )

    c2 = TYPE_DIGITS.get(type_code)
    if c2 is None:
        raise DeckCodeError(
            DeckCodeErrorKind.GENERATION,
            f"Unknown card type: {type_code}",
            invalid_id=card_id,
        )

    card_number = int(number)
    if not MIN_CARD_NUMBER <= card_number <= MAX_CARD_NUMBER:
        raise DeckCodeError(
            DeckCodeErrorKind.GENERATION,
            f"Card number out of range ({MIN_CARD_NUMBER}..{MAX_CARD_NUMBER}): {card_id}",
            invalid_id=card_id,
        )

    if not MIN_CARD_COPIES <= count <= MAX_CARD_COPIES:
        raise DeckCodeError(
            DeckCodeErrorKind.GENERATION,
            f"Card count out of range ({MIN_CARD_COPIES}..{MAX_CARD_COPIES}): "
            f"{count} ({card_id})",
            invalid_id=card_id,
        )

    c5 = count + HIGH_TABLE_OFFSET if high_table else count
    return f"{c1}{c2}{card_number:02d}{c5}"


def _digits_to_bits(digits: str) -> str:
    """Negate 3-digit runs around 500 and render each as 10 bits."""
    chunks: list[str] = []
    for i in range(0, len(digits), _RUN_WIDTH):
        value = _NEGATION_BASE - int(digits[i : i + _RUN_WIDTH])
        if value < 0:
            value += _CHUNK_MODULUS
        chunks.append(format(value, f"0{_CHUNK_BITS}b"))
    return "".join(chunks)


# =============================================================================
# DECODING
# =============================================================================


def decode_compact(code: str) -> list[str]:
    """
    Decode a KCG deck code into card IDs, one entry per copy.

    Tuples that do not describe a card are skipped silently.

    Args:
        code: Untrusted deck code

    Returns:
        Card IDs in tuple order, each repeated by its copy count

    Raises:
        DeckCodeError: (validation) for a missing prefix, empty payload, or
            characters outside the alphabet
    """
    if not code or not code.startswith(KCG_PREFIX):
        raise DeckCodeError(
            DeckCodeErrorKind.VALIDATION,
            f"Deck code must start with '{KCG_PREFIX}'",
        )

    payload = code[len(KCG_PREFIX) :]
    if not payload:
        raise DeckCodeError(DeckCodeErrorKind.VALIDATION, "Deck code payload is empty")

    for char in payload:
        if char not in KCG_CHAR_INDEX:
            raise DeckCodeError(
                DeckCodeErrorKind.VALIDATION,
                f"Deck code contains an invalid character: {char}",
            )

    try:
        bits = _symbols_to_bits(payload[1:])

        strip = _padding_from_header(payload[0])
        if strip:
            bits = bits[:-strip] if len(bits) >= strip else ""

        digits = _align_to_tuples(_bits_to_digits(bits))

        card_ids: list[str] = []
        for i in range(0, len(digits), _TUPLE_WIDTH):
            decoded = _decode_tuple(digits[i : i + _TUPLE_WIDTH])
            if decoded is None:
                continue
            card_id, copies = decoded
            card_ids.extend([card_id] * copies)
    except (ValueError, KeyError, IndexError) as e:
        raise DeckCodeError(
            DeckCodeErrorKind.DECODE,
            "Unexpected error while decoding the KCG deck code",
        ) from e

    return card_ids


def _padding_from_header(header: str) -> int:
    """Number of padding bits to drop from the end of the body."""
    quotient, remainder = divmod(KCG_CHAR_INDEX[header] + 1, 8)
    if remainder == 0:
        return 0
    return 8 - (quotient + 1)


def _symbols_to_bits(symbols: str) -> str:
    return "".join(format(KCG_CHAR_INDEX[char], f"0{_SYMBOL_BITS}b") for char in symbols)


def _bits_to_digits(bits: str) -> str:
    """
    Turn 10-bit chunks back into 3-digit runs.

    Short values keep their width with placeholders ("XX7", "X42"). A
    trailing fragment under 10 bits is ignored.
    """
    runs: list[str] = []
    for i in range(0, len(bits) - _CHUNK_BITS + 1, _CHUNK_BITS):
        chunk = bits[i : i + _CHUNK_BITS]
        value = int(chunk, 2)
        if chunk[0] == "1":
            value -= _CHUNK_MODULUS

        n = _NEGATION_BASE - value
        if 0 <= n < 10:
            runs.append(f"{_PLACEHOLDER * 2}{n}")
        elif 10 <= n < 100:
            runs.append(f"{_PLACEHOLDER}{n}")
        else:
            runs.append(str(n))
    return "".join(runs)


def _align_to_tuples(digits: str) -> str:
    """
    Trim the digit string to a multiple of 5 and fill placeholders with 0.

    Placeholders are removed first, scanning from the end. Real digits are
    cut from the end only when too few placeholders remain.
    """
    excess = len(digits) % _TUPLE_WIDTH
    if excess:
        chars = list(digits)
        removed = 0
        i = len(chars) - 1
        while i >= 0 and removed < excess:
            if chars[i] == _PLACEHOLDER:
                del chars[i]
                removed += 1
            i -= 1

        remaining = excess - removed
        if remaining:
            del chars[-remaining:]
        digits = "".join(chars)

    return digits.replace(_PLACEHOLDER, "0")


def _decode_tuple(window: str) -> tuple[str, int] | None:
    """Map a 5-digit tuple back to (card ID, copies), or None to skip it."""
    if len(window) != _TUPLE_WIDTH or not window.isdigit():
        logger.debug("Skipping non-numeric KCG tuple: %r", window)
        return None

    c1, c2, c3, c4, c5 = (int(char) for char in window)

    if MIN_CARD_COPIES <= c5 <= MAX_CARD_COPIES:
        table = LOW_EXPANSIONS
        copies = c5
    elif MIN_CARD_COPIES + HIGH_TABLE_OFFSET <= c5 <= MAX_CARD_COPIES + HIGH_TABLE_OFFSET:
        table = HIGH_EXPANSIONS
        copies = c5 - HIGH_TABLE_OFFSET
    else:
        logger.debug("Skipping KCG tuple with copy digit %d: %s", c5, window)
        return None

    if c1 >= len(table):
        logger.debug("Skipping KCG tuple with expansion slot %d: %s", c1, window)
        return None

    type_code = DIGIT_TYPES.get(c2)
    if type_code is None:
        logger.debug("Skipping KCG tuple with type digit %d: %s", c2, window)
        return None

    card_number = c3 * 10 + c4
    if not MIN_CARD_NUMBER <= card_number <= MAX_CARD_NUMBER:
        logger.debug("Skipping KCG tuple with card number %d: %s", card_number, window)
        return None

    return f"{table[c1]}{type_code}-{card_number}", copies
