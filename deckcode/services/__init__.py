"""
DeckCode services.

Card ID grammar, the two deck code codecs, and deck aggregation.
"""

from deckcode.services.card_id import (
    CARD_ID_PATTERN,
    CardIdentifier,
    is_card_identifier,
    parse_card_identifier,
)
from deckcode.services.deck_aggregation import (
    count_card_ids,
    expand_entries,
    to_counted_entries,
)
from deckcode.services.deck_import import (
    DeckCodeFormat,
    DeckImportResult,
    GeneratedDeckCodes,
    detect_deck_code_format,
    generate_codes_for_ids,
    generate_deck_codes,
    import_deck_code,
)
from deckcode.services.kcg_codec import (
    KCG_CHAR_INDEX,
    KCG_CHAR_MAP,
    KCG_CHAR_MATRIX,
    decode_compact,
    encode_compact,
)
from deckcode.services.slash_codec import (
    decode_delimited,
    encode_delimited,
    validate_delimited,
)

__all__ = [
    # Card ID grammar
    "CARD_ID_PATTERN",
    "CardIdentifier",
    "is_card_identifier",
    "parse_card_identifier",
    # Aggregation
    "count_card_ids",
    "expand_entries",
    "to_counted_entries",
    # Slash-delimited codec
    "decode_delimited",
    "encode_delimited",
    "validate_delimited",
    # KCG codec
    "KCG_CHAR_INDEX",
    "KCG_CHAR_MAP",
    "KCG_CHAR_MATRIX",
    "decode_compact",
    "encode_compact",
    # Import / export
    "DeckCodeFormat",
    "DeckImportResult",
    "GeneratedDeckCodes",
    "detect_deck_code_format",
    "generate_codes_for_ids",
    "generate_deck_codes",
    "import_deck_code",
]
