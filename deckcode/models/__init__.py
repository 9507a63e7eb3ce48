from deckcode.models.card import CatalogCard
from deckcode.models.deck import CountedEntry, DeckDecodeResult
from deckcode.models.failure import (
    STANDARD_MESSAGES,
    STANDARD_SUGGESTIONS,
    ApiResponse,
    DeckCodeError,
    DeckCodeErrorKind,
    FailureDetail,
    FailureKind,
    KnownError,
    OutcomeType,
    create_known_failure,
    create_success,
    create_unknown_failure,
    finalize_response,
    is_finalized,
)

__all__ = [
    "ApiResponse",
    "CatalogCard",
    "CountedEntry",
    "DeckCodeError",
    "DeckCodeErrorKind",
    "DeckDecodeResult",
    "FailureDetail",
    "FailureKind",
    "KnownError",
    "OutcomeType",
    "STANDARD_MESSAGES",
    "STANDARD_SUGGESTIONS",
    "create_known_failure",
    "create_success",
    "create_unknown_failure",
    "finalize_response",
    "is_finalized",
]
