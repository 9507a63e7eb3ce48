from deckcode.api.deck_codes import router as deck_codes_router
from deckcode.api.health import router as health_router

__all__ = [
    "deck_codes_router",
    "health_router",
]
