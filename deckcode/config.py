from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="DECKCODE_")

    app_name: str = "DeckCode"
    debug: bool = False
    log_level: str = "INFO"

    # Ceiling for slash-delimited deck codes (after trimming)
    max_deck_code_length: int = 1000

    # CSV card catalog served by the HTTP layer. Empty catalog when unset.
    catalog_path: str | None = None


settings = Settings()


# =============================================================================
# DECK CODE FORMAT CONSTANTS
# =============================================================================

# Copies of a single card a deck may hold (also the KCG count range)
MIN_CARD_COPIES = 1
MAX_CARD_COPIES = 4

# Card numbers representable in the two-digit KCG number field
MIN_CARD_NUMBER = 1
MAX_CARD_NUMBER = 50

KCG_PREFIX = "KCG-"
SLASH_SEPARATOR = "/"
