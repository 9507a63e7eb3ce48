"""
Deck code API endpoints.

Generates deck codes from card IDs and imports pasted deck codes against
the configured card catalog.
"""

from functools import lru_cache
from typing import Annotated, Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from deckcode.config import settings
from deckcode.models.card import CatalogCard
from deckcode.models.failure import ApiResponse, create_success
from deckcode.parsers.card_catalog import load_catalog_file
from deckcode.services.deck_import import (
    DeckCodeFormat,
    generate_codes_for_ids,
    import_deck_code,
)

router = APIRouter(prefix="/deck-codes", tags=["deck-codes"])


@lru_cache(maxsize=1)
def get_catalog() -> tuple[CatalogCard, ...]:
    """Load the card catalog once per process. Empty if not configured."""
    if not settings.catalog_path:
        return ()
    return tuple(load_catalog_file(settings.catalog_path))


class EncodeRequest(BaseModel):
    """Request model for generating deck codes."""

    card_ids: list[str] = Field(
        ...,
        description="Card IDs, one entry per copy",
        examples=[["exA-1", "exA-1", "JS-12"]],
    )


class EncodeResponse(BaseModel):
    """Both deck codes for the submitted cards."""

    slash: str
    kcg: str | None = None
    kcg_error: str | None = None
    total_cards: int = 0


class DecodeRequest(BaseModel):
    """Request model for importing a deck code."""

    code: str = Field(
        ...,
        description="Slash-delimited or KCG deck code",
        examples=["exA-1/exA-1/JS-12", "KCG-rDLXC"],
    )


class DecodedCard(BaseModel):
    """One resolved card in an imported deck."""

    id: str
    name: str
    count: int


class DecodeResponse(BaseModel):
    """Response model for an imported deck."""

    format: DeckCodeFormat
    cards: list[DecodedCard] = Field(default_factory=list)
    unresolved_ids: list[str] = Field(default_factory=list)
    warning: str | None = None


@router.post("/encode", response_model=ApiResponse[EncodeResponse])
async def encode_deck(request: EncodeRequest) -> ApiResponse[Any]:
    """
    Generate slash-delimited and KCG codes.

    The KCG code is omitted (with a reason) when the deck cannot be
    expressed in that format.
    """
    codes = generate_codes_for_ids(request.card_ids)
    return create_success(
        EncodeResponse(
            slash=codes.slash,
            kcg=codes.kcg,
            kcg_error=codes.kcg_error,
            total_cards=len(request.card_ids),
        )
    )


@router.post("/decode", response_model=ApiResponse[DecodeResponse])
async def decode_deck(
    request: DecodeRequest,
    catalog: Annotated[tuple[CatalogCard, ...], Depends(get_catalog)],
) -> ApiResponse[Any]:
    """
    Import a deck code against the card catalog.

    Card IDs missing from the catalog are listed in ``unresolved_ids``.
    """
    result = import_deck_code(request.code, catalog)
    return create_success(
        DecodeResponse(
            format=result.format,
            cards=[
                DecodedCard(id=entry.card.id, name=entry.card.name, count=entry.count)
                for entry in result.resolved
            ],
            unresolved_ids=result.unresolved_ids,
            warning=result.warning,
        )
    )
