"""
Deck API endpoints.

Generates decks from a user's owned cards.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from inkforge.db.database import get_session
from inkforge.filtering.buckets import Archetype, CurvePreference
from inkforge.models.deck import DeckLine, MissingSuggestion
from inkforge.services.deck_builder import DeckBuildRequest
from inkforge.services.deck_generation import GeneratedDeck, generate_deck

router = APIRouter(prefix="/decks", tags=["decks"])


class GenerateDeckRequest(BaseModel):
    """Request model for deck generation."""

    archetype: Archetype = Field(default="midrange", description="Strategic profile")
    curve: CurvePreference = Field(default="balanced", description="Cost-curve preference")
    colors: list[str] = Field(
        default_factory=list,
        description="Ink colors to restrict the deck to; only the first two are used",
        examples=[["Ruby", "Amethyst"]],
    )


class DeckParamsResponse(BaseModel):
    """The parameters the deck was actually built with."""

    archetype: str
    curve: str
    colors: list[str] = Field(default_factory=list)


class DeckCardResponse(BaseModel):
    """One card line in a generated deck or suggestion list."""

    card_id: str
    name: str
    quantity: int
    cost: int | None = None
    color: str | None = None
    type: str
    reason: str


class DeckMetaResponse(BaseModel):
    """Deck summary statistics."""

    deck_size: int
    total_selected: int
    max_copies: int
    curve_filled: dict[str, int] = Field(default_factory=dict)
    type_filled: dict[str, int] = Field(default_factory=dict)
    inkable_count: int = 0
    inkable_percentage: float = 0.0
    total_lore: int = 0


class GenerateDeckResponse(BaseModel):
    """Response model for deck generation."""

    params: DeckParamsResponse
    deck: list[DeckCardResponse]
    meta: DeckMetaResponse
    missing_suggestions: list[DeckCardResponse] = Field(default_factory=list)


def _line_response(line: DeckLine) -> DeckCardResponse:
    card = line.card
    return DeckCardResponse(
        card_id=card.card_id,
        name=card.name,
        quantity=line.quantity,
        cost=card.cost,
        color=card.ink_color,
        type=card.card_type,
        reason=line.reason,
    )


def _suggestion_response(suggestion: MissingSuggestion) -> DeckCardResponse:
    return DeckCardResponse(
        card_id=suggestion.card_id,
        name=suggestion.name,
        quantity=suggestion.quantity,
        cost=suggestion.cost,
        color=suggestion.ink_color,
        type=suggestion.card_type,
        reason=suggestion.reason,
    )


def _generated_response(generated: GeneratedDeck) -> GenerateDeckResponse:
    deck = generated.deck
    return GenerateDeckResponse(
        params=DeckParamsResponse(
            archetype=generated.request.archetype,
            curve=generated.request.curve,
            colors=generated.request.colors,
        ),
        deck=[_line_response(line) for line in deck.lines],
        meta=DeckMetaResponse(
            deck_size=deck.deck_size,
            total_selected=deck.total_cards,
            max_copies=deck.max_copies,
            curve_filled=deck.curve_filled,
            type_filled=deck.type_filled,
            inkable_count=deck.stats.inkable_count,
            inkable_percentage=deck.stats.inkable_percentage,
            total_lore=deck.stats.total_lore,
        ),
        missing_suggestions=[_suggestion_response(s) for s in generated.suggestions],
    )


@router.post("/{user_id}/generate", response_model=GenerateDeckResponse)
async def generate_user_deck(
    user_id: str,
    request: GenerateDeckRequest,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> GenerateDeckResponse:
    """
    Build a deck from a user's owned cards.

    Returns up to 60 cards. When the collection cannot fill the deck,
    missing_suggestions lists cheap color-legal cards the user does not own.
    More than two colors are silently cut down to the first two.
    """
    build_request = DeckBuildRequest(
        archetype=request.archetype,
        curve=request.curve,
        colors=request.colors,
    )
    generated = await generate_deck(session, user_id, build_request)
    return _generated_response(generated)
