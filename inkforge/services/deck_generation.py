"""
Deck generation workflow.

Runs one request end to end:
load owned pool -> color filter -> score and allocate -> suggest.

Suggestions are only fetched when the deck falls short of 60 cards.
"""

import logging
from dataclasses import dataclass, field

from sqlalchemy.ext.asyncio import AsyncSession

from inkforge.filtering.colors import filter_by_colors
from inkforge.models.deck import MissingSuggestion
from inkforge.services.card_pool import build_candidates, load_owned_pool
from inkforge.services.deck_builder import BuiltDeck, DeckBuildRequest, build_deck
from inkforge.services.suggestions import suggest_missing_cards

logger = logging.getLogger(__name__)


@dataclass
class GeneratedDeck:
    """A built deck plus suggestions for cards the player is missing."""

    request: DeckBuildRequest
    deck: BuiltDeck
    suggestions: list[MissingSuggestion] = field(default_factory=list)


async def generate_deck(
    session: AsyncSession, user_id: str, request: DeckBuildRequest
) -> GeneratedDeck:
    """
    Generate a deck for a user from their owned cards.

    Raises:
        CatalogUnavailableError: If the catalog or ownership data is unavailable
    """
    pool = await load_owned_pool(session, user_id)
    candidates = filter_by_colors(build_candidates(pool), request.colors)

    deck = build_deck(request, candidates)

    suggestions: list[MissingSuggestion] = []
    if not deck.is_complete:
        suggestions = await suggest_missing_cards(
            session, request.colors, owned_ids=set(pool.owned)
        )

    logger.info(
        "deck_generated",
        extra={
            "user_id": user_id,
            "archetype": request.archetype,
            "curve": request.curve,
            "colors": request.colors,
            "candidates": len(candidates),
            "total_cards": deck.total_cards,
            "suggestions": len(suggestions),
        },
    )
    return GeneratedDeck(request=request, deck=deck, suggestions=suggestions)
