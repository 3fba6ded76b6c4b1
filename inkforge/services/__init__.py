"""
InkForge services.

Business logic for loading owned cards, building decks and suggesting
missing cards.
"""

from inkforge.services.card_pool import LoadedPool, build_candidates, load_owned_pool
from inkforge.services.deck_builder import (
    AllocatorState,
    BuiltDeck,
    DeckBuildRequest,
    build_deck,
    summarize_deck,
)
from inkforge.services.deck_generation import GeneratedDeck, generate_deck
from inkforge.services.suggestions import rank_suggestions, suggest_missing_cards

__all__ = [
    # Owned pool loading
    "LoadedPool",
    "build_candidates",
    "load_owned_pool",
    # Allocation
    "AllocatorState",
    "BuiltDeck",
    "DeckBuildRequest",
    "build_deck",
    "summarize_deck",
    # Suggestions
    "rank_suggestions",
    "suggest_missing_cards",
    # End-to-end generation
    "GeneratedDeck",
    "generate_deck",
]
