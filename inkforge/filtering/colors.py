"""
Ink color legality.

A deck may use at most two ink colors. A card is legal only if EVERY one
of its colors is among the requested colors; a two-color card needs both
of its colors requested. Colorless cards are illegal whenever a
restriction is set.

INVARIANT: Color selection problems never raise. Oversized selections
are truncated to the first two distinct colors.
"""

import logging
from collections.abc import Iterable, Sequence

from inkforge.models.card import Candidate, canonical_color

logger = logging.getLogger(__name__)

MAX_DECK_COLORS = 2


def normalize_requested_colors(colors: Iterable[str] | None) -> list[str]:
    """
    Normalize a requested color list.

    Canonicalizes spelling, drops blanks and duplicates, and keeps at most
    the first two distinct colors. Duplicates are dropped before
    truncating, so ["Ruby", "Ruby", "Amber"] keeps both Ruby and Amber.
    """
    normalized: list[str] = []
    for raw in colors or []:
        color = canonical_color(str(raw))
        if color and color not in normalized:
            normalized.append(color)

    if len(normalized) > MAX_DECK_COLORS:
        logger.warning(
            "Truncating color selection %s to %s", normalized, normalized[:MAX_DECK_COLORS]
        )
    return normalized[:MAX_DECK_COLORS]


def is_color_legal(card_colors: Sequence[str], allowed: Sequence[str]) -> bool:
    """
    Check a card's colors against the allowed set.

    Returns True if no restriction is set, or if the card has colors and
    all of them are allowed.
    """
    if not allowed:
        return True
    if not card_colors:
        return False
    return all(color in allowed for color in card_colors)


def filter_by_colors(candidates: Iterable[Candidate], allowed: Sequence[str]) -> list[Candidate]:
    """Keep only color-legal candidates, preserving order."""
    return [c for c in candidates if is_color_legal(c.colors, allowed)]
