"""
Missing card suggestions.

When the owned pool cannot fill a deck, suggests color-legal catalog cards
the player does not own, cheapest first.

Suggestions are advisory: they carry quantity 0 and never enter a deck.
"""

import logging
from collections.abc import Collection, Iterable, Sequence
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from inkforge.config import settings
from inkforge.db import list_approved_cards
from inkforge.filtering.colors import is_color_legal
from inkforge.models.card import normalize_card_type, parse_ink_colors, parse_optional_int
from inkforge.models.deck import MissingSuggestion
from inkforge.models.failure import CatalogUnavailableError

logger = logging.getLogger(__name__)

# Sort key for cards with unknown cost, after every real cost
UNKNOWN_COST_SORT = 99


def rank_suggestions(
    cards: Iterable[dict[str, Any]],
    allowed_colors: Sequence[str],
    owned_ids: Collection[str],
    limit: int,
) -> list[MissingSuggestion]:
    """
    Pick suggestions from catalog card dicts.

    Keeps color-legal cards not in owned_ids, ordered by cost ascending
    (unknown cost last). Cards of equal cost keep their catalog order.
    """
    eligible: list[MissingSuggestion] = []
    for card in cards:
        card_id = card.get("id")
        if not card_id or card_id in owned_ids:
            continue
        if not is_color_legal(parse_ink_colors(card.get("ink_color")), allowed_colors):
            continue

        eligible.append(
            MissingSuggestion(
                card_id=str(card_id),
                name=str(card.get("name") or card_id),
                cost=parse_optional_int(card.get("ink_cost")),
                ink_color=card.get("ink_color"),
                card_type=normalize_card_type(card.get("type")),
            )
        )

    eligible.sort(key=lambda s: s.cost if s.cost is not None else UNKNOWN_COST_SORT)
    return eligible[: max(0, limit)]


async def suggest_missing_cards(
    session: AsyncSession,
    allowed_colors: Sequence[str],
    owned_ids: Collection[str],
    limit: int | None = None,
    scan_limit: int | None = None,
) -> list[MissingSuggestion]:
    """
    Suggest unowned cards that would fit the deck's colors.

    Scans at most scan_limit approved catalog cards the player does not
    own.

    Raises:
        CatalogUnavailableError: If the catalog read fails
    """
    if limit is None:
        limit = settings.suggestion_limit
    if scan_limit is None:
        scan_limit = settings.suggestion_scan_limit

    try:
        cards = await list_approved_cards(session, limit=scan_limit, exclude_ids=owned_ids)
    except SQLAlchemyError as e:
        logger.error("suggestion_scan_failed", extra={"error_type": type(e).__name__})
        raise CatalogUnavailableError(detail=str(e)) from e

    suggestions = rank_suggestions(cards, allowed_colors, owned_ids, limit)
    logger.debug(
        "missing_cards_suggested",
        extra={"scanned": len(cards), "suggested": len(suggestions)},
    )
    return suggestions
