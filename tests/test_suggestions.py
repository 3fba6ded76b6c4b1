"""
Tests for missing card suggestions.

INVARIANT: Suggestions never include owned cards.
INVARIANT: Suggestions are color-legal, cheapest first, unknown cost last.
"""

from unittest.mock import AsyncMock

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from inkforge.models.db import CARD_STATUS_PENDING
from inkforge.models.failure import CatalogUnavailableError
from inkforge.services.suggestions import rank_suggestions, suggest_missing_cards


def _card(card_id: str, cost: object = 2, color: str | None = "Ruby", **extra: object) -> dict:
    card = {
        "id": card_id,
        "name": card_id,
        "type": "Character",
        "ink_cost": cost,
        "ink_color": color,
    }
    card.update(extra)
    return card


class TestRankSuggestions:
    def test_excludes_owned(self) -> None:
        """Owned ids are never suggested."""
        cards = [_card("owned"), _card("new")]

        suggestions = rank_suggestions(cards, [], {"owned"}, limit=10)

        assert [s.card_id for s in suggestions] == ["new"]

    def test_color_legal_only(self) -> None:
        """Off-color, dual-color and colorless cards are filtered out."""
        cards = [
            _card("ruby"),
            _card("amber", color="Amber"),
            _card("dual", color="Amber, Ruby"),
            _card("colorless", color=None),
        ]

        suggestions = rank_suggestions(cards, ["Ruby"], set(), limit=10)

        assert [s.card_id for s in suggestions] == ["ruby"]

    def test_sorted_by_cost_unknown_last(self) -> None:
        """Cheapest first; unknown or malformed cost sorts after every real cost."""
        cards = [
            _card("unknown", cost=None),
            _card("five", cost=5),
            _card("junk", cost="?"),
            _card("one", cost="1"),
            _card("three", cost=3),
        ]

        suggestions = rank_suggestions(cards, [], set(), limit=10)

        assert [s.card_id for s in suggestions] == ["one", "three", "five", "unknown", "junk"]

    def test_equal_costs_keep_catalog_order(self) -> None:
        """The cost sort is stable."""
        cards = [_card("z"), _card("a"), _card("m")]

        suggestions = rank_suggestions(cards, [], set(), limit=10)

        assert [s.card_id for s in suggestions] == ["z", "a", "m"]

    def test_limit(self) -> None:
        """At most limit suggestions are returned."""
        cards = [_card(f"c{i}", cost=i) for i in range(10)]

        assert len(rank_suggestions(cards, [], set(), limit=3)) == 3
        assert rank_suggestions(cards, [], set(), limit=0) == []

    def test_suggestion_shape(self) -> None:
        """Suggestions carry quantity 0 and a fixed reason."""
        [suggestion] = rank_suggestions([_card("c", type="Song")], [], set(), limit=1)

        assert suggestion.quantity == 0
        assert suggestion.reason == "Suggested, not in your collection"
        assert suggestion.card_type == "song"
        assert suggestion.ink_color == "Ruby"


class TestSuggestMissingCards:
    async def test_reads_approved_catalog(self, session: AsyncSession, add_card) -> None:
        """Only approved catalog cards are suggested."""
        await add_card("a", ink_cost=4)
        await add_card("b", ink_cost=1)
        await add_card("p", ink_cost=0, status=CARD_STATUS_PENDING)

        suggestions = await suggest_missing_cards(session, ["Ruby"], {"x"})

        assert [s.card_id for s in suggestions] == ["b", "a"]

    async def test_scan_limit_bounds_catalog_read(self, session: AsyncSession, add_card) -> None:
        """Only the first scan_limit approved cards (by id) are considered."""
        await add_card("c1", ink_cost=5)
        await add_card("c2", ink_cost=4)
        await add_card("c3", ink_cost=1)

        suggestions = await suggest_missing_cards(session, [], set(), scan_limit=2)

        assert [s.card_id for s in suggestions] == ["c2", "c1"]

    async def test_catalog_failure(self) -> None:
        """A catalog read error raises CatalogUnavailableError."""
        session = AsyncMock(spec=AsyncSession)
        session.execute.side_effect = OperationalError("SELECT", {}, Exception("down"))

        with pytest.raises(CatalogUnavailableError):
            await suggest_missing_cards(session, ["Ruby"], set())

    async def test_owned_cards_do_not_use_scan_window(
        self, session: AsyncSession, add_card
    ) -> None:
        """Owned cards are excluded before scan_limit applies."""
        await add_card("a1")
        await add_card("a2")
        await add_card("z9")

        suggestions = await suggest_missing_cards(session, ["Ruby"], {"a1", "a2"}, scan_limit=2)

        assert [s.card_id for s in suggestions] == ["z9"]
