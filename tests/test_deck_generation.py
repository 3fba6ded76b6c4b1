"""
Tests for the end-to-end deck generation workflow.

INVARIANT: Suggestions are only fetched when the deck is short of 60.
"""

import logging

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from inkforge.db import add_collection_entry
from inkforge.services import deck_generation
from inkforge.services.deck_builder import DeckBuildRequest
from inkforge.services.deck_generation import generate_deck


async def _own(session: AsyncSession, add_card, card_id: str, quantity: int = 4, **fields) -> None:
    await add_card(card_id, **fields)
    await add_collection_entry(session, "u1", card_id, quantity=quantity)


class TestGenerateDeck:
    async def test_full_deck_has_no_suggestions(
        self, session: AsyncSession, add_card, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """A complete deck skips the suggestion scan."""
        for i in range(20):
            await _own(session, add_card, f"ruby-{i:02d}", ink_cost=1 + i % 3, lore=1)
        await add_card("unowned-ruby", ink_cost=1)

        async def fail_if_called(*args, **kwargs):
            raise AssertionError("suggestions should not be fetched for a full deck")

        monkeypatch.setattr(deck_generation, "suggest_missing_cards", fail_if_called)

        generated = await generate_deck(
            session, "u1", DeckBuildRequest(archetype="aggro", curve="low", colors=["Ruby"])
        )

        assert generated.deck.total_cards == 60
        assert generated.suggestions == []

    async def test_short_deck_suggests_unowned_legal_cards(
        self, session: AsyncSession, add_card
    ) -> None:
        """A 40-card pool yields a 40-card deck plus color-legal unowned suggestions."""
        for i in range(10):
            await _own(session, add_card, f"ruby-{i:02d}", ink_cost=1 + i % 5)
        await add_card("new-ruby", ink_cost=2)
        await add_card("new-amber", ink_cost=1, ink_color="Amber")
        await add_card("new-dual", ink_cost=1, ink_color="Amber, Ruby")

        generated = await generate_deck(session, "u1", DeckBuildRequest(colors=["Ruby"]))

        assert generated.deck.total_cards == 40
        assert [s.card_id for s in generated.suggestions] == ["new-ruby"]
        owned_ids = set(generated.deck.cards())
        assert not owned_ids & {s.card_id for s in generated.suggestions}

    async def test_off_color_cards_excluded(self, session: AsyncSession, add_card) -> None:
        """Owned cards outside the requested colors are not used."""
        await _own(session, add_card, "ruby-1")
        await _own(session, add_card, "dual-1", ink_color="Amber, Ruby")

        generated = await generate_deck(session, "u1", DeckBuildRequest(colors=["Ruby"]))

        assert generated.deck.cards() == {"ruby-1": 4}

    async def test_empty_collection(self, session: AsyncSession, add_card) -> None:
        """No owned cards gives an empty deck and catalog suggestions."""
        await add_card("c1", ink_cost=3)

        generated = await generate_deck(session, "nobody", DeckBuildRequest())

        assert generated.deck.total_cards == 0
        assert [s.card_id for s in generated.suggestions] == ["c1"]

    async def test_logs_summary(
        self, session: AsyncSession, add_card, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Each generation logs one summary line."""
        await _own(session, add_card, "c1")

        with caplog.at_level(logging.INFO, logger="inkforge.services.deck_generation"):
            await generate_deck(session, "u1", DeckBuildRequest())

        records = [r for r in caplog.records if r.getMessage() == "deck_generated"]
        assert len(records) == 1
        assert records[0].total_cards == 4
