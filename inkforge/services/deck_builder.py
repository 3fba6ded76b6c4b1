"""
Deck building service.

Builds a 60-card deck from the cards a player owns, for a chosen
archetype, cost-curve preference and ink colors.

Strategy (staged greedy, highest score first):
1. Character priority: inkable characters first, toward the character target
2. Diversity: actions, songs, items and locations toward their type targets
3. Balanced fill: whatever relieves a cost-bucket or type deficit,
   holding back non-inkable cards while the inkable ratio is behind
4. Final fill: top up short types, then take anything owned until 60

INVARIANT: total cards <= 60.
INVARIANT: one line per card id, quantity <= min(4, owned).
INVARIANT: build_deck never raises; an empty pool yields an empty deck.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from inkforge.filtering.buckets import (
    COST_BUCKETS,
    cost_bucket,
    curve_targets,
    type_bucket,
    type_targets,
)
from inkforge.filtering.colors import filter_by_colors, normalize_requested_colors
from inkforge.filtering.scoring import ScoredCandidate, rank_candidates
from inkforge.models.card import CARD_TYPES, Candidate
from inkforge.models.deck import DeckLine, DeckStats
from inkforge.models.owned_card_pool import DEFAULT_MAX_COPIES

logger = logging.getLogger(__name__)

DECK_SIZE = 60

# Share of the deck that should be inkable (67% of 60 = 40 cards)
INKABLE_TARGET_RATIO = 0.67

# Non-inkable cards are skipped until a type reaches this share of its target
CHARACTER_INKABLE_GATE = 0.7
DIVERSITY_INKABLE_GATE = 0.5

# Below this many open slots, any card may be added as a single filler copy
MINIMAL_FILLER_SLOTS = 3

REASON_CHARACTER_CURVE = "Core character that fills the cost curve"
REASON_CHARACTER = "Core character for the archetype"
REASON_DIVERSITY = "Adds {card_type} variety"
REASON_BALANCED = "Fills cost curve and type mix"
REASON_CURVE = "Fills cost curve"
REASON_TYPE = "Fills type mix"
REASON_INKABLE = "Inkable, keeps the ink supply consistent"
REASON_FILLER = "Minimal filler"
REASON_TYPE_TOP_UP = "Tops up {card_type} count"
REASON_FINAL_FILL = "Filler to complete 60 cards"


@dataclass
class DeckBuildRequest:
    """Parameters for deck building."""

    archetype: str = "midrange"  # aggro, midrange, control, combo
    curve: str = "balanced"  # low, balanced, high
    colors: list[str] = field(default_factory=list)  # At most two ink colors

    def __post_init__(self) -> None:
        self.colors = normalize_requested_colors(self.colors)


@dataclass
class BuiltDeck:
    """A deck constructed from a player's collection."""

    request: DeckBuildRequest
    lines: list[DeckLine]
    total_cards: int
    curve_filled: dict[str, int]  # cost bucket -> count
    type_filled: dict[str, int]  # card type -> count
    stats: DeckStats
    deck_size: int = DECK_SIZE
    max_copies: int = DEFAULT_MAX_COPIES

    @property
    def is_complete(self) -> bool:
        return self.total_cards >= self.deck_size

    def cards(self) -> dict[str, int]:
        """Card id -> quantity."""
        return {line.card_id: line.quantity for line in self.lines}


@dataclass
class AllocatorState:
    """
    Allocation progress shared by the build phases.

    add() is the only mutator; it enforces the copy cap, the owned
    ceiling and the deck size, and merges repeat picks into one line.
    """

    curve_targets: dict[str, int]
    type_targets: dict[str, int]
    deck_size: int = DECK_SIZE
    lines: dict[str, DeckLine] = field(default_factory=dict)
    bucket_filled: dict[str, int] = field(default_factory=lambda: dict.fromkeys(COST_BUCKETS, 0))
    type_filled: dict[str, int] = field(default_factory=lambda: dict.fromkeys(CARD_TYPES, 0))
    total: int = 0
    inkable_count: int = 0

    @property
    def slots_left(self) -> int:
        return max(0, self.deck_size - self.total)

    @property
    def is_full(self) -> bool:
        return self.total >= self.deck_size

    @property
    def inkable_target(self) -> int:
        return int(self.deck_size * INKABLE_TARGET_RATIO)

    @property
    def inkable_shortfall(self) -> int:
        return max(0, self.inkable_target - self.inkable_count)

    def placed(self, card: Candidate) -> int:
        line = self.lines.get(card.card_id)
        return line.quantity if line else 0

    def available(self, card: Candidate) -> int:
        """Copies of card that may still be added."""
        return max(0, card.max_copies - self.placed(card))

    def bucket_need(self, card: Candidate) -> int:
        bucket = cost_bucket(card.cost)
        return max(0, self.curve_targets.get(bucket, 0) - self.bucket_filled.get(bucket, 0))

    def type_need(self, card: Candidate) -> int:
        card_type = type_bucket(card.card_type)
        return max(0, self.type_targets.get(card_type, 0) - self.type_filled.get(card_type, 0))

    def add(self, card: Candidate, quantity: int, reason: str) -> int:
        """
        Add up to quantity copies of card.

        Returns the number of copies actually added.
        """
        take = min(quantity, self.available(card), self.slots_left)
        if take <= 0:
            return 0

        line = self.lines.get(card.card_id)
        if line is None:
            self.lines[card.card_id] = DeckLine(card=card, quantity=take, reason=reason)
        else:
            line.quantity += take

        bucket = cost_bucket(card.cost)
        self.bucket_filled[bucket] = self.bucket_filled.get(bucket, 0) + take
        card_type = type_bucket(card.card_type)
        self.type_filled[card_type] = self.type_filled.get(card_type, 0) + take
        self.total += take
        if card.inkable is True:
            self.inkable_count += take
        return take


def build_deck(request: DeckBuildRequest, candidates: Iterable[Candidate]) -> BuiltDeck:
    """
    Build a deck from owned candidates.

    Args:
        request: Archetype, curve preference and colors
        candidates: Owned cards; color-illegal ones are dropped here

    Returns:
        BuiltDeck with up to 60 cards. Fewer than 60 is a valid result
        when the pool is too small.
    """
    legal = filter_by_colors(candidates, request.colors)
    ranked = rank_candidates(legal, request.archetype, request.curve)

    by_type: dict[str, list[ScoredCandidate]] = {}
    for scored in ranked:
        by_type.setdefault(type_bucket(scored.candidate.card_type), []).append(scored)

    state = AllocatorState(
        curve_targets=curve_targets(request.curve),
        type_targets=type_targets(request.archetype),
    )

    _character_priority_pass(state, by_type.get("character", []))
    logger.debug("After character priority: %d cards", state.total)

    _diversity_pass(state, by_type)
    logger.debug("After diversity: %d cards", state.total)

    _balanced_fill_pass(state, ranked)
    logger.debug("After balanced fill: %d cards", state.total)

    _final_fill_pass(state, ranked, by_type)
    logger.debug("After final fill: %d cards (%d inkable)", state.total, state.inkable_count)

    lines = list(state.lines.values())

    return BuiltDeck(
        request=request,
        lines=lines,
        total_cards=state.total,
        curve_filled=dict(state.bucket_filled),
        type_filled=dict(state.type_filled),
        stats=summarize_deck(lines),
        deck_size=state.deck_size,
    )


def _character_priority_pass(state: AllocatorState, characters: list[ScoredCandidate]) -> None:
    """
    Place characters toward the character target.

    Until 70% of the target is placed, only inkable characters qualify.
    A character is taken even when its cost bucket is already full, as
    long as the character target is not met.
    """
    gate = state.type_targets.get("character", 0) * CHARACTER_INKABLE_GATE

    for scored in characters:
        if state.is_full:
            break
        card = scored.candidate

        type_need = state.type_need(card)
        if type_need <= 0:
            break
        if state.type_filled.get("character", 0) < gate and card.inkable is not True:
            continue

        available = state.available(card)
        if available <= 0:
            continue

        bucket_need = state.bucket_need(card)
        bucket_cap = bucket_need if bucket_need > 0 else state.slots_left
        take = min(available, type_need, bucket_cap, state.slots_left)
        state.add(card, take, REASON_CHARACTER_CURVE if bucket_need > 0 else REASON_CHARACTER)


def _diversity_pass(state: AllocatorState, by_type: dict[str, list[ScoredCandidate]]) -> None:
    """
    Place non-character types toward their targets.

    Until a type reaches half its target, only inkable cards qualify.
    Cards are only taken into cost buckets that still need filling.
    """
    for card_type, target in state.type_targets.items():
        if card_type == "character":
            continue
        gate = target * DIVERSITY_INKABLE_GATE

        for scored in by_type.get(card_type, []):
            if state.is_full:
                return
            card = scored.candidate

            type_need = state.type_need(card)
            if type_need <= 0:
                break
            if state.type_filled.get(card_type, 0) < gate and card.inkable is not True:
                continue

            take = min(state.available(card), type_need, state.bucket_need(card), state.slots_left)
            if take > 0:
                state.add(card, take, REASON_DIVERSITY.format(card_type=card_type))


def _balanced_fill_pass(state: AllocatorState, ranked: list[ScoredCandidate]) -> None:
    """
    Fill remaining bucket and type deficits by global score.

    While the inkable shortfall exceeds half of the open slots, cards
    known to be non-inkable are skipped. Unknown inkability is not held
    back.
    """
    for scored in ranked:
        if state.is_full:
            break
        card = scored.candidate

        shortfall = state.inkable_shortfall
        if shortfall > state.slots_left / 2 and card.inkable is False:
            continue

        available = state.available(card)
        if available <= 0:
            continue

        bucket_need = state.bucket_need(card)
        type_need = state.type_need(card)

        if bucket_need > 0 and type_need > 0:
            take, reason = min(bucket_need, type_need), REASON_BALANCED
        elif bucket_need > 0:
            take, reason = bucket_need, REASON_CURVE
        elif type_need > 0:
            take, reason = type_need, REASON_TYPE
        elif card.inkable is True and shortfall > 0:
            take, reason = shortfall, REASON_INKABLE
        elif state.slots_left < MINIMAL_FILLER_SLOTS:
            take, reason = 1, REASON_FILLER
        else:
            continue

        state.add(card, min(available, take), reason)


def _final_fill_pass(
    state: AllocatorState,
    ranked: list[ScoredCandidate],
    by_type: dict[str, list[ScoredCandidate]],
) -> None:
    """
    Complete the deck when the earlier phases fell short of 60.

    Short types are topped up first, inkable cards before the rest;
    known non-inkable cards only count once the inkable target is met. Any
    remaining slots take inkable cards while the inkable count is behind,
    then anything still available.
    """
    if state.is_full:
        return

    for card_type in state.type_targets:
        for scored in _inkable_first(by_type.get(card_type, [])):
            if state.is_full:
                return
            card = scored.candidate

            type_need = state.type_need(card)
            if type_need <= 0:
                break
            if card.inkable is False and state.inkable_shortfall > 0:
                continue

            state.add(
                card,
                min(state.available(card), type_need),
                REASON_TYPE_TOP_UP.format(card_type=card_type),
            )

    for scored in ranked:
        if state.is_full or state.inkable_shortfall <= 0:
            break
        if scored.candidate.inkable is True:
            state.add(scored.candidate, state.available(scored.candidate), REASON_FINAL_FILL)

    for scored in ranked:
        if state.is_full:
            break
        state.add(scored.candidate, state.available(scored.candidate), REASON_FINAL_FILL)


def _inkable_first(ranked: list[ScoredCandidate]) -> list[ScoredCandidate]:
    """Reorder so inkable cards come first, keeping score order within each group."""
    return sorted(ranked, key=lambda scored: scored.candidate.inkable is not True)


def summarize_deck(lines: list[DeckLine]) -> DeckStats:
    """Compute inkable share, lore total and type distribution."""
    total = sum(line.quantity for line in lines)
    inkable = sum(line.quantity for line in lines if line.card.inkable is True)
    lore = sum((line.card.lore or 0) * line.quantity for line in lines if line.card.is_character)

    distribution: dict[str, int] = {}
    for line in lines:
        card_type = type_bucket(line.card.card_type)
        distribution[card_type] = distribution.get(card_type, 0) + line.quantity

    return DeckStats(
        inkable_count=inkable,
        inkable_percentage=round(inkable * 100 / total, 1) if total else 0.0,
        total_lore=lore,
        type_distribution=distribution,
    )
