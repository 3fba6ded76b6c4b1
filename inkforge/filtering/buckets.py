"""
Cost-curve and card-type bucketing.

Cards are classified into four cost buckets and five type categories.
The deck builder tracks fill against fixed per-bucket and per-type targets.
"""

from typing import Literal

from inkforge.models.card import DEFAULT_CARD_TYPE

Archetype = Literal["aggro", "midrange", "control", "combo"]
CurvePreference = Literal["low", "balanced", "high"]

ARCHETYPES: tuple[str, ...] = ("aggro", "midrange", "control", "combo")
CURVE_PREFERENCES: tuple[str, ...] = ("low", "balanced", "high")

COST_BUCKETS: tuple[str, ...] = ("0-1", "2-3", "4-5", "6+")

# Every curve distributes this many cards
DECK_CURVE_TOTAL = 60

# Bucket used when a card's cost is unknown
NEUTRAL_BUCKET = "4-5"

# Target card counts per cost bucket (each curve sums to 60)
CURVE_TARGETS: dict[str, dict[str, int]] = {
    "low": {"0-1": 10, "2-3": 28, "4-5": 18, "6+": 4},
    "balanced": {"0-1": 6, "2-3": 22, "4-5": 22, "6+": 10},
    "high": {"0-1": 4, "2-3": 16, "4-5": 24, "6+": 16},
}

# Target card counts per type (soft guidance, each archetype sums to 60)
TYPE_TARGETS: dict[str, dict[str, int]] = {
    "aggro": {"character": 38, "action": 10, "song": 6, "item": 4, "location": 2},
    "midrange": {"character": 32, "action": 12, "song": 6, "item": 6, "location": 4},
    "control": {"character": 24, "action": 18, "song": 8, "item": 6, "location": 4},
    "combo": {"character": 26, "action": 14, "song": 12, "item": 6, "location": 2},
}


def cost_bucket(cost: int | None) -> str:
    """Classify an ink cost into a curve bucket (unknown -> 4-5)."""
    if cost is None:
        return NEUTRAL_BUCKET
    if cost <= 1:
        return "0-1"
    if cost <= 3:
        return "2-3"
    if cost <= 5:
        return "4-5"
    return "6+"


def type_bucket(card_type: str | None) -> str:
    """Classify a card type (unset -> character)."""
    if not card_type:
        return DEFAULT_CARD_TYPE
    return card_type.strip().lower() or DEFAULT_CARD_TYPE


def curve_targets(curve: str) -> dict[str, int]:
    """Per-bucket targets for a curve preference (unknown -> balanced)."""
    return dict(CURVE_TARGETS.get(curve, CURVE_TARGETS["balanced"]))


def type_targets(archetype: str) -> dict[str, int]:
    """Per-type targets for an archetype (unknown -> midrange)."""
    return dict(TYPE_TARGETS.get(archetype, TYPE_TARGETS["midrange"]))
