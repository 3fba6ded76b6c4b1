"""
Candidate scoring.

INVARIANT: A score is a pure function of (card, archetype, curve).
It does not depend on any other candidate or on allocation progress.

Scores are multiplicative so weak signals compound. Every multiplier is
a named rule, applied in this fixed order:

1. base            1.0 with a known cost, 0.6 without
2. type weight     archetype preference per card type
3. inkable         x1.4 inkable, x0.5 not inkable, x1.0 unknown
4. archetype rules stat and type bonuses (ARCHETYPE_RULES)
5. lore            characters with known lore, scaled per archetype
6. cost bucket     archetype preference per cost bucket
7. curve nudge     small boost for buckets with larger curve targets
"""

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

from inkforge.filtering.buckets import DECK_CURVE_TOTAL, cost_bucket, curve_targets
from inkforge.models.card import Candidate

BASE_SCORE = 1.0
UNKNOWN_COST_SCORE = 0.6

INKABLE_MULTIPLIER = 1.4
NON_INKABLE_MULTIPLIER = 0.5

CURVE_NUDGE = 0.1

TYPE_WEIGHTS: dict[str, dict[str, float]] = {
    "aggro": {"character": 1.3, "action": 1.0, "item": 0.8, "location": 0.7, "song": 1.0},
    "control": {"character": 1.0, "action": 1.2, "item": 1.0, "location": 1.1, "song": 1.1},
    "midrange": {"character": 1.15, "action": 1.05, "item": 0.95, "location": 0.9, "song": 1.0},
    "combo": {"character": 1.0, "action": 1.0, "item": 1.0, "location": 1.0, "song": 1.0},
}

LORE_WEIGHTS: dict[str, float] = {
    "aggro": 0.10,
    "midrange": 0.06,
    "combo": 0.06,
    "control": 0.04,
}

BUCKET_WEIGHTS: dict[str, dict[str, float]] = {
    "aggro": {"0-1": 1.25, "2-3": 1.15, "6+": 0.85},
    "control": {"6+": 1.2, "4-5": 1.1, "0-1": 0.9},
    "combo": {"2-3": 1.1, "4-5": 1.1, "0-1": 1.05},
    "midrange": {},
}


@dataclass(frozen=True, slots=True)
class ScoringRule:
    """
    A conditional multiplier.

    factor is either a constant or a function of the card, for rules whose
    strength scales with a stat.
    """

    name: str
    applies: Callable[[Candidate], bool]
    factor: float | Callable[[Candidate], float]

    def multiplier(self, card: Candidate) -> float:
        if not self.applies(card):
            return 1.0
        if callable(self.factor):
            return self.factor(card)
        return self.factor


def _stat(value: int | None) -> int:
    return value if value is not None else 0


def _has_body(card: Candidate) -> bool:
    return (
        card.is_character
        and card.cost is not None
        and card.cost >= 1
        and card.strength is not None
        and card.willpower is not None
    )


def _body_efficiency(card: Candidate) -> float:
    # card.cost is >= 1 whenever _has_body holds
    ratio = (_stat(card.strength) + _stat(card.willpower)) / (card.cost or 1)
    return 1.0 + 0.05 * min(ratio, 4.0)


def _questing(card: Candidate) -> bool:
    return card.is_character and _stat(card.lore) > 0


ARCHETYPE_RULES: dict[str, tuple[ScoringRule, ...]] = {
    "aggro": (
        ScoringRule("efficient_body", _has_body, _body_efficiency),
        ScoringRule("quests", _questing, 1.1),
        ScoringRule(
            "slow_top_end",
            lambda c: c.is_character and _stat(c.cost) >= 6 and _stat(c.strength) < 5,
            0.7,
        ),
    ),
    "control": (
        ScoringRule("durable", lambda c: c.is_character and _stat(c.willpower) >= 5, 1.2),
        ScoringRule(
            "finisher",
            lambda c: c.is_character and _stat(c.cost) >= 6 and _stat(c.willpower) >= 4,
            1.15,
        ),
    ),
    "midrange": (
        ScoringRule(
            "solid_curve_topper",
            lambda c: (
                c.is_character
                and c.cost in (4, 5)
                and _stat(c.strength) + _stat(c.willpower) >= 8
            ),
            1.15,
        ),
    ),
    "combo": (
        ScoringRule("song", lambda c: c.card_type == "song", 1.25),
        ScoringRule("quests", _questing, 1.1),
        ScoringRule("action", lambda c: c.card_type == "action", 1.15),
    ),
}


@dataclass(frozen=True, slots=True, eq=False)
class ScoredCandidate:
    """
    A candidate with its desirability score.

    Sorting orders by score descending, then card id ascending.
    Equality and hashing are by identity.
    """

    candidate: Candidate
    score: float
    breakdown: dict[str, float] = field(default_factory=dict)

    @property
    def card_id(self) -> str:
        return self.candidate.card_id

    def __lt__(self, other: "ScoredCandidate") -> bool:
        """Sort by score descending, ties by card id."""
        return (-self.score, self.card_id) < (-other.score, other.card_id)


def score_candidate(card: Candidate, archetype: str, curve: str) -> ScoredCandidate:
    """
    Score a candidate for an archetype and curve preference.

    Returns a ScoredCandidate whose breakdown records every multiplier
    that differed from 1.0, keyed by rule name.
    """
    breakdown: dict[str, float] = {}

    score = BASE_SCORE if card.cost is not None else UNKNOWN_COST_SCORE
    breakdown["base"] = score

    def apply(name: str, multiplier: float) -> None:
        nonlocal score
        if multiplier != 1.0:
            breakdown[name] = multiplier
        score *= multiplier

    weights = TYPE_WEIGHTS.get(archetype, TYPE_WEIGHTS["midrange"])
    apply("type_weight", weights.get(card.card_type, 1.0))

    if card.inkable is True:
        apply("inkable", INKABLE_MULTIPLIER)
    elif card.inkable is False:
        apply("inkable", NON_INKABLE_MULTIPLIER)

    for rule in ARCHETYPE_RULES.get(archetype, ()):
        apply(rule.name, rule.multiplier(card))

    if card.is_character and card.lore is not None:
        apply("lore", 1.0 + max(card.lore, 0) * LORE_WEIGHTS.get(archetype, 0.0))

    bucket = cost_bucket(card.cost)
    apply("cost_bucket", BUCKET_WEIGHTS.get(archetype, {}).get(bucket, 1.0))

    target = curve_targets(curve)[bucket]
    apply("curve_nudge", 1.0 + (target / DECK_CURVE_TOTAL) * CURVE_NUDGE)

    return ScoredCandidate(candidate=card, score=max(score, 0.0), breakdown=breakdown)


def rank_candidates(
    candidates: Iterable[Candidate], archetype: str, curve: str
) -> list[ScoredCandidate]:
    """
    Score and sort candidates, highest score first.

    Equal scores are ordered by card id so rankings are reproducible
    regardless of the order the pool was loaded in.
    """
    return sorted(score_candidate(c, archetype, curve) for c in candidates)
