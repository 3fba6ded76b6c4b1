"""
Candidate filtering and scoring.

Color legality, cost/type bucketing and archetype scoring run before any
card is allocated to a deck.
"""

from inkforge.filtering.buckets import (
    ARCHETYPES,
    COST_BUCKETS,
    CURVE_PREFERENCES,
    CURVE_TARGETS,
    TYPE_TARGETS,
    Archetype,
    CurvePreference,
    cost_bucket,
    curve_targets,
    type_bucket,
    type_targets,
)
from inkforge.filtering.colors import (
    MAX_DECK_COLORS,
    filter_by_colors,
    is_color_legal,
    normalize_requested_colors,
)
from inkforge.filtering.scoring import (
    ARCHETYPE_RULES,
    ScoredCandidate,
    ScoringRule,
    rank_candidates,
    score_candidate,
)

__all__ = [
    # Buckets
    "ARCHETYPES",
    "COST_BUCKETS",
    "CURVE_PREFERENCES",
    "CURVE_TARGETS",
    "TYPE_TARGETS",
    "Archetype",
    "CurvePreference",
    "cost_bucket",
    "curve_targets",
    "type_bucket",
    "type_targets",
    # Colors
    "MAX_DECK_COLORS",
    "filter_by_colors",
    "is_color_legal",
    "normalize_requested_colors",
    # Scoring
    "ARCHETYPE_RULES",
    "ScoredCandidate",
    "ScoringRule",
    "rank_candidates",
    "score_candidate",
]
