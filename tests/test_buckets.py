"""Tests for cost-curve and card-type bucketing."""

import pytest

from inkforge.filtering.buckets import (
    ARCHETYPES,
    COST_BUCKETS,
    CURVE_PREFERENCES,
    CURVE_TARGETS,
    DECK_CURVE_TOTAL,
    TYPE_TARGETS,
    cost_bucket,
    curve_targets,
    type_bucket,
    type_targets,
)


class TestCostBucket:
    @pytest.mark.parametrize(
        ("cost", "bucket"),
        [
            (0, "0-1"),
            (1, "0-1"),
            (2, "2-3"),
            (3, "2-3"),
            (4, "4-5"),
            (5, "4-5"),
            (6, "6+"),
            (10, "6+"),
        ],
    )
    def test_bucket_boundaries(self, cost: int, bucket: str) -> None:
        """Costs map onto the four curve buckets."""
        assert cost_bucket(cost) == bucket

    def test_unknown_cost_is_neutral(self) -> None:
        """A card with no known cost counts toward 4-5."""
        assert cost_bucket(None) == "4-5"


class TestTypeBucket:
    def test_lowercases(self) -> None:
        """Types are compared lower-cased."""
        assert type_bucket("Song") == "song"

    def test_unset_defaults_to_character(self) -> None:
        """Missing types count as characters."""
        assert type_bucket(None) == "character"
        assert type_bucket("") == "character"
        assert type_bucket("   ") == "character"


class TestTargets:
    @pytest.mark.parametrize("curve", CURVE_PREFERENCES)
    def test_every_curve_sums_to_deck_size(self, curve: str) -> None:
        """Each curve distributes exactly 60 cards across the buckets."""
        targets = curve_targets(curve)

        assert sum(targets.values()) == DECK_CURVE_TOTAL
        assert tuple(targets) == COST_BUCKETS

    @pytest.mark.parametrize("archetype", ARCHETYPES)
    def test_every_archetype_sums_to_deck_size(self, archetype: str) -> None:
        """Each archetype's type mix totals 60 cards."""
        assert sum(type_targets(archetype).values()) == DECK_CURVE_TOTAL

    def test_type_target_order(self) -> None:
        """Types are visited character first, then action, song, item, location."""
        assert list(type_targets("aggro")) == ["character", "action", "song", "item", "location"]

    def test_low_curve_favors_cheap_cards(self) -> None:
        """Low curve wants more 0-1 and fewer 6+ cards than high curve."""
        assert CURVE_TARGETS["low"]["0-1"] > CURVE_TARGETS["high"]["0-1"]
        assert CURVE_TARGETS["low"]["6+"] < CURVE_TARGETS["high"]["6+"]

    def test_returns_copies(self) -> None:
        """Mutating returned targets does not change the tables."""
        targets = curve_targets("low")
        targets["0-1"] = 0
        types = type_targets("aggro")
        types["character"] = 0

        assert CURVE_TARGETS["low"]["0-1"] == 10
        assert TYPE_TARGETS["aggro"]["character"] == 38

    def test_unknown_names_fall_back(self) -> None:
        """Unknown curve falls back to balanced, unknown archetype to midrange."""
        assert curve_targets("steep") == CURVE_TARGETS["balanced"]
        assert type_targets("tempo") == TYPE_TARGETS["midrange"]
