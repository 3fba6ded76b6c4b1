"""
Owned Card Pool - count-aware pool for deck construction.

INVARIANT: Only cards with count > 0 may appear in the pool.
This eliminates the Count == 0 vs Count > 0 ambiguity globally.

INVARIANT: No deck may exceed:
  - owned count
  - max copy limit (default 4)
"""

from collections.abc import Iterator
from dataclasses import dataclass, field

# Max copies of a single card in one deck
DEFAULT_MAX_COPIES = 4


@dataclass(frozen=True, slots=True)
class OwnedCardPool:
    """
    Immutable pool of owned cards keyed by card id.

    INVARIANT: Every card in the pool has count >= 1.
    Zero-count cards are rejected at construction time.

    Usage:
        pool = OwnedCardPool.from_dict(quantities)
        for card_id, count in pool.items():
            # count is guaranteed > 0
            ...
    """

    _cards: dict[str, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Validate all counts are positive."""
        for card_id, count in self._cards.items():
            if count <= 0:
                raise ValueError(f"Card '{card_id}' has invalid count {count} (must be > 0)")

    @classmethod
    def from_dict(cls, cards: dict[str, int]) -> "OwnedCardPool":
        """
        Build pool from card id -> count dict.

        Filters out any cards with count <= 0.
        """
        filtered = {card_id: count for card_id, count in cards.items() if count > 0}
        return cls(_cards=filtered)

    def __contains__(self, card_id: object) -> bool:
        """Check if card is in pool (with count > 0)."""
        return card_id in self._cards

    def __len__(self) -> int:
        """Number of unique cards in pool."""
        return len(self._cards)

    def __iter__(self) -> Iterator[str]:
        """Iterate over card ids."""
        return iter(self._cards)

    def items(self) -> Iterator[tuple[str, int]]:
        """Iterate over (card_id, count) pairs."""
        return iter(self._cards.items())

    def total_cards(self) -> int:
        """Total cards across all copies."""
        return sum(self._cards.values())
