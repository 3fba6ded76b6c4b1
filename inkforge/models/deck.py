from dataclasses import dataclass, field

from inkforge.models.card import Candidate


@dataclass
class DeckLine:
    """
    One card in a generated deck.

    INVARIANT: 1 <= quantity <= candidate.max_copies.
    A deck never holds two lines for the same card id.

    Attributes:
        card: The candidate this line allocates
        quantity: Copies in the deck
        reason: Which allocation phase added the card
    """

    card: Candidate
    quantity: int
    reason: str

    @property
    def card_id(self) -> str:
        return self.card.card_id


@dataclass
class DeckStats:
    """Summary statistics for a generated deck."""

    inkable_count: int = 0
    inkable_percentage: float = 0.0
    total_lore: int = 0
    type_distribution: dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class MissingSuggestion:
    """
    A color-legal card the player does not own.

    Advisory only; never part of a deck.
    """

    card_id: str
    name: str
    cost: int | None
    ink_color: str | None
    card_type: str
    quantity: int = 0
    reason: str = "Suggested, not in your collection"
