"""
Candidate card model.

A Candidate is a catalog card joined with the caller's owned quantity.
Catalog fields arrive loosely typed (numbers as strings, booleans as
"true"/"1", colors comma-joined); they are parsed here once so every later
stage works with clean values.

INVARIANT: Malformed numeric fields become None, never an exception.
INVARIANT: owned is the ceiling on copies that may enter a deck.
"""

import math
from dataclasses import dataclass
from typing import Any

from inkforge.models.owned_card_pool import DEFAULT_MAX_COPIES

# The six ink colors, in canonical spelling
INK_COLORS: tuple[str, ...] = ("Amber", "Amethyst", "Emerald", "Ruby", "Sapphire", "Steel")

_CANONICAL_COLORS = {color.lower(): color for color in INK_COLORS}

CARD_TYPES: tuple[str, ...] = ("character", "action", "song", "item", "location")
DEFAULT_CARD_TYPE = "character"


def canonical_color(tag: str) -> str:
    """Return the canonical spelling of an ink color tag (unknown tags unchanged)."""
    cleaned = tag.strip()
    return _CANONICAL_COLORS.get(cleaned.lower(), cleaned)


def parse_ink_colors(value: Any) -> tuple[str, ...]:
    """
    Parse a comma-joined ink color field.

    "Amber, Steel" -> ("Amber", "Steel"). Empty or unset -> ().
    """
    if not value:
        return ()
    tags = (canonical_color(part) for part in str(value).split(","))
    return tuple(tag for tag in tags if tag)


def parse_optional_int(value: Any) -> int | None:
    """
    Parse a loosely typed integer field.

    Returns None for unset, NaN or unparseable values.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return None if math.isnan(value) or math.isinf(value) else int(value)

    text = str(value).strip()
    if not text:
        return None
    try:
        number = float(text)
    except ValueError:
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return int(number)


def parse_inkable(value: Any) -> bool | None:
    """
    Parse the tri-state inkable flag.

    Returns True/False when the value is recognizable, None when unknown.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        return value
    if isinstance(value, int | float):
        if value == 1:
            return True
        if value == 0:
            return False
        return None

    text = str(value).strip().lower()
    if text in ("true", "1", "yes"):
        return True
    if text in ("false", "0", "no"):
        return False
    return None


def normalize_card_type(value: Any) -> str:
    """Lower-case a card type, defaulting to character when unset."""
    text = str(value).strip().lower() if value else ""
    return text or DEFAULT_CARD_TYPE


@dataclass(frozen=True, slots=True)
class Candidate:
    """
    A card eligible for deck building.

    Attributes:
        card_id: Catalog identifier
        name: Card name
        card_type: character | action | song | item | location
        cost: Ink cost, None when unknown
        colors: Parsed ink colors (empty for colorless/unset)
        inkable: True / False / None (unknown)
        strength, willpower, lore: Character stats, None when unknown
        owned: Copies the caller owns
        ink_color: Raw comma-joined color field, for display
    """

    card_id: str
    name: str
    card_type: str = DEFAULT_CARD_TYPE
    cost: int | None = None
    colors: tuple[str, ...] = ()
    inkable: bool | None = None
    strength: int | None = None
    willpower: int | None = None
    lore: int | None = None
    owned: int = 0
    ink_color: str | None = None
    set_code: str | None = None
    rarity: str | None = None

    @classmethod
    def from_card_data(cls, card_id: str, card_data: dict[str, Any], owned: int) -> "Candidate":
        """Build a candidate from catalog metadata and an owned quantity."""
        raw_color = card_data.get("ink_color")
        return cls(
            card_id=str(card_id),
            name=str(card_data.get("name") or card_id),
            card_type=normalize_card_type(card_data.get("type")),
            cost=parse_optional_int(card_data.get("ink_cost")),
            colors=parse_ink_colors(raw_color),
            inkable=parse_inkable(card_data.get("inkable")),
            strength=parse_optional_int(card_data.get("strength")),
            willpower=parse_optional_int(card_data.get("willpower")),
            lore=parse_optional_int(card_data.get("lore")),
            owned=max(0, int(owned)),
            ink_color=str(raw_color) if raw_color else None,
            set_code=card_data.get("set"),
            rarity=card_data.get("rarity"),
        )

    @property
    def is_character(self) -> bool:
        return self.card_type == "character"

    @property
    def max_copies(self) -> int:
        """Copies usable in one deck: min(owned, copy cap)."""
        return min(self.owned, DEFAULT_MAX_COPIES)
