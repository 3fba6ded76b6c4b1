from inkforge.models.card import (
    CARD_TYPES,
    INK_COLORS,
    Candidate,
    parse_ink_colors,
    parse_inkable,
    parse_optional_int,
)
from inkforge.models.deck import DeckLine, DeckStats, MissingSuggestion
from inkforge.models.failure import (
    ApiResponse,
    CatalogUnavailableError,
    FailureDetail,
    FailureKind,
    KnownError,
    OutcomeType,
)
from inkforge.models.owned_card_pool import DEFAULT_MAX_COPIES, OwnedCardPool

__all__ = [
    "ApiResponse",
    "CARD_TYPES",
    "Candidate",
    "CatalogUnavailableError",
    "DEFAULT_MAX_COPIES",
    "DeckLine",
    "DeckStats",
    "FailureDetail",
    "FailureKind",
    "INK_COLORS",
    "KnownError",
    "MissingSuggestion",
    "OutcomeType",
    "OwnedCardPool",
    "parse_ink_colors",
    "parse_inkable",
    "parse_optional_int",
]
