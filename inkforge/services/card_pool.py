"""
Owned card pool loading.

Joins a player's owned quantities with approved catalog metadata.

INVARIANT: Only cards with approved metadata become candidates.
INVARIANT: A catalog or ownership read failure aborts the load; there is
no partially loaded pool.
"""

import logging
from dataclasses import dataclass
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from inkforge.config import settings
from inkforge.db import get_approved_cards, get_owned_quantities
from inkforge.models.card import Candidate
from inkforge.models.failure import CatalogUnavailableError
from inkforge.models.owned_card_pool import OwnedCardPool

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class LoadedPool:
    """
    Owned quantities plus the catalog metadata found for them.

    cards holds an entry only for owned ids that resolved to an approved
    catalog card.
    """

    owned: OwnedCardPool
    cards: dict[str, dict[str, Any]]

    @property
    def missing_ids(self) -> list[str]:
        """Owned ids with no approved metadata, sorted."""
        return sorted(card_id for card_id in self.owned if card_id not in self.cards)


async def load_owned_pool(
    session: AsyncSession,
    user_id: str,
    batch_size: int | None = None,
) -> LoadedPool:
    """
    Load a user's owned cards with their catalog metadata.

    Metadata is fetched in chunks of batch_size ids.

    Raises:
        CatalogUnavailableError: If the ownership or catalog read fails
    """
    if batch_size is None:
        batch_size = settings.catalog_batch_size
    batch_size = max(1, batch_size)

    try:
        owned = OwnedCardPool.from_dict(await get_owned_quantities(session, user_id))

        card_ids = sorted(owned)
        cards: dict[str, dict[str, Any]] = {}
        for start in range(0, len(card_ids), batch_size):
            cards.update(await get_approved_cards(session, card_ids[start : start + batch_size]))
    except SQLAlchemyError as e:
        logger.error(
            "owned_pool_load_failed",
            extra={"user_id": user_id, "error_type": type(e).__name__},
        )
        raise CatalogUnavailableError(detail=str(e)) from e

    pool = LoadedPool(owned=owned, cards=cards)

    missing = pool.missing_ids
    if missing:
        logger.debug(
            "owned_cards_without_metadata",
            extra={"user_id": user_id, "count": len(missing), "card_ids": missing[:10]},
        )

    logger.info(
        "owned_pool_loaded",
        extra={
            "user_id": user_id,
            "owned_unique": len(owned),
            "owned_total": owned.total_cards(),
            "with_metadata": len(cards),
        },
    )
    return pool


def build_candidates(pool: LoadedPool) -> list[Candidate]:
    """Join owned quantities and metadata into candidates, ordered by card id."""
    return [
        Candidate.from_card_data(card_id, pool.cards[card_id], quantity)
        for card_id, quantity in sorted(pool.owned.items())
        if card_id in pool.cards
    ]
