"""
Database CRUD operations.

Provides async functions for reading the card catalog and reading or
editing user collections.
"""

from collections.abc import Collection
from typing import Any

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from inkforge.models.db import (
    CARD_STATUS_APPROVED,
    OWNERSHIP_OWNED,
    CardDB,
    CollectionEntryDB,
)

# --- Catalog Operations ---


def card_to_dict(card: CardDB) -> dict[str, Any]:
    """Convert a database card to a plain metadata dict."""
    return {
        "id": card.id,
        "name": card.name,
        "type": card.type,
        "set": card.set_code,
        "rarity": card.rarity,
        "ink_cost": card.ink_cost,
        "ink_color": card.ink_color,
        "inkable": card.inkable,
        "lore": card.lore,
        "strength": card.strength,
        "willpower": card.willpower,
    }


async def get_approved_cards(
    session: AsyncSession, card_ids: list[str]
) -> dict[str, dict[str, Any]]:
    """
    Get approved catalog metadata for a batch of card ids.

    Ids that are unknown or not approved are absent from the result.
    """
    if not card_ids:
        return {}

    result = await session.execute(
        select(CardDB).where(
            CardDB.id.in_(card_ids),
            CardDB.status == CARD_STATUS_APPROVED,
        )
    )
    return {card.id: card_to_dict(card) for card in result.scalars().all()}


async def list_approved_cards(
    session: AsyncSession,
    limit: int = 500,
    exclude_ids: Collection[str] = (),
) -> list[dict[str, Any]]:
    """
    Get a bounded page of approved catalog cards, ordered by id.

    Cards in exclude_ids are filtered in the query, so they never use up
    the limit.
    """
    query = select(CardDB).where(CardDB.status == CARD_STATUS_APPROVED)
    if exclude_ids:
        query = query.where(CardDB.id.not_in(list(exclude_ids)))

    result = await session.execute(query.order_by(CardDB.id).limit(limit))
    return [card_to_dict(card) for card in result.scalars().all()]


async def upsert_card(session: AsyncSession, card_id: str, **fields: Any) -> CardDB:
    """
    Insert or update a catalog card.

    Keyword arguments map directly onto CardDB columns.
    """
    existing = await session.get(CardDB, card_id)

    if existing:
        for key, value in fields.items():
            setattr(existing, key, value)
        await session.flush()
        return existing

    card = CardDB(id=card_id, **fields)
    session.add(card)
    await session.flush()
    return card


# --- Collection Operations ---


async def get_owned_quantities(session: AsyncSession, user_id: str) -> dict[str, int]:
    """
    Get owned quantities for a user, keyed by card id.

    Only records in the owned state count. Duplicate records for the same
    card are summed; non-positive quantities are ignored.
    """
    result = await session.execute(
        select(CollectionEntryDB.card_id, CollectionEntryDB.quantity).where(
            CollectionEntryDB.user_id == user_id,
            CollectionEntryDB.status == OWNERSHIP_OWNED,
        )
    )

    quantities: dict[str, int] = {}
    for card_id, quantity in result.all():
        qty = int(quantity or 0)
        if not card_id or qty <= 0:
            continue
        quantities[card_id] = quantities.get(card_id, 0) + qty
    return quantities


async def get_collection_entries(
    session: AsyncSession, user_id: str, status: str | None = None
) -> list[CollectionEntryDB]:
    """Get a user's collection entries, newest first, optionally by status."""
    query = select(CollectionEntryDB).where(CollectionEntryDB.user_id == user_id)
    if status is not None:
        query = query.where(CollectionEntryDB.status == status)

    result = await session.execute(
        query.order_by(CollectionEntryDB.added_at.desc(), CollectionEntryDB.id.desc())
    )
    return list(result.scalars().all())


async def add_collection_entry(
    session: AsyncSession,
    user_id: str,
    card_id: str,
    quantity: int = 1,
    status: str = OWNERSHIP_OWNED,
    notes: str | None = None,
) -> CollectionEntryDB:
    """
    Add a card to a user's collection.

    Raises IntegrityError if the user already has this card in this status.
    """
    entry = CollectionEntryDB(
        user_id=user_id,
        card_id=card_id,
        quantity=quantity,
        status=status,
        notes=notes,
    )
    session.add(entry)
    await session.flush()
    return entry


async def remove_collection_entry(
    session: AsyncSession, user_id: str, card_id: str, status: str
) -> bool:
    """
    Remove a card from a user's collection.

    Returns True if a record was deleted, False if none matched.
    """
    result = await session.execute(
        delete(CollectionEntryDB).where(
            CollectionEntryDB.user_id == user_id,
            CollectionEntryDB.card_id == card_id,
            CollectionEntryDB.status == status,
        )
    )
    # rowcount is available on DELETE results; type stubs incomplete for async
    return int(result.rowcount) > 0  # type: ignore[attr-defined]
