"""
Collection API endpoints.

Lets a user list, add and remove the cards they own or want.
"""

from datetime import datetime
from typing import Annotated, Literal

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, Field
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from inkforge.db import (
    add_collection_entry,
    get_collection_entries,
    remove_collection_entry,
)
from inkforge.db.database import get_session
from inkforge.models.db import CollectionEntryDB

OwnershipStatus = Literal["owned", "wanted"]

router = APIRouter(prefix="/collection", tags=["collection"])


class CollectionEntryResponse(BaseModel):
    """One collection entry."""

    card_id: str
    status: str
    quantity: int
    notes: str | None = None
    added_at: datetime | None = None


class CollectionResponse(BaseModel):
    """Response model for collection data."""

    user_id: str
    entries: list[CollectionEntryResponse] = Field(default_factory=list)
    total_cards: int = 0
    unique_cards: int = 0


class CollectionEntryRequest(BaseModel):
    """Request model for adding a card to a collection."""

    card_id: str = Field(..., min_length=1, description="Catalog card id")
    quantity: int = Field(default=1, ge=1, description="Copies owned or wanted")
    status: OwnershipStatus = Field(default="owned")
    notes: str | None = Field(default=None, max_length=1000)


class DeleteResponse(BaseModel):
    """Response model for delete operations."""

    user_id: str
    card_id: str
    deleted: bool
    message: str = Field(
        default="",
        description="User-friendly message about the deletion",
    )


def _entry_response(entry: CollectionEntryDB) -> CollectionEntryResponse:
    return CollectionEntryResponse(
        card_id=entry.card_id,
        status=entry.status,
        quantity=entry.quantity,
        notes=entry.notes,
        added_at=entry.added_at,
    )


@router.get("/{user_id}", response_model=CollectionResponse)
async def get_user_collection(
    user_id: str,
    session: Annotated[AsyncSession, Depends(get_session)],
    status_filter: Annotated[OwnershipStatus | None, Query(alias="status")] = None,
) -> CollectionResponse:
    """
    Get a user's collection entries, newest first.

    Pass ?status=owned or ?status=wanted to narrow the list.
    """
    entries = await get_collection_entries(session, user_id, status=status_filter)

    return CollectionResponse(
        user_id=user_id,
        entries=[_entry_response(entry) for entry in entries],
        total_cards=sum(entry.quantity for entry in entries),
        unique_cards=len({entry.card_id for entry in entries}),
    )


@router.post(
    "/{user_id}",
    response_model=CollectionEntryResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_to_collection(
    user_id: str,
    request: CollectionEntryRequest,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> CollectionEntryResponse:
    """
    Add a card to a user's collection.

    A card can be listed once per status; a second add returns 409.
    """
    try:
        entry = await add_collection_entry(
            session,
            user_id,
            request.card_id,
            quantity=request.quantity,
            status=request.status,
            notes=request.notes,
        )
    except IntegrityError as e:
        await session.rollback()
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"'{request.card_id}' is already in this collection as {request.status}.",
        ) from e

    await session.refresh(entry)
    return _entry_response(entry)


@router.delete("/{user_id}/{card_id}", response_model=DeleteResponse)
async def remove_from_collection(
    user_id: str,
    card_id: str,
    session: Annotated[AsyncSession, Depends(get_session)],
    status_filter: Annotated[OwnershipStatus, Query(alias="status")] = "owned",
) -> DeleteResponse:
    """Remove a card from a user's collection."""
    deleted = await remove_collection_entry(session, user_id, card_id, status_filter)

    if deleted:
        message = "The card was removed from your collection."
    else:
        message = "That card was not found in your collection."

    return DeleteResponse(user_id=user_id, card_id=card_id, deleted=deleted, message=message)
