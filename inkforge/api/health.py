"""
Health check endpoints.

Liveness, plus a readiness probe that confirms the card catalog can be read.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from inkforge.db.database import get_session
from inkforge.models.db import CARD_STATUS_APPROVED, CardDB

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    database: str | None = None
    approved_cards: int | None = None


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """Liveness probe. Does not touch the database."""
    return HealthResponse(status="healthy")


@router.get(
    "/ready",
    response_model=HealthResponse,
    responses={503: {"model": HealthResponse}},
)
async def ready(
    response: Response,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> HealthResponse:
    """
    Readiness probe.

    Counts approved catalog cards; returns 503 if the catalog cannot be read.
    An empty catalog is still ready, decks just come back empty.
    """
    try:
        count = await session.scalar(
            select(func.count()).select_from(CardDB).where(CardDB.status == CARD_STATUS_APPROVED)
        )
    except SQLAlchemyError:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        return HealthResponse(status="not ready", database="disconnected")

    return HealthResponse(status="ready", database="connected", approved_cards=int(count or 0))
