from collections.abc import Callable
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from inkforge.db import upsert_card
from inkforge.db.database import get_session
from inkforge.main import app
from inkforge.models.card import Candidate, parse_ink_colors
from inkforge.models.db import Base, CardDB


@pytest.fixture
async def async_engine():
    """Create an in-memory SQLite engine for testing."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def session(async_engine) -> AsyncSession:
    """Provide a database session for tests."""
    async_session = async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)
    async with async_session() as session:
        yield session


@pytest.fixture
async def client(async_engine):
    """Provide an async test client with overridden database session."""
    async_session = async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)

    async def override_get_session():
        async with async_session() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_session] = override_get_session

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def make_candidate() -> Callable[..., Candidate]:
    """
    Factory for candidates.

    Defaults to an inkable 2-cost Ruby character with 4 copies owned.
    """

    def _make(card_id: str, **overrides: Any) -> Candidate:
        ink_color = overrides.pop("ink_color", "Ruby")
        fields: dict[str, Any] = {
            "name": card_id,
            "card_type": "character",
            "cost": 2,
            "colors": parse_ink_colors(ink_color),
            "inkable": True,
            "owned": 4,
            "ink_color": ink_color,
        }
        fields.update(overrides)
        return Candidate(card_id=card_id, **fields)

    return _make


@pytest.fixture
def add_card(session: AsyncSession) -> Callable[..., Any]:
    """
    Insert a catalog card.

    Defaults to an approved, inkable 2-cost Ruby character.
    """

    async def _add(card_id: str, **fields: Any) -> CardDB:
        values: dict[str, Any] = {
            "name": card_id,
            "type": "Character",
            "ink_cost": 2,
            "ink_color": "Ruby",
            "inkable": True,
        }
        values.update(fields)
        return await upsert_card(session, card_id, **values)

    return _add
