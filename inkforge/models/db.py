"""
SQLAlchemy ORM models for persistent storage.

The card catalog and the per-user collection are owned by other parts of
the system; these tables are the read side the deck engine depends on.
"""

from datetime import datetime

from sqlalchemy import (
    Boolean,
    DateTime,
    Integer,
    String,
    Text,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

# Catalog review states
CARD_STATUS_APPROVED = "approved"
CARD_STATUS_PENDING = "pending"
CARD_STATUS_REJECTED = "rejected"

# Collection entry states
OWNERSHIP_OWNED = "owned"
OWNERSHIP_WANTED = "wanted"


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class CardDB(Base):
    """
    A catalog card.

    Only cards in the approved state are visible to deck building.
    Ink colors are stored comma-joined (e.g. "Amber, Steel").
    """

    __tablename__ = "cards"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), index=True)
    type: Mapped[str | None] = mapped_column(String(50), nullable=True)
    set_code: Mapped[str | None] = mapped_column(String(20), nullable=True)
    rarity: Mapped[str | None] = mapped_column(String(20), nullable=True)

    ink_cost: Mapped[int | None] = mapped_column(Integer, nullable=True)
    ink_color: Mapped[str | None] = mapped_column(String(100), nullable=True)
    inkable: Mapped[bool | None] = mapped_column(Boolean, nullable=True)

    # Character stats
    lore: Mapped[int | None] = mapped_column(Integer, nullable=True)
    strength: Mapped[int | None] = mapped_column(Integer, nullable=True)
    willpower: Mapped[int | None] = mapped_column(Integer, nullable=True)

    status: Mapped[str] = mapped_column(String(20), default=CARD_STATUS_APPROVED, index=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    def __repr__(self) -> str:
        return f"<CardDB(id={self.id}, name={self.name})>"


class CollectionEntryDB(Base):
    """
    A user's ownership record for one card.

    The same card may appear once per status (owned / wanted).
    """

    __tablename__ = "user_collections"
    __table_args__ = (
        UniqueConstraint("user_id", "card_id", "status", name="uq_user_card_status"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String(255), index=True)
    card_id: Mapped[str] = mapped_column(String(64), index=True)
    status: Mapped[str] = mapped_column(String(20), default=OWNERSHIP_OWNED)
    quantity: Mapped[int] = mapped_column(Integer, default=1)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    added_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self) -> str:
        return (
            f"<CollectionEntryDB(user={self.user_id}, card={self.card_id}, "
            f"status={self.status}, qty={self.quantity})>"
        )
