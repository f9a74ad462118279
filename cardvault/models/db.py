"""
SQLAlchemy ORM models for persistent storage.

Player state is stored as key-value rows so the game core's persistence
contract maps one-to-one onto the database.
"""

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, Integer, String, UniqueConstraint, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class PlayerStateDB(Base):
    """
    A single persisted key for a player.

    Keys are the game's storage keys (catalog, collection, credits,
    last draw time, last daily claim); values are arbitrary JSON.
    """

    __tablename__ = "player_state"
    __table_args__ = (UniqueConstraint("player_id", "key", name="uq_player_key"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    player_id: Mapped[str] = mapped_column(String(255), index=True)
    key: Mapped[str] = mapped_column(String(64))
    value: Mapped[Any] = mapped_column(JSON)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    def __repr__(self) -> str:
        return f"<PlayerStateDB(player_id={self.player_id}, key={self.key})>"
