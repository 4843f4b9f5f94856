"""Bingo card ORM model."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import JSON, Boolean, DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from bingo.models.base import Base


class BingoCard(Base):
    """A purchased 5x5 card; ``numbers`` is row-major with 0 as the free cell."""

    __tablename__ = "bingo_cards"
    __table_args__ = (UniqueConstraint("game_id", "card_number", name="uq_bingo_cards_game_number"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    game_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("bingo_games.id", ondelete="CASCADE"), index=True, nullable=False
    )
    user_id: Mapped[str] = mapped_column(String(36), ForeignKey("profiles.id"), index=True, nullable=False)
    card_number: Mapped[int] = mapped_column(Integer, nullable=False)
    numbers: Mapped[list[int]] = mapped_column(JSON, nullable=False)
    marked_positions: Mapped[list[bool]] = mapped_column(JSON, nullable=False)
    is_winner: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
