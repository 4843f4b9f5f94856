"""Bingo game ORM model.

``numbers_called`` keeps the draw order as a JSON array.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import JSON, DateTime, Integer, SmallInteger, String
from sqlalchemy.orm import Mapped, mapped_column

from bingo.models.base import Base


class BingoGame(Base):
    """A hosted game that cards are sold for."""

    __tablename__ = "bingo_games"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    max_cards: Mapped[int] = mapped_column(Integer, nullable=False)
    card_price: Mapped[int] = mapped_column(Integer, nullable=False)
    status: Mapped[str] = mapped_column(String(16), nullable=False, index=True)  # waiting|active|finished
    current_number: Mapped[int | None] = mapped_column(SmallInteger, nullable=True)
    numbers_called: Mapped[list[int]] = mapped_column(JSON, nullable=False, default=list)
    winner_id: Mapped[str | None] = mapped_column(String(36), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    started_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    finished_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
