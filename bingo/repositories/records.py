"""Plain records exchanged between the services and the storage layer."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

GRID_SIZE = 5
CELL_COUNT = GRID_SIZE * GRID_SIZE
FREE_CELL = 0
FREE_CELL_INDEX = 12
MAX_NUMBER = 75


class GameStatus(str, Enum):
    WAITING = "waiting"
    ACTIVE = "active"
    FINISHED = "finished"


class PaymentStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_id() -> str:
    return str(uuid.uuid4())


@dataclass
class ProfileRecord:
    id: str
    email: str
    display_name: str | None = None
    credits: int = 0
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)


@dataclass
class GameRecord:
    id: str
    name: str
    max_cards: int
    card_price: int
    status: str = GameStatus.WAITING.value
    current_number: int | None = None
    numbers_called: list[int] = field(default_factory=list)
    winner_id: str | None = None
    created_at: datetime = field(default_factory=utcnow)
    started_at: datetime | None = None
    finished_at: datetime | None = None


@dataclass
class CardRecord:
    id: str
    game_id: str
    user_id: str
    card_number: int
    numbers: list[int]
    marked_positions: list[bool] = field(default_factory=lambda: [False] * CELL_COUNT)
    is_winner: bool = False
    created_at: datetime = field(default_factory=utcnow)


@dataclass
class PaymentRecord:
    id: str
    user_id: str
    game_id: str
    amount: int
    status: str = PaymentStatus.PENDING.value
    payment_method: str = "credits"
    created_at: datetime = field(default_factory=utcnow)
    completed_at: datetime | None = None
