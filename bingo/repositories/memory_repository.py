"""Dict-backed repository owned by a single app instance."""

from __future__ import annotations

import copy
from collections.abc import Iterable, Sequence
from threading import Lock

from bingo.errors import InsufficientCreditsError, NotFoundError
from bingo.repositories.base import GameRepository
from bingo.repositories.records import (
    CardRecord,
    GameRecord,
    PaymentRecord,
    ProfileRecord,
    utcnow,
)


class InMemoryGameRepository(GameRepository):
    """Keeps records in process memory; lost on restart."""

    def __init__(self) -> None:
        self._lock = Lock()
        self._games: dict[str, GameRecord] = {}
        self._cards: dict[str, CardRecord] = {}
        self._payments: dict[str, PaymentRecord] = {}
        self._profiles: dict[str, ProfileRecord] = {}

    def get_game(self, game_id: str) -> GameRecord | None:
        with self._lock:
            game = self._games.get(game_id)
            return copy.deepcopy(game) if game is not None else None

    def list_games(self, statuses: Iterable[str] | None = None) -> Sequence[GameRecord]:
        wanted = set(statuses) if statuses is not None else None
        with self._lock:
            games = [g for g in self._games.values() if wanted is None or g.status in wanted]
            games.sort(key=lambda g: g.created_at)
            return copy.deepcopy(games)

    def save_game(self, game: GameRecord) -> GameRecord:
        with self._lock:
            self._games[game.id] = copy.deepcopy(game)
        return game

    def count_cards(self, game_id: str) -> int:
        with self._lock:
            return sum(1 for c in self._cards.values() if c.game_id == game_id)

    def list_cards(self, game_id: str, user_id: str | None = None) -> Sequence[CardRecord]:
        with self._lock:
            cards = [
                c
                for c in self._cards.values()
                if c.game_id == game_id and (user_id is None or c.user_id == user_id)
            ]
            cards.sort(key=lambda c: c.card_number)
            return copy.deepcopy(cards)

    def get_card(self, card_id: str) -> CardRecord | None:
        with self._lock:
            card = self._cards.get(card_id)
            return copy.deepcopy(card) if card is not None else None

    def save_card(self, card: CardRecord) -> CardRecord:
        with self._lock:
            self._cards[card.id] = copy.deepcopy(card)
        return card

    def set_mark(self, card_id: str, position: int, marked: bool) -> CardRecord | None:
        with self._lock:
            card = self._cards.get(card_id)
            if card is None:
                return None
            card.marked_positions[position] = bool(marked)
            return copy.deepcopy(card)

    def delete_cards_for_game(self, game_id: str) -> int:
        with self._lock:
            doomed = [cid for cid, c in self._cards.items() if c.game_id == game_id]
            for cid in doomed:
                del self._cards[cid]
            return len(doomed)

    def list_payments(self, game_id: str) -> Sequence[PaymentRecord]:
        with self._lock:
            payments = [p for p in self._payments.values() if p.game_id == game_id]
            payments.sort(key=lambda p: p.created_at)
            return copy.deepcopy(payments)

    def delete_payments_for_game(self, game_id: str) -> int:
        with self._lock:
            doomed = [pid for pid, p in self._payments.items() if p.game_id == game_id]
            for pid in doomed:
                del self._payments[pid]
            return len(doomed)

    def get_profile(self, user_id: str) -> ProfileRecord | None:
        with self._lock:
            profile = self._profiles.get(user_id)
            return copy.deepcopy(profile) if profile is not None else None

    def get_profile_by_email(self, email: str) -> ProfileRecord | None:
        with self._lock:
            for profile in self._profiles.values():
                if profile.email == email:
                    return copy.deepcopy(profile)
            return None

    def save_profile(self, profile: ProfileRecord) -> ProfileRecord:
        with self._lock:
            self._profiles[profile.id] = copy.deepcopy(profile)
        return profile

    def add_credits(self, user_id: str, amount: int) -> ProfileRecord | None:
        with self._lock:
            profile = self._profiles.get(user_id)
            if profile is None:
                return None
            profile.credits += int(amount)
            profile.updated_at = utcnow()
            return copy.deepcopy(profile)

    def purchase_card(self, card: CardRecord, payment: PaymentRecord) -> ProfileRecord:
        with self._lock:
            profile = self._profiles.get(card.user_id)
            if profile is None:
                raise NotFoundError(message=f"Profile {card.user_id} not found")
            if profile.credits < payment.amount:
                raise InsufficientCreditsError(
                    details={"credits": profile.credits, "required": payment.amount}
                )

            profile.credits -= payment.amount
            profile.updated_at = utcnow()
            self._cards[card.id] = copy.deepcopy(card)
            self._payments[payment.id] = copy.deepcopy(payment)
            return copy.deepcopy(profile)
