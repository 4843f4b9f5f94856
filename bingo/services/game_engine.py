"""Game lifecycle: card sales, number draws and win detection.

Every public operation returns an ``OperationResult``; domain errors never
escape the engine. The engine assumes a single writer per game and does not
serialize concurrent calls itself (see ``bingo.locks``).
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from bingo.errors import (
    ConflictError,
    ExhaustedError,
    InvalidStateError,
    NotFoundError,
    PrecompletionError,
    StorageError,
    ValidationError,
)
from bingo.repositories.base import GameRepository
from bingo.repositories.records import (
    CELL_COUNT,
    FREE_CELL,
    MAX_NUMBER,
    CardRecord,
    GameRecord,
    GameStatus,
    PaymentRecord,
    PaymentStatus,
    ProfileRecord,
    new_id,
    utcnow,
)
from bingo.rng import RandomSource, create_rng
from bingo.services.card_generator import generate_card
from bingo.services.results import returns_result
from bingo.services.win_checker import is_winning_card

logger = logging.getLogger(__name__)

OPEN_STATUSES = (GameStatus.WAITING.value, GameStatus.ACTIVE.value)


@dataclass(frozen=True)
class Winner:
    card_id: str
    user_id: str
    card_number: int


@dataclass(frozen=True)
class DrawOutcome:
    number: int
    numbers_called: list[int]
    status: str
    winners: list[Winner] = field(default_factory=list)


@dataclass(frozen=True)
class GameState:
    game: GameRecord
    card_count: int


@dataclass(frozen=True)
class Purchase:
    card: CardRecord
    profile: ProfileRecord
    card_count: int


class GameEngine:
    """Hosts bingo games against a pluggable ``GameRepository``."""

    def __init__(
        self,
        repository: GameRepository,
        rng: RandomSource | None = None,
        *,
        default_max_cards: int = 100,
        default_card_price: int = 500,
    ) -> None:
        self._repo = repository
        self._rng = rng or create_rng()
        self._default_max_cards = default_max_cards
        self._default_card_price = default_card_price

    def _require_game(self, game_id: str) -> GameRecord:
        game = self._repo.get_game(game_id)
        if game is None:
            raise NotFoundError(message=f"Game {game_id} not found")
        return game

    @staticmethod
    def _require_status(game: GameRecord, status: GameStatus, message: str) -> None:
        if game.status != status.value:
            raise InvalidStateError(
                message=message,
                details={"status": game.status, "expected": status.value},
            )

    @returns_result
    def create_game(
        self,
        name: str,
        max_cards: int | None = None,
        card_price: int | None = None,
    ) -> GameRecord:
        name = (name or "").strip()
        max_cards = self._default_max_cards if max_cards is None else int(max_cards)
        card_price = self._default_card_price if card_price is None else int(card_price)

        if not name:
            raise ValidationError(message="Game name is required", details={"name": ["Required"]})
        if max_cards < 1:
            raise ValidationError(message="Invalid max_cards", details={"max_cards": ["Must be >= 1"]})
        if card_price < 0:
            raise ValidationError(message="Invalid card_price", details={"card_price": ["Must be >= 0"]})

        game = GameRecord(id=new_id(), name=name, max_cards=max_cards, card_price=card_price)
        self._repo.save_game(game)
        logger.info("Game %s created (max_cards=%d, card_price=%d)", game.id, max_cards, card_price)
        return game

    @returns_result
    def get_game_state(self, game_id: str) -> GameState:
        game = self._require_game(game_id)
        return GameState(game=game, card_count=self._repo.count_cards(game_id))

    @returns_result
    def list_open_games(self) -> Sequence[GameRecord]:
        return self._repo.list_games(OPEN_STATUSES)

    @returns_result
    def list_cards(self, game_id: str, user_id: str | None = None) -> Sequence[CardRecord]:
        self._require_game(game_id)
        return self._repo.list_cards(game_id, user_id=user_id)

    @returns_result
    def purchase_card(self, game_id: str, user_id: str) -> Purchase:
        game = self._require_game(game_id)
        self._require_status(game, GameStatus.WAITING, "Game has already started or finished")

        sold = self._repo.count_cards(game_id)
        if sold >= game.max_cards:
            raise ConflictError(
                message="No more cards available",
                details={"max_cards": game.max_cards, "sold": sold},
            )

        card = generate_card(self._rng, game_id=game_id, user_id=user_id, card_number=sold + 1)
        now = utcnow()
        payment = PaymentRecord(
            id=new_id(),
            user_id=user_id,
            game_id=game_id,
            amount=game.card_price,
            status=PaymentStatus.COMPLETED.value,
            payment_method="credits",
            created_at=now,
            completed_at=now,
        )
        profile = self._repo.purchase_card(card, payment)
        logger.info("User %s bought card #%d for game %s", user_id, card.card_number, game_id)
        return Purchase(card=card, profile=profile, card_count=sold + 1)

    @returns_result
    def start_game(self, game_id: str) -> GameRecord:
        game = self._require_game(game_id)
        self._require_status(game, GameStatus.WAITING, "Game has already started or finished")

        if self._repo.count_cards(game_id) == 0:
            raise PrecompletionError(message="No cards have been sold for this game")

        game.status = GameStatus.ACTIVE.value
        game.started_at = utcnow()
        self._repo.save_game(game)
        logger.info("Game %s started", game_id)
        return game

    @returns_result
    def draw_next_number(self, game_id: str) -> DrawOutcome:
        game = self._require_game(game_id)
        self._require_status(game, GameStatus.ACTIVE, "Game is not active")

        called = set(game.numbers_called)
        remaining = [n for n in range(1, MAX_NUMBER + 1) if n not in called]
        if not remaining:
            raise ExhaustedError()

        number = self._rng.choice(remaining)
        game.numbers_called = [*game.numbers_called, number]
        game.current_number = number
        self._repo.save_game(game)
        logger.info("Game %s drew %d (%d called)", game_id, number, len(game.numbers_called))

        winners = self._evaluate_winners(game)
        return DrawOutcome(
            number=number,
            numbers_called=list(game.numbers_called),
            status=game.status,
            winners=winners,
        )

    def _evaluate_winners(self, game: GameRecord) -> list[Winner]:
        """Flag every card completed by the latest draw and finish the game.

        Cards completing on the same draw all win; ``winner_id`` goes to the
        owner of the lowest card number among them.
        """

        candidates = [c for c in self._repo.list_cards(game.id) if not c.is_winner]
        winning = [
            c for c in candidates if is_winning_card(c.numbers, c.marked_positions, game.numbers_called)
        ]
        if not winning:
            return []

        winning.sort(key=lambda c: c.card_number)
        for card in winning:
            card.is_winner = True
        self._repo.save_cards(winning)

        game.status = GameStatus.FINISHED.value
        game.winner_id = winning[0].user_id
        game.finished_at = utcnow()
        self._repo.save_game(game)
        logger.info(
            "Game %s finished: %d winning card(s), winner %s",
            game.id,
            len(winning),
            game.winner_id,
        )
        return [Winner(card_id=c.id, user_id=c.user_id, card_number=c.card_number) for c in winning]

    @returns_result
    def reset_game(self, game_id: str) -> GameRecord:
        game = self._require_game(game_id)
        self._require_status(game, GameStatus.FINISHED, "Only finished games can be reset")

        # Cleanup is best-effort: a failed delete is logged and the reset proceeds.
        try:
            removed = self._repo.delete_cards_for_game(game_id)
            logger.info("Game %s reset: removed %d card(s)", game_id, removed)
        except StorageError:
            logger.warning("Could not delete cards for game %s", game_id, exc_info=True)
        try:
            self._repo.delete_payments_for_game(game_id)
        except StorageError:
            logger.warning("Could not delete payments for game %s", game_id, exc_info=True)

        game.status = GameStatus.WAITING.value
        game.current_number = None
        game.numbers_called = []
        game.winner_id = None
        game.started_at = None
        game.finished_at = None
        self._repo.save_game(game)
        return game

    @returns_result
    def mark_cell(self, card_id: str, user_id: str, position: int, marked: bool = True) -> CardRecord:
        card = self._repo.get_card(card_id)
        if card is None or card.user_id != user_id:
            raise NotFoundError(message=f"Card {card_id} not found")
        if not 0 <= position < CELL_COUNT:
            raise ValidationError(
                message="Invalid position",
                details={"position": [f"Must be within 0..{CELL_COUNT - 1}"]},
            )

        game = self._require_game(card.game_id)
        self._require_status(game, GameStatus.ACTIVE, "Game is not active")

        number = card.numbers[position]
        if marked and number != FREE_CELL and number not in game.numbers_called:
            raise ValidationError(
                message="Number has not been called",
                details={"position": [f"{number} has not been called yet"]},
            )

        # Writes the mark alone; is_winner stays as the last draw stored it.
        updated = self._repo.set_mark(card.id, position, bool(marked))
        if updated is None:
            raise NotFoundError(message=f"Card {card_id} not found")
        return updated
