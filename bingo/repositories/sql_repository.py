"""Repository backed by a SQLAlchemy session (one session per request)."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from bingo.errors import InsufficientCreditsError, NotFoundError, StorageError
from bingo.models import BingoCard, BingoGame, Payment, Profile
from bingo.repositories.base import GameRepository
from bingo.repositories.records import (
    CardRecord,
    GameRecord,
    PaymentRecord,
    ProfileRecord,
    utcnow,
)


def _game_record(row: BingoGame) -> GameRecord:
    return GameRecord(
        id=row.id,
        name=row.name,
        max_cards=int(row.max_cards),
        card_price=int(row.card_price),
        status=row.status,
        current_number=int(row.current_number) if row.current_number is not None else None,
        numbers_called=[int(n) for n in (row.numbers_called or [])],
        winner_id=row.winner_id,
        created_at=row.created_at,
        started_at=row.started_at,
        finished_at=row.finished_at,
    )


def _card_record(row: BingoCard) -> CardRecord:
    return CardRecord(
        id=row.id,
        game_id=row.game_id,
        user_id=row.user_id,
        card_number=int(row.card_number),
        numbers=[int(n) for n in row.numbers],
        marked_positions=[bool(m) for m in row.marked_positions],
        is_winner=bool(row.is_winner),
        created_at=row.created_at,
    )


def _payment_record(row: Payment) -> PaymentRecord:
    return PaymentRecord(
        id=row.id,
        user_id=row.user_id,
        game_id=row.game_id,
        amount=int(row.amount),
        status=row.status,
        payment_method=row.payment_method,
        created_at=row.created_at,
        completed_at=row.completed_at,
    )


def _profile_record(row: Profile) -> ProfileRecord:
    return ProfileRecord(
        id=row.id,
        email=row.email,
        display_name=row.display_name,
        credits=int(row.credits),
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


class SqlGameRepository(GameRepository):
    """CRUD operations over the bingo tables.

    Nothing is committed here; the caller owns the transaction (the Flask app
    commits in request teardown and rolls back on error).
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    # Games

    def get_game(self, game_id: str) -> GameRecord | None:
        row = self._session.get(BingoGame, game_id)
        return _game_record(row) if row is not None else None

    def list_games(self, statuses: Iterable[str] | None = None) -> Sequence[GameRecord]:
        stmt = select(BingoGame).order_by(BingoGame.created_at.asc())
        if statuses is not None:
            stmt = stmt.where(BingoGame.status.in_(list(statuses)))
        return [_game_record(row) for row in self._session.scalars(stmt).all()]

    def save_game(self, game: GameRecord) -> GameRecord:
        row = self._session.get(BingoGame, game.id)
        if row is None:
            row = BingoGame(id=game.id, created_at=game.created_at)
            self._session.add(row)

        row.name = game.name
        row.max_cards = game.max_cards
        row.card_price = game.card_price
        row.status = game.status
        row.current_number = game.current_number
        row.numbers_called = list(game.numbers_called)
        row.winner_id = game.winner_id
        row.started_at = game.started_at
        row.finished_at = game.finished_at
        self._session.flush()
        return game

    # Cards

    def count_cards(self, game_id: str) -> int:
        stmt = select(func.count()).select_from(BingoCard).where(BingoCard.game_id == game_id)
        return int(self._session.scalar(stmt) or 0)

    def list_cards(self, game_id: str, user_id: str | None = None) -> Sequence[CardRecord]:
        stmt = select(BingoCard).where(BingoCard.game_id == game_id)
        if user_id is not None:
            stmt = stmt.where(BingoCard.user_id == user_id)
        stmt = stmt.order_by(BingoCard.card_number.asc())
        return [_card_record(row) for row in self._session.scalars(stmt).all()]

    def get_card(self, card_id: str) -> CardRecord | None:
        row = self._session.get(BingoCard, card_id)
        return _card_record(row) if row is not None else None

    def save_card(self, card: CardRecord) -> CardRecord:
        row = self._session.get(BingoCard, card.id)
        if row is None:
            self._session.add(self._new_card_row(card))
        else:
            row.marked_positions = list(card.marked_positions)
            row.is_winner = card.is_winner
        self._session.flush()
        return card

    def set_mark(self, card_id: str, position: int, marked: bool) -> CardRecord | None:
        row = self._session.get(BingoCard, card_id)
        if row is None:
            return None
        marks = [bool(m) for m in row.marked_positions]
        marks[position] = bool(marked)
        row.marked_positions = marks
        self._session.flush()
        return _card_record(row)

    @staticmethod
    def _new_card_row(card: CardRecord) -> BingoCard:
        return BingoCard(
            id=card.id,
            game_id=card.game_id,
            user_id=card.user_id,
            card_number=card.card_number,
            numbers=list(card.numbers),
            marked_positions=list(card.marked_positions),
            is_winner=card.is_winner,
            created_at=card.created_at,
        )

    def delete_cards_for_game(self, game_id: str) -> int:
        # A savepoint keeps a failed delete from aborting the request transaction.
        try:
            with self._session.begin_nested():
                result = self._session.execute(delete(BingoCard).where(BingoCard.game_id == game_id))
        except SQLAlchemyError as exc:
            raise StorageError(message=f"Failed to delete cards for game {game_id}") from exc
        return int(result.rowcount or 0)

    # Payments

    def list_payments(self, game_id: str) -> Sequence[PaymentRecord]:
        stmt = select(Payment).where(Payment.game_id == game_id).order_by(Payment.created_at.asc())
        return [_payment_record(row) for row in self._session.scalars(stmt).all()]

    def delete_payments_for_game(self, game_id: str) -> int:
        try:
            with self._session.begin_nested():
                result = self._session.execute(delete(Payment).where(Payment.game_id == game_id))
        except SQLAlchemyError as exc:
            raise StorageError(message=f"Failed to delete payments for game {game_id}") from exc
        return int(result.rowcount or 0)

    # Profiles

    def get_profile(self, user_id: str) -> ProfileRecord | None:
        row = self._session.get(Profile, user_id)
        return _profile_record(row) if row is not None else None

    def get_profile_by_email(self, email: str) -> ProfileRecord | None:
        row = self._session.scalars(select(Profile).where(Profile.email == email)).first()
        return _profile_record(row) if row is not None else None

    def save_profile(self, profile: ProfileRecord) -> ProfileRecord:
        row = self._session.get(Profile, profile.id)
        if row is None:
            row = Profile(id=profile.id, created_at=profile.created_at)
            self._session.add(row)

        row.email = profile.email
        row.display_name = profile.display_name
        row.credits = profile.credits
        row.updated_at = profile.updated_at
        self._session.flush()
        return profile

    def _reload_profile(self, user_id: str) -> Profile | None:
        stmt = select(Profile).where(Profile.id == user_id).execution_options(populate_existing=True)
        return self._session.scalars(stmt).first()

    def add_credits(self, user_id: str, amount: int) -> ProfileRecord | None:
        self._session.execute(
            update(Profile)
            .where(Profile.id == user_id)
            .values(credits=Profile.credits + int(amount), updated_at=utcnow())
        )
        row = self._reload_profile(user_id)
        return _profile_record(row) if row is not None else None

    def purchase_card(self, card: CardRecord, payment: PaymentRecord) -> ProfileRecord:
        # Conditional debit: the balance check and the decrement are one statement.
        result = self._session.execute(
            update(Profile)
            .where(Profile.id == card.user_id, Profile.credits >= payment.amount)
            .values(credits=Profile.credits - payment.amount, updated_at=utcnow())
        )
        if result.rowcount != 1:
            row = self._reload_profile(card.user_id)
            if row is None:
                raise NotFoundError(message=f"Profile {card.user_id} not found")
            raise InsufficientCreditsError(
                details={"credits": int(row.credits), "required": payment.amount}
            )

        self._session.add(self._new_card_row(card))
        self._session.add(
            Payment(
                id=payment.id,
                user_id=payment.user_id,
                game_id=payment.game_id,
                amount=payment.amount,
                status=payment.status,
                payment_method=payment.payment_method,
                created_at=payment.created_at,
                completed_at=payment.completed_at,
            )
        )
        self._session.flush()

        row = self._reload_profile(card.user_id)
        if row is None:
            raise NotFoundError(message=f"Profile {card.user_id} not found")
        return _profile_record(row)
