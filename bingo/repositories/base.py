"""Storage interface the services are written against."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Sequence

from bingo.repositories.records import CardRecord, GameRecord, PaymentRecord, ProfileRecord


class GameRepository(ABC):
    """Load/save/delete operations for games, cards, payments and profiles.

    Implementations return copies: mutating a returned record has no effect
    until it is passed back to a ``save_*`` method.
    """

    # Games

    @abstractmethod
    def get_game(self, game_id: str) -> GameRecord | None: ...

    @abstractmethod
    def list_games(self, statuses: Iterable[str] | None = None) -> Sequence[GameRecord]: ...

    @abstractmethod
    def save_game(self, game: GameRecord) -> GameRecord: ...

    # Cards

    @abstractmethod
    def count_cards(self, game_id: str) -> int: ...

    @abstractmethod
    def list_cards(self, game_id: str, user_id: str | None = None) -> Sequence[CardRecord]:
        """Cards of a game ordered by ``card_number``."""

    @abstractmethod
    def get_card(self, card_id: str) -> CardRecord | None: ...

    @abstractmethod
    def save_card(self, card: CardRecord) -> CardRecord: ...

    def save_cards(self, cards: Iterable[CardRecord]) -> None:
        for card in cards:
            self.save_card(card)

    @abstractmethod
    def set_mark(self, card_id: str, position: int, marked: bool) -> CardRecord | None:
        """Flip one explicit mark; every other field of the card is left as stored."""

    @abstractmethod
    def delete_cards_for_game(self, game_id: str) -> int: ...

    # Payments

    @abstractmethod
    def list_payments(self, game_id: str) -> Sequence[PaymentRecord]: ...

    @abstractmethod
    def delete_payments_for_game(self, game_id: str) -> int: ...

    # Profiles

    @abstractmethod
    def get_profile(self, user_id: str) -> ProfileRecord | None: ...

    @abstractmethod
    def get_profile_by_email(self, email: str) -> ProfileRecord | None: ...

    @abstractmethod
    def save_profile(self, profile: ProfileRecord) -> ProfileRecord: ...

    @abstractmethod
    def add_credits(self, user_id: str, amount: int) -> ProfileRecord | None:
        """Increase a balance; returns the updated profile or None if missing."""

    @abstractmethod
    def purchase_card(self, card: CardRecord, payment: PaymentRecord) -> ProfileRecord:
        """Debit ``payment.amount`` from the card owner and store card + payment.

        All three effects apply together or not at all. Raises
        ``NotFoundError`` for an unknown owner and ``InsufficientCreditsError``
        when the balance does not cover the amount.
        """
