"""ORM models."""

from bingo.models.card import BingoCard
from bingo.models.game import BingoGame
from bingo.models.payment import Payment
from bingo.models.profile import Profile

__all__ = ["BingoCard", "BingoGame", "Payment", "Profile"]
