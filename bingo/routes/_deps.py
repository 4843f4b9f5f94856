"""Per-request construction of services from app-level state."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from flask import current_app

from bingo.db import get_db_backend, get_repository, get_session
from bingo.services.game_engine import GameEngine
from bingo.services.profile_service import ProfileService


def game_engine() -> GameEngine:
    return GameEngine(
        get_repository(),
        rng=current_app.extensions["rng"],
        default_max_cards=int(current_app.config["DEFAULT_MAX_CARDS"]),
        default_card_price=int(current_app.config["DEFAULT_CARD_PRICE"]),
    )


def profile_service() -> ProfileService:
    return ProfileService(
        get_repository(),
        starting_credits=int(current_app.config["STARTING_CREDITS"]),
    )


@contextmanager
def locked_game(game_id: str) -> Iterator[None]:
    """Hold the game's lock; SQL changes are committed before it is released.

    Unknown ids get no lock (the engine reports them as not found), so the
    lock registry only ever holds games that exist.
    """

    exists = get_repository().get_game(game_id) is not None
    if get_db_backend() == "sql":
        # End the lookup transaction so no database lock is held while waiting.
        get_session().commit()
    if not exists:
        yield
        return

    with current_app.extensions["game_locks"].for_game(game_id):
        yield
        if get_db_backend() == "sql":
            get_session().commit()


@contextmanager
def locked_card(card_id: str) -> Iterator[None]:
    """Hold the lock of the game the card belongs to."""

    card = get_repository().get_card(card_id)
    if card is None:
        yield
        return

    with locked_game(card.game_id):
        yield
