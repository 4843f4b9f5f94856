"""Contract tests run against both storage backends."""

from __future__ import annotations

import pytest
from sqlalchemy.orm import sessionmaker

from bingo.db import create_app_engine
from bingo.errors import InsufficientCreditsError, NotFoundError
from bingo.models.base import Base
from bingo.repositories.memory_repository import InMemoryGameRepository
from bingo.repositories.records import (
    CardRecord,
    GameRecord,
    PaymentRecord,
    PaymentStatus,
    ProfileRecord,
    new_id,
)
from bingo.repositories.sql_repository import SqlGameRepository
from bingo.rng import create_rng
from bingo.services.game_engine import GameEngine


@pytest.fixture(params=["memory", "sql"])
def repository(request, tmp_path):
    if request.param == "memory":
        yield InMemoryGameRepository()
        return

    engine = create_app_engine(f"sqlite:///{(tmp_path / 'repo.db').as_posix()}")
    Base.metadata.create_all(bind=engine)
    session = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)()
    try:
        yield SqlGameRepository(session)
        session.commit()
    finally:
        session.close()
        engine.dispose()


def _profile(repository, credits=100) -> ProfileRecord:
    profile = ProfileRecord(id=new_id(), email=f"{new_id()}@example.com", credits=credits)
    repository.save_profile(profile)
    return profile


def _game(repository, **kwargs) -> GameRecord:
    game = GameRecord(id=new_id(), name="G", max_cards=5, card_price=100, **kwargs)
    repository.save_game(game)
    return game


def _card(game, profile, number=1) -> CardRecord:
    return CardRecord(
        id=new_id(),
        game_id=game.id,
        user_id=profile.id,
        card_number=number,
        numbers=list(range(1, 26)),
    )


def _payment(game, profile, amount=100) -> PaymentRecord:
    return PaymentRecord(
        id=new_id(),
        user_id=profile.id,
        game_id=game.id,
        amount=amount,
        status=PaymentStatus.COMPLETED.value,
    )


def test_game_round_trip_and_update(repository):
    game = _game(repository)

    game.status = "active"
    game.numbers_called = [7, 3]
    game.current_number = 3
    repository.save_game(game)

    stored = repository.get_game(game.id)
    assert stored.status == "active"
    assert stored.numbers_called == [7, 3]
    assert stored.current_number == 3
    assert repository.get_game("missing") is None


def test_returned_records_are_copies(repository):
    game = _game(repository)

    fetched = repository.get_game(game.id)
    fetched.numbers_called.append(9)

    assert repository.get_game(game.id).numbers_called == []


def test_list_games_filters_by_status(repository):
    waiting = _game(repository)
    _game(repository, status="finished")

    assert [g.id for g in repository.list_games(["waiting", "active"])] == [waiting.id]
    assert len(repository.list_games()) == 2


def test_purchase_debits_and_stores(repository):
    profile = _profile(repository, credits=150)
    game = _game(repository)
    card = _card(game, profile)

    updated = repository.purchase_card(card, _payment(game, profile))

    assert updated.credits == 50
    assert repository.get_profile(profile.id).credits == 50
    assert repository.count_cards(game.id) == 1
    assert repository.get_card(card.id).numbers == list(range(1, 26))
    assert len(repository.list_payments(game.id)) == 1


def test_purchase_is_all_or_nothing(repository):
    profile = _profile(repository, credits=99)
    game = _game(repository)

    with pytest.raises(InsufficientCreditsError):
        repository.purchase_card(_card(game, profile), _payment(game, profile))

    assert repository.get_profile(profile.id).credits == 99
    assert repository.count_cards(game.id) == 0
    assert repository.list_payments(game.id) == []


def test_purchase_unknown_profile(repository):
    game = _game(repository)
    ghost = ProfileRecord(id=new_id(), email="ghost@example.com")

    with pytest.raises(NotFoundError):
        repository.purchase_card(_card(game, ghost), _payment(game, ghost))


def test_save_card_updates_marks_and_winner(repository):
    profile = _profile(repository, credits=100)
    game = _game(repository)
    card = _card(game, profile)
    repository.purchase_card(card, _payment(game, profile))

    card.marked_positions[3] = True
    card.is_winner = True
    repository.save_card(card)

    stored = repository.get_card(card.id)
    assert stored.marked_positions[3] is True
    assert stored.is_winner is True


def test_set_mark_leaves_winner_flag_alone(repository):
    profile = _profile(repository, credits=100)
    game = _game(repository)
    card = _card(game, profile)
    repository.purchase_card(card, _payment(game, profile))

    card.is_winner = True
    repository.save_card(card)

    marked = repository.set_mark(card.id, 7, True)
    assert marked.marked_positions[7] is True
    assert marked.is_winner is True

    stored = repository.get_card(card.id)
    assert stored.marked_positions == [i == 7 for i in range(25)]
    assert stored.is_winner is True

    assert repository.set_mark(card.id, 7, False).marked_positions[7] is False
    assert repository.set_mark(new_id(), 0, True) is None


def test_list_cards_orders_and_filters(repository):
    alice = _profile(repository, credits=1000)
    bob = _profile(repository, credits=1000)
    game = _game(repository)
    repository.purchase_card(_card(game, bob, 2), _payment(game, bob))
    repository.purchase_card(_card(game, alice, 1), _payment(game, alice))

    assert [c.card_number for c in repository.list_cards(game.id)] == [1, 2]
    assert [c.user_id for c in repository.list_cards(game.id, user_id=bob.id)] == [bob.id]


def test_delete_cards_and_payments(repository):
    profile = _profile(repository, credits=1000)
    game = _game(repository)
    other = _game(repository)
    repository.purchase_card(_card(game, profile, 1), _payment(game, profile))
    repository.purchase_card(_card(game, profile, 2), _payment(game, profile))
    repository.purchase_card(_card(other, profile, 1), _payment(other, profile))

    assert repository.delete_cards_for_game(game.id) == 2
    assert repository.delete_payments_for_game(game.id) == 2
    assert repository.count_cards(game.id) == 0
    assert repository.count_cards(other.id) == 1
    assert len(repository.list_payments(other.id)) == 1


def test_add_credits(repository):
    profile = _profile(repository, credits=10)

    assert repository.add_credits(profile.id, 5).credits == 15
    assert repository.add_credits("missing", 5) is None


def test_profile_by_email(repository):
    profile = _profile(repository)

    assert repository.get_profile_by_email(profile.email).id == profile.id
    assert repository.get_profile_by_email("nope@example.com") is None


def test_engine_plays_a_full_game(repository):
    engine = GameEngine(repository, rng=create_rng(11))
    players = [_profile(repository, credits=100) for _ in range(3)]
    game = engine.create_game("Backend game", max_cards=3, card_price=100).unwrap()
    for player in players:
        engine.purchase_card(game.id, player.id).unwrap()
    engine.start_game(game.id).unwrap()

    while engine.draw_next_number(game.id).unwrap().status != "finished":
        pass

    finished = repository.get_game(game.id)
    assert finished.winner_id in {p.id for p in players}
    assert any(c.is_winner for c in repository.list_cards(game.id))
    assert all(repository.get_profile(p.id).credits == 0 for p in players)

    engine.reset_game(game.id).unwrap()
    assert repository.get_game(game.id).numbers_called == []
    assert repository.count_cards(game.id) == 0
