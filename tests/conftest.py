from __future__ import annotations

import pytest

from bingo import create_app
from bingo.repositories.memory_repository import InMemoryGameRepository
from bingo.rng import create_rng
from bingo.services.game_engine import GameEngine
from bingo.services.profile_service import ProfileService


@pytest.fixture
def repo():
    return InMemoryGameRepository()


@pytest.fixture
def engine(repo):
    return GameEngine(repo, rng=create_rng(42), default_max_cards=10, default_card_price=100)


@pytest.fixture
def profiles(repo):
    return ProfileService(repo, starting_credits=0)


@pytest.fixture
def funded_player(profiles):
    """Factory: register a player holding ``credits``."""

    counter = iter(range(1, 10_000))

    def _make(credits: int = 1000):
        player = profiles.register(f"player{next(counter)}@example.com").unwrap()
        if credits:
            player = profiles.add_credits(player.id, credits).unwrap()
        return player

    return _make


@pytest.fixture
def app():
    app = create_app({"TESTING": True, "DB_BACKEND": "memory", "RNG_SEED": 1234, "STARTING_CREDITS": 0})
    yield app


@pytest.fixture
def sql_app(tmp_path):
    db_file = tmp_path / "bingo.db"
    app = create_app(
        {
            "TESTING": True,
            "DB_BACKEND": "sql",
            "DATABASE_URL": f"sqlite:///{db_file.as_posix()}",
            "RNG_SEED": 1234,
            "STARTING_CREDITS": 0,
        }
    )
    yield app
    app.extensions["engine"].dispose()


@pytest.fixture(params=["memory", "sql"])
def any_client(request, app, sql_app):
    """Test client for each storage backend."""

    target = app if request.param == "memory" else sql_app
    return target.test_client()


@pytest.fixture
def client(app):
    return app.test_client()
