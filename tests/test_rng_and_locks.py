from __future__ import annotations

import threading

import pytest

from bingo.locks import GameLocks
from bingo.rng import create_rng


def test_seeded_sources_agree():
    a = create_rng(12345)
    b = create_rng(12345)
    assert [a.index(75) for _ in range(20)] == [b.index(75) for _ in range(20)]


def test_index_bounds():
    rng = create_rng(1)
    values = {rng.index(3) for _ in range(200)}
    assert values == {0, 1, 2}
    with pytest.raises(ValueError):
        rng.index(0)


def test_pop_shrinks_pool_without_repeats():
    rng = create_rng(5)
    pool = list(range(10))
    taken = [rng.pop(pool) for _ in range(10)]
    assert pool == []
    assert sorted(taken) == list(range(10))


def test_game_locks_are_per_game():
    locks = GameLocks()

    assert locks.for_game("a") is locks.for_game("a")
    assert locks.for_game("a") is not locks.for_game("b")
    assert len(locks) == 2


def test_game_lock_serializes_writers():
    locks = GameLocks()
    counter = {"value": 0}

    def bump():
        for _ in range(1000):
            with locks.for_game("g"):
                current = counter["value"]
                counter["value"] = current + 1

    threads = [threading.Thread(target=bump) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert counter["value"] == 4000
