"""Per-game mutual exclusion for callers that advance a game."""

from __future__ import annotations

from threading import Lock


class GameLocks:
    """Hands out one lock per game id.

    The engine assumes a single writer per game; request handlers take the
    game's lock around start/draw/reset/purchase and card marking to
    provide it. Callers only request locks for games that exist.
    """

    def __init__(self) -> None:
        self._guard = Lock()
        self._locks: dict[str, Lock] = {}

    def for_game(self, game_id: str) -> Lock:
        with self._guard:
            lock = self._locks.get(game_id)
            if lock is None:
                lock = Lock()
                self._locks[game_id] = lock
            return lock

    def __contains__(self, game_id: object) -> bool:
        with self._guard:
            return game_id in self._locks

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)
