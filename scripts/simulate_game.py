"""Play one bingo game end to end against the in-memory repository.

Usage:
  python scripts/simulate_game.py --players 4 --seed 7
"""

from __future__ import annotations

import argparse
import pathlib
import sys

PROJECT_ROOT = pathlib.Path(__file__).resolve().parents[1]
sys.path.insert(0, str(PROJECT_ROOT))

from bingo.repositories.memory_repository import InMemoryGameRepository
from bingo.rng import create_rng
from bingo.services.game_engine import GameEngine
from bingo.services.profile_service import ProfileService


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"{value!r} is not an integer") from None
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--players", type=_positive_int, default=4)
    parser.add_argument("--seed", type=int, default=None)
    args = parser.parse_args(argv)

    repo = InMemoryGameRepository()
    engine = GameEngine(repo, rng=create_rng(args.seed))
    profiles = ProfileService(repo, starting_credits=1000)

    game = engine.create_game("Simulation", max_cards=args.players, card_price=100).unwrap()
    for i in range(args.players):
        player = profiles.register(f"player{i + 1}@example.com", display_name=f"Player {i + 1}").unwrap()
        engine.purchase_card(game.id, player.id).unwrap()

    engine.start_game(game.id).unwrap()
    while True:
        outcome = engine.draw_next_number(game.id).unwrap()
        if outcome.winners:
            break

    for winner in outcome.winners:
        print(f"Card #{winner.card_number} wins after {len(outcome.numbers_called)} draws")
    print(f"Called: {' '.join(str(n) for n in outcome.numbers_called)}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
