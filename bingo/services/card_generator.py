"""Random 5x5 card layouts with column-banded numbers and a free center cell."""

from __future__ import annotations

from bingo.repositories.records import (
    CELL_COUNT,
    FREE_CELL,
    GRID_SIZE,
    CardRecord,
    new_id,
)
from bingo.rng import RandomSource

COLUMN_LETTERS = ("B", "I", "N", "G", "O")
BAND_WIDTH = 15
CENTER = GRID_SIZE // 2


def column_band(letter: str) -> tuple[int, int]:
    """Inclusive number range for a column letter (B=1..15 ... O=61..75).

    An unknown letter falls back to the whole 1..75 range.
    """

    try:
        col = COLUMN_LETTERS.index(letter.upper())
    except ValueError:
        return 1, BAND_WIDTH * GRID_SIZE
    lo = col * BAND_WIDTH + 1
    return lo, lo + BAND_WIDTH - 1


def column_letter(position: int) -> str:
    return COLUMN_LETTERS[position % GRID_SIZE]


def _sample_band(rng: RandomSource, lo: int, hi: int, count: int) -> list[int]:
    pool = list(range(lo, hi + 1))
    return [rng.pop(pool) for _ in range(count)]


def generate_card_numbers(rng: RandomSource) -> list[int]:
    """Build the 25 row-major cell values of a new card.

    Column ``c`` holds distinct values from its 15-number band; the N column
    only gets four because its middle row is the free cell (0).
    """

    columns: list[list[int]] = []
    for col, letter in enumerate(COLUMN_LETTERS):
        lo, hi = column_band(letter)
        count = GRID_SIZE - 1 if col == CENTER else GRID_SIZE
        values = _sample_band(rng, lo, hi, count)
        if col == CENTER:
            values.insert(CENTER, FREE_CELL)
        columns.append(values)

    return [columns[col][row] for row in range(GRID_SIZE) for col in range(GRID_SIZE)]


def generate_card(rng: RandomSource, *, game_id: str, user_id: str, card_number: int) -> CardRecord:
    return CardRecord(
        id=new_id(),
        game_id=game_id,
        user_id=user_id,
        card_number=card_number,
        numbers=generate_card_numbers(rng),
        marked_positions=[False] * CELL_COUNT,
        is_winner=False,
    )
