"""Win detection over a card's effectively marked cells."""

from __future__ import annotations

from collections.abc import Collection, Sequence

from bingo.repositories.records import FREE_CELL, GRID_SIZE

Line = tuple[int, ...]

ROWS: tuple[Line, ...] = tuple(
    tuple(row * GRID_SIZE + col for col in range(GRID_SIZE)) for row in range(GRID_SIZE)
)
COLUMNS: tuple[Line, ...] = tuple(
    tuple(row * GRID_SIZE + col for row in range(GRID_SIZE)) for col in range(GRID_SIZE)
)
MAIN_DIAGONAL: Line = tuple(i * GRID_SIZE + i for i in range(GRID_SIZE))
ANTI_DIAGONAL: Line = tuple(i * GRID_SIZE + (GRID_SIZE - 1 - i) for i in range(GRID_SIZE))

WINNING_LINES: tuple[Line, ...] = (*ROWS, *COLUMNS, MAIN_DIAGONAL, ANTI_DIAGONAL)


def effective_marks(
    numbers: Sequence[int],
    marked_positions: Sequence[bool],
    numbers_called: Collection[int],
) -> list[bool]:
    """A cell counts as marked if flagged, free, or its number was called."""

    called = set(numbers_called)
    marks: list[bool] = []
    for index, number in enumerate(numbers):
        explicit = bool(marked_positions[index]) if index < len(marked_positions) else False
        marks.append(explicit or number == FREE_CELL or number in called)
    return marks


def winning_lines(
    numbers: Sequence[int],
    marked_positions: Sequence[bool],
    numbers_called: Collection[int],
) -> list[Line]:
    marks = effective_marks(numbers, marked_positions, numbers_called)
    return [line for line in WINNING_LINES if all(marks[i] for i in line)]


def is_winning_card(
    numbers: Sequence[int],
    marked_positions: Sequence[bool],
    numbers_called: Collection[int],
) -> bool:
    return bool(winning_lines(numbers, marked_positions, numbers_called))
