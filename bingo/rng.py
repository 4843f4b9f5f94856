"""Seedable randomness shared by card generation and number draws."""

from __future__ import annotations

import random
from typing import MutableSequence, Sequence, TypeVar

T = TypeVar("T")


class RandomSource:
    """Uniform random choices over indices, backed by ``random.Random``.

    ``randrange`` draws by rejection on random bits, so every index of a
    sequence is equally likely regardless of its length.
    """

    def __init__(self, seed: int | None = None) -> None:
        self.seed = seed
        self._rng = random.Random(seed)

    def index(self, length: int) -> int:
        if length <= 0:
            raise ValueError("length must be positive")
        return self._rng.randrange(length)

    def choice(self, seq: Sequence[T]) -> T:
        return seq[self.index(len(seq))]

    def pop(self, pool: MutableSequence[T]) -> T:
        """Remove and return a uniformly chosen element of ``pool``."""

        return pool.pop(self.index(len(pool)))


def create_rng(seed: int | None = None) -> RandomSource:
    return RandomSource(seed)
