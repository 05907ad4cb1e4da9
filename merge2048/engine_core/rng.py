"""
Game RNG - Seedable random source for tile spawns.

Each Game owns its own GameRng so concurrent games never share
random state. Cloning a GameRng copies its internal state, which keeps
search simulations reproducible.
"""

from __future__ import annotations
import random
from typing import Sequence, TypeVar

T = TypeVar("T")

TWO_PROBABILITY = 0.9


class GameRng:
    """
    Random source with optional seed.

    Usage:
        rng = GameRng(seed=42)
        index = rng.gen_range(len(empty_positions))
        value = rng.gen_tile_value()  # 2 (90%) or 4 (10%)
    """

    def __init__(self, seed: int | None = None):
        self._seed = seed
        self._random = random.Random(seed)

    @property
    def seed(self) -> int | None:
        """The seed this generator was created with (None if from entropy)."""
        return self._seed

    def gen_range(self, upper: int) -> int:
        """Uniform integer in [0, upper). Returns 0 when upper is 0."""
        if upper <= 0:
            return 0
        return self._random.randrange(upper)

    def gen_bool(self, probability: float) -> bool:
        return self._random.random() < probability

    def gen_tile_value(self) -> int:
        """2 with probability 0.9, otherwise 4."""
        return 2 if self.gen_bool(TWO_PROBABILITY) else 4

    def sample(self, population: Sequence[T], k: int) -> list[T]:
        """Choose k distinct items (k is clamped to the population size)."""
        return self._random.sample(list(population), min(k, len(population)))

    def clone(self) -> GameRng:
        rng = GameRng.__new__(GameRng)
        rng._seed = self._seed
        rng._random = random.Random()
        rng._random.setstate(self._random.getstate())
        return rng
