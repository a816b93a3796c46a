"""Seeded pseudorandom stream driving every generation decision."""

import math
from typing import Sequence, TypeVar

T = TypeVar("T")

# Numerical Recipes LCG constants
LCG_MULTIPLIER = 1664525
LCG_INCREMENT = 1013904223
LCG_MODULUS = 2**32


class SeededRandom:
    """32-bit linear congruential generator.

    The same seed yields the same draw sequence on every platform, which is
    what lets a saved world store only its seed and compressed tiles.
    """

    def __init__(self, seed: int):
        self.seed = seed
        self.state = seed

    def next(self) -> float:
        """Advance the state and return a float in [0, 1)."""
        self.state = (self.state * LCG_MULTIPLIER + LCG_INCREMENT) % LCG_MODULUS
        return self.state / LCG_MODULUS

    def next_int(self, min_value: int, max_value: int) -> int:
        """Uniform integer in [min_value, max_value], both inclusive."""
        return math.floor(self.next() * (max_value - min_value + 1)) + min_value

    def next_float(self, min_value: float = 0.0, max_value: float = 1.0) -> float:
        return self.next() * (max_value - min_value) + min_value

    def next_bool(self, probability: float = 0.5) -> bool:
        return self.next() < probability

    def choice(self, items: Sequence[T]) -> T:
        """Uniformly pick one element.

        Raises:
            IndexError: If items is empty.
        """
        if not items:
            raise IndexError("Cannot choose from an empty sequence")
        return items[self.next_int(0, len(items) - 1)]

    def reset(self) -> None:
        """Restart the stream from the original seed."""
        self.state = self.seed
