"""Injectable random source for every roll the combat engine makes."""
from __future__ import annotations

from random import Random
from typing import Sequence, TypeVar

T_co = TypeVar("T_co")


class RNG:
    """Wrapper around random.Random exposing the rolls combat needs.

    Pass a seed for reproducible battles in tests; omit it for the
    uncontrolled randomness the game uses in play.
    """

    def __init__(self, seed: int | None = None) -> None:
        self._random = Random(seed)

    def randint(self, a: int, b: int) -> int:
        """Return a random integer N such that a <= N <= b."""
        return self._random.randint(a, b)

    def random(self) -> float:
        """Return the next random floating point number in the range [0.0, 1.0)."""
        return self._random.random()

    def choice(self, seq: Sequence[T_co]) -> T_co:
        """Return a random element from the non-empty sequence."""
        if not seq:
            raise ValueError("Cannot choose from an empty sequence.")
        return self._random.choice(seq)

    def roll(self, chance: float) -> bool:
        """Return True with probability ``chance`` (0.0 - 1.0)."""
        return self.random() < chance

    def roll_percent(self, chance: float) -> bool:
        """Return True with probability ``chance`` expressed in percent (0 - 100)."""
        return self.random() * 100 < chance
