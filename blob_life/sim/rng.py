# blob_life/sim/rng.py
import math
import random
from typing import Optional


class RNG:
    """Seedable random source handed to everything that rolls dice."""

    def __init__(self, seed: Optional[int] = None):
        self._rng = random.Random(seed)

    def seed(self, s: int):
        self._rng.seed(s)

    def random(self) -> float:
        return self._rng.random()

    def uniform(self, a: float, b: float) -> float:
        return self._rng.uniform(a, b)

    def chance(self, p: float) -> bool:
        return self._rng.random() < p

    def angle(self) -> float:
        return self._rng.uniform(0.0, 2.0 * math.pi)

    def choice(self, seq):
        return self._rng.choice(seq)

    def randint(self, a: int, b: int) -> int:
        return self._rng.randint(a, b)
