from __future__ import annotations

import math
import random
from typing import Optional, Protocol

POISSON_CHUNK = 250.0


class DrawSource(Protocol):
    """Draws consumed by the simulation core.

    Every sampling call in a run goes through one instance, in a fixed order,
    so the seed alone determines the run.
    """

    def uniform_floor(self, num_floors: int) -> int:
        ...

    def bernoulli(self, p: float) -> bool:
        ...

    def poisson(self, lam: float) -> int:
        ...

    def repeated_bernoulli(self, p: float) -> int:
        ...


class RandomSource:
    """Seeded draw source backed by a private ``random.Random`` stream."""

    def __init__(self, seed: Optional[int] = None) -> None:
        self.seed = seed
        self.random = random.Random(seed)

    def uniform_floor(self, num_floors: int) -> int:
        return self.random.randrange(num_floors)

    def bernoulli(self, p: float) -> bool:
        if p <= 0:
            return False
        return self.random.random() < p

    def poisson(self, lam: float) -> int:
        """Poisson(lam) draw.

        Large rates are split into chunks of at most ``POISSON_CHUNK`` and the
        chunk draws summed, which keeps ``exp(-chunk)`` far from underflow.
        """
        if lam <= 0:
            return 0
        total = 0
        while lam > POISSON_CHUNK:
            total += self._poisson_small(POISSON_CHUNK)
            lam -= POISSON_CHUNK
        return total + self._poisson_small(lam)

    def _poisson_small(self, lam: float) -> int:
        L = math.exp(-lam)
        k = 0
        p = 1.0
        while p > L:
            k += 1
            p *= self.random.random()
        return k - 1

    def repeated_bernoulli(self, p: float) -> int:
        """Count successes before the first failed Bernoulli(p) trial."""
        count = 0
        while self.bernoulli(p):
            count += 1
        return count
