from __future__ import annotations

from collections import deque
from typing import Iterable

from elevatorsim import Occupant


class ScriptedRandom:
    """Draw source replaying queued answers; empty queues fall back to quiet defaults."""

    def __init__(
        self,
        floors: Iterable[int] = (),
        bernoullis: Iterable[bool] = (),
        arrivals: Iterable[int] = (),
    ) -> None:
        self.floors = deque(floors)
        self.bernoullis = deque(bernoullis)
        self.arrivals = deque(arrivals)

    def uniform_floor(self, num_floors: int) -> int:
        return self.floors.popleft() if self.floors else 0

    def bernoulli(self, p: float) -> bool:
        return self.bernoullis.popleft() if self.bernoullis else False

    def poisson(self, lam: float) -> int:
        return self.arrivals.popleft() if self.arrivals else 0

    def repeated_bernoulli(self, p: float) -> int:
        return self.arrivals.popleft() if self.arrivals else 0


def make_occupant(current_floor: int, destination_floor: int, occupant_id: int = 0, p: float = 0.05) -> Occupant:
    return Occupant(
        current_floor=current_floor,
        destination_floor=destination_floor,
        departure_probability=p,
        occupant_id=occupant_id,
    )


