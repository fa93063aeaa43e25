from __future__ import annotations

from typing import List

from .container import OccupantContainer
from .occupant import Occupant
from .random_source import DrawSource


class Floor(OccupantContainer):
    """A building level holding the occupants standing on it."""

    def __init__(self, index: int) -> None:
        super().__init__()
        self._index = index
        self.destination_probability: float = 0.0

    @property
    def index(self) -> int:
        return self._index

    def __repr__(self) -> str:
        return f"Floor({self._index}, occupants={len(self.occupants)})"

    def is_waiting_occupied(self) -> bool:
        return self.are_people_waiting()

    def composite_departure_probability(self) -> float:
        """Probability that at least one occupant here decides to leave."""
        if not self.occupants:
            return 0.0
        stay = 1.0
        for occupant in self.occupants:
            stay *= 1.0 - occupant.departure_probability
        return min(1.0, max(0.0, 1.0 - stay))

    def generate_departures(self, rng: DrawSource) -> int:
        # Sorted so the draw order does not depend on set iteration order.
        decided = 0
        for occupant in sorted(self.occupants, key=lambda o: o.occupant_id):
            if occupant.waiting:
                continue
            if occupant.sample_departure(rng):
                decided += 1
        return decided

    def drain_boarding(self) -> List[Occupant]:
        return self._remove(self.waiting_occupants())

    def drain_egress(self) -> List[Occupant]:
        return self._remove([o for o in self.occupants if o.leaving])
