from __future__ import annotations

from typing import Iterable, Iterator, List, Set

from .errors import InvariantViolation
from .occupant import Occupant


class OccupantContainer:
    """Occupant set shared by floors and cars.

    Transfers are move-only: ``absorb`` refuses an occupant that is already
    here and ``_remove`` refuses one that is not.
    """

    def __init__(self) -> None:
        self.occupants: Set[Occupant] = set()

    def __len__(self) -> int:
        return len(self.occupants)

    def __iter__(self) -> Iterator[Occupant]:
        return iter(self.occupants)

    def __contains__(self, occupant: object) -> bool:
        return occupant in self.occupants

    @property
    def occupant_count(self) -> int:
        return len(self.occupants)

    def absorb(self, occupants: Iterable[Occupant]) -> None:
        for occupant in occupants:
            if occupant in self.occupants:
                raise InvariantViolation(
                    f"occupant {occupant.occupant_id} is already held by {self!r}"
                )
            self.occupants.add(occupant)

    def waiting_occupants(self) -> List[Occupant]:
        return [o for o in self.occupants if o.waiting]

    def num_waiting(self) -> int:
        return sum(1 for o in self.occupants if o.waiting)

    def are_people_waiting(self) -> bool:
        return any(o.waiting for o in self.occupants)

    def aggregate_wait_time(self) -> int:
        return sum(o.wait_time for o in self.occupants)

    def destination_floors(self) -> Set[int]:
        return {o.destination_floor for o in self.occupants}

    def is_anyone_going_to(self, floor_index: int) -> bool:
        return any(o.destination_floor == floor_index for o in self.occupants)

    def tick_waiting(self) -> int:
        waiting = self.waiting_occupants()
        for occupant in waiting:
            occupant.tick()
        return len(waiting)

    def _remove(self, occupants: Iterable[Occupant]) -> List[Occupant]:
        removed = list(occupants)
        for occupant in removed:
            if occupant not in self.occupants:
                raise InvariantViolation(
                    f"occupant {occupant.occupant_id} is not held by {self!r}"
                )
            self.occupants.remove(occupant)
        return removed
