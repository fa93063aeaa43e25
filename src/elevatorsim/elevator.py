from __future__ import annotations

from enum import Enum, IntEnum
from typing import Iterable, List, Optional

from .container import OccupantContainer
from .occupant import Occupant


class Direction(str, Enum):
    UP = "up"
    DOWN = "down"


class Intent(IntEnum):
    """Directional decision a controller makes for one car in one step."""

    DOWN = -1
    STOP = 0
    UP = 1


class ElevatorCar(OccupantContainer):
    """A car moving one floor per step, carrying the occupants aboard it."""

    def __init__(
        self,
        index: int,
        num_floors: int,
        energy_up: float,
        energy_down: float,
        energy_per_occupant: float,
        current_floor: int = 0,
    ) -> None:
        super().__init__()
        self.index = index
        self.num_floors = num_floors
        self.energy_up = energy_up
        self.energy_down = energy_down
        self.energy_per_occupant = energy_per_occupant
        self.current_floor = current_floor
        self.direction = Direction.UP
        self.stopped = True

    def __repr__(self) -> str:
        return (
            f"ElevatorCar({self.index}, floor={self.current_floor}, "
            f"stopped={self.stopped}, direction={self.direction.value}, "
            f"occupants={len(self.occupants)})"
        )

    @property
    def top_floor(self) -> int:
        return self.num_floors - 1

    def at_boundary(self) -> bool:
        """True when one more floor in the travel direction would leave the shaft."""
        if self.direction is Direction.UP:
            return self.current_floor >= self.top_floor
        return self.current_floor <= 0

    def energy_spent(self) -> float:
        if self.stopped:
            return 0.0
        base = self.energy_up if self.direction is Direction.UP else self.energy_down
        return base + self.energy_per_occupant * len(self.occupants)

    def nearest_ride_target(self) -> Optional[int]:
        """Closest rider destination; equal distances resolve to the lower floor."""
        if not self.occupants:
            return None
        return min(
            self.destination_floors(),
            key=lambda floor: (abs(floor - self.current_floor), floor),
        )

    def is_anyone_riding_to(self, floor_index: int) -> bool:
        return self.is_anyone_going_to(floor_index)

    def apply(self, intent: Intent) -> None:
        if intent is Intent.STOP:
            self.stopped = True
            return
        self.stopped = False
        self.direction = Direction.UP if intent is Intent.UP else Direction.DOWN

    def advance_one_floor(self) -> int:
        if self.stopped:
            return self.current_floor
        if self.at_boundary():
            self.stopped = True
            return self.current_floor
        step = 1 if self.direction is Direction.UP else -1
        self.current_floor += step
        for occupant in self.occupants:
            occupant.current_floor = self.current_floor
        return self.current_floor

    def board(self, occupants: Iterable[Occupant]) -> List[Occupant]:
        boarding = list(occupants)
        self.absorb(boarding)
        for occupant in boarding:
            occupant.board()
        return boarding

    def alight(self) -> List[Occupant]:
        arrived = [o for o in list(self.occupants) if o.destination_floor == self.current_floor]
        return self._remove(arrived)
