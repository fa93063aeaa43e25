from __future__ import annotations

from typing import TYPE_CHECKING, List

from elevatorsim.elevator import Direction, ElevatorCar, Intent
from elevatorsim.random_source import DrawSource

from .utils import intent_towards

if TYPE_CHECKING:  # pragma: no cover - import cycle safe typing
    from elevatorsim.building import Building


class NearestController:
    """Greedy policy: nearest rider destination first, then nearest waiting floor.

    Moving cars stop wherever someone is waiting or a rider wants off. Each
    car decides on its own, so two idle cars may chase the same floor, and a
    car kept busy by riders can leave distant waiting floors unserved.
    """

    name = "nearest"

    def decide(self, building: "Building", rng: DrawSource) -> List[Intent]:
        return [
            self._decide_stopped(building, car) if car.stopped else self._decide_moving(building, car)
            for car in building.cars
        ]

    def _decide_stopped(self, building: "Building", car: ElevatorCar) -> Intent:
        target = car.nearest_ride_target()
        if target is None:
            target = building.nearest_waiting_floor(car.current_floor)
        if target is None:
            return Intent.STOP
        return intent_towards(car.current_floor, target)

    def _decide_moving(self, building: "Building", car: ElevatorCar) -> Intent:
        if car.at_boundary():
            return Intent.STOP
        if building.are_people_waiting_on_floor(car.current_floor):
            return Intent.STOP
        if car.is_anyone_riding_to(car.current_floor):
            return Intent.STOP
        return Intent.UP if car.direction is Direction.UP else Intent.DOWN
