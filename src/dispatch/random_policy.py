from __future__ import annotations

from typing import TYPE_CHECKING, Dict, List, Optional

from elevatorsim.elevator import Intent
from elevatorsim.random_source import DrawSource

from .utils import intent_towards

if TYPE_CHECKING:  # pragma: no cover - import cycle safe typing
    from elevatorsim.building import Building


class RandomController:
    """Sends each car to uniformly drawn floors, one target at a time."""

    name = "random"

    def __init__(self) -> None:
        self.targets: Dict[int, Optional[int]] = {}

    def decide(self, building: "Building", rng: DrawSource) -> List[Intent]:
        intents: List[Intent] = []
        for car in building.cars:
            target = self.targets.get(car.index)
            if target is None:
                target = rng.uniform_floor(building.num_floors)
                self.targets[car.index] = target
            intent = intent_towards(car.current_floor, target)
            if intent is Intent.STOP:
                self.targets[car.index] = None
            intents.append(intent)
        return intents
