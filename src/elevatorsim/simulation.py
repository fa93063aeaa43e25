from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, Dict, List, Optional

from .building import Building
from .config import SimulationConfig
from .random_source import DrawSource, RandomSource
from .snapshot import StepSnapshot

if TYPE_CHECKING:  # pragma: no cover - import cycle safe typing
    from dispatch import DispatchController

logger = logging.getLogger(__name__)


class Simulation:
    """Time-stepped building simulation for analytics and UI consumption."""

    def __init__(
        self,
        building: Building,
        controller: "DispatchController",
        rng: DrawSource,
        steps: int = 100,
    ) -> None:
        self.building = building
        self.controller = controller
        self.rng = rng
        self.steps = steps
        self.current_step: int = 0
        self.event_hooks: Dict[str, List[Callable[[object], None]]] = {}

    @classmethod
    def from_config(cls, config: SimulationConfig) -> "Simulation":
        from dispatch import get_controller

        return cls(
            building=Building.from_config(config),
            controller=get_controller(config.controller),
            rng=RandomSource(config.seed),
            steps=config.steps,
        )

    def run(self, steps: Optional[int] = None) -> List[StepSnapshot]:
        duration = self.steps if steps is None else steps
        logger.info(
            "running %d step(s): %d floor(s), %d car(s), controller=%s",
            duration,
            self.building.num_floors,
            len(self.building.cars),
            self.controller.name,
        )
        snapshots = [self.step() for _ in range(duration)]
        logger.info(
            "finished at step %d: avg wait %.2f, avg energy %.2f",
            self.current_step,
            self.building.avg_wait_time,
            self.building.avg_energy,
        )
        return snapshots

    def step(self) -> StepSnapshot:
        report = self.building.step(self.controller, self.rng, self.current_step)
        if report.arrivals:
            self._emit("arrival", {"step": self.current_step, "count": report.arrivals})
        if report.egressed:
            self._emit("egress", {"step": self.current_step, "count": report.egressed})
        snapshot = self.building.snapshot(self.current_step)
        self.current_step += 1
        self._emit("step", snapshot)
        return snapshot

    def snapshot(self) -> StepSnapshot:
        return self.building.snapshot(self.current_step)

    def on_event(self, event: str, callback: Callable[[object], None]) -> None:
        self.event_hooks.setdefault(event, []).append(callback)

    def _emit(self, event: str, payload: object) -> None:
        for callback in self.event_hooks.get(event, []):
            callback(payload)
