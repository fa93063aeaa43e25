from __future__ import annotations

import logging
import math
from collections import Counter
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Optional, Set, Tuple

from .config import (
    DEFAULT_DEPARTURE_PROBABILITY,
    CarSettings,
    SimulationConfig,
)
from .elevator import ElevatorCar, Intent
from .errors import ConfigurationError, InvariantViolation
from .floor import Floor
from .occupant import Occupant
from .random_source import DrawSource
from .snapshot import CarSnapshot, FloorSnapshot, StepSnapshot

if TYPE_CHECKING:  # pragma: no cover - import cycle safe typing
    from dispatch import DispatchController

logger = logging.getLogger(__name__)

ARRIVAL_MODELS = ("poisson", "bernoulli")


@dataclass
class StepReport:
    """Counts produced by one pass through the step phases."""

    arrivals: int = 0
    departures: int = 0
    boarded: int = 0
    alighted: int = 0
    egressed: int = 0
    energy: float = 0.0


@dataclass
class Building:
    """Owns the floors, the cars and the running statistics of one run.

    ``step`` advances the whole building by one time step. The phase order is
    fixed: arrivals, departures, exchange, dispatch, metering, bookkeeping.
    Later phases read state the earlier ones produced in the same step.
    """

    num_floors: int
    num_cars: int = 1
    arrival_rate: float = 0.5
    arrival_model: Optional[str] = None
    departure_probability: float = DEFAULT_DEPARTURE_PROBABILITY
    car_settings: List[CarSettings] = field(default_factory=list)
    floors: List[Floor] = field(init=False)
    cars: List[ElevatorCar] = field(init=False)
    avg_wait_time: float = field(init=False, default=0.0)
    avg_energy: float = field(init=False, default=0.0)
    wait_time_count: int = field(init=False, default=0)
    population: int = field(init=False, default=0)
    _next_occupant_id: int = field(init=False, default=0)

    def __post_init__(self) -> None:
        if self.arrival_model is None:
            self.arrival_model = "bernoulli" if self.num_cars == 1 else "poisson"
        self._validate()
        settings = list(self.car_settings[: self.num_cars])
        while len(settings) < self.num_cars:
            settings.append(CarSettings())
        self.car_settings = settings
        self.floors = [Floor(i) for i in range(self.num_floors)]
        self.cars = [
            ElevatorCar(
                index=i,
                num_floors=self.num_floors,
                energy_up=s.energy_up,
                energy_down=s.energy_down,
                energy_per_occupant=s.energy_per_occupant,
            )
            for i, s in enumerate(settings)
        ]

    @classmethod
    def from_config(cls, config: SimulationConfig) -> "Building":
        return cls(
            num_floors=config.num_floors,
            num_cars=config.num_cars,
            arrival_rate=config.arrival_rate,
            arrival_model=config.resolved_arrival_model(),
            departure_probability=config.departure_probability,
            car_settings=config.car_settings(),
        )

    def _validate(self) -> None:
        if self.num_floors < 1:
            raise ConfigurationError(f"a building needs at least one floor, got {self.num_floors}")
        if self.num_cars < 1:
            raise ConfigurationError(f"a building needs at least one car, got {self.num_cars}")
        if not 0.0 <= self.departure_probability <= 1.0:
            raise ConfigurationError(
                f"departure probability must lie in [0, 1], got {self.departure_probability}"
            )
        if self.arrival_model not in ARRIVAL_MODELS:
            raise ConfigurationError(
                f"Unknown arrival model '{self.arrival_model}'. Available: {', '.join(ARRIVAL_MODELS)}"
            )
        if not math.isfinite(self.arrival_rate):
            raise ConfigurationError(f"arrival rate must be finite, got {self.arrival_rate}")
        if self.arrival_model == "poisson" and self.arrival_rate <= 0:
            raise ConfigurationError(f"Poisson arrival rate must be positive, got {self.arrival_rate}")
        if self.arrival_model == "bernoulli" and not 0.0 <= self.arrival_rate < 1.0:
            raise ConfigurationError(
                f"Bernoulli arrival probability must lie in [0, 1), got {self.arrival_rate}"
            )
        for settings in self.car_settings:
            coefficients = (settings.energy_up, settings.energy_down, settings.energy_per_occupant)
            if any(c < 0 for c in coefficients):
                raise ConfigurationError(f"energy coefficients must be non-negative, got {coefficients}")

    @property
    def ground_floor(self) -> Floor:
        return self.floors[0]

    @property
    def top_floor(self) -> int:
        return self.num_floors - 1

    def get_floor(self, floor_number: int) -> Optional[Floor]:
        if 0 <= floor_number < self.num_floors:
            return self.floors[floor_number]
        return None

    def are_people_waiting_on_floor(self, floor_number: int) -> bool:
        return self.floors[floor_number].is_waiting_occupied()

    def nearest_waiting_floor(self, floor_number: int) -> Optional[int]:
        """Closest floor with someone waiting; equal distances go to the lower floor."""
        waiting = [floor.index for floor in self.floors if floor.is_waiting_occupied()]
        if not waiting:
            return None
        return min(waiting, key=lambda index: (abs(index - floor_number), index))

    def ride_destinations(self) -> Set[int]:
        destinations: Set[int] = set()
        for car in self.cars:
            destinations |= car.destination_floors()
        return destinations

    def step(self, controller: "DispatchController", rng: DrawSource, step_index: int) -> StepReport:
        report = StepReport()
        report.arrivals = self.generate_arrivals(rng)
        report.departures = self.generate_departures(rng)
        report.boarded, report.alighted, report.egressed = self.exchange()
        self.dispatch(controller, rng)
        report.energy = self.meter(step_index)
        self.bookkeeping()
        self.check_invariants()
        return report

    def generate_arrivals(self, rng: DrawSource) -> int:
        if self.arrival_model == "poisson":
            count = rng.poisson(self.arrival_rate)
        else:
            count = rng.repeated_bernoulli(self.arrival_rate)
        arrivals = []
        for _ in range(count):
            arrivals.append(
                Occupant.create(
                    self.departure_probability,
                    self.num_floors,
                    rng,
                    occupant_id=self._next_occupant_id,
                )
            )
            self._next_occupant_id += 1
        self.admit(arrivals)
        if count:
            logger.debug("%d occupant(s) arrived", count)
        return count

    def admit(self, occupants: List[Occupant]) -> None:
        """Place new occupants on the floor each one reports standing on."""
        for occupant in occupants:
            floor = self.get_floor(occupant.current_floor)
            if floor is None:
                raise InvariantViolation(
                    f"occupant {occupant.occupant_id} admitted to missing floor {occupant.current_floor}"
                )
            floor.absorb([occupant])
            self.population += 1

    def generate_departures(self, rng: DrawSource) -> int:
        return sum(floor.generate_departures(rng) for floor in self.floors)

    def exchange(self) -> Tuple[int, int, int]:
        boarded_total = alighted_total = 0
        for car in self.cars:
            if not car.stopped:
                continue
            floor = self.floors[car.current_floor]

            boarded = car.board(floor.drain_boarding())
            alighted = car.alight()
            floor.absorb(alighted)

            self._record_wait_times(alighted)
            for occupant in alighted:
                occupant.resolve_arrival()

            boarded_total += len(boarded)
            alighted_total += len(alighted)

        egressed = self.ground_floor.drain_egress()
        self.population -= len(egressed)
        if egressed:
            logger.debug("%d occupant(s) left the building", len(egressed))
        return boarded_total, alighted_total, len(egressed)

    def _record_wait_times(self, alighted: List[Occupant]) -> None:
        new_total = sum(o.wait_time for o in alighted)
        denominator = self.wait_time_count + len(alighted)
        if denominator == 0:
            self.avg_wait_time = 0.0
        else:
            prior_total = self.avg_wait_time * self.wait_time_count
            self.avg_wait_time = (prior_total + new_total) / denominator
        self.wait_time_count = denominator

    def dispatch(self, controller: "DispatchController", rng: DrawSource) -> List[Intent]:
        intents = controller.decide(self, rng)
        if len(intents) != len(self.cars):
            raise InvariantViolation(
                f"controller returned {len(intents)} intents for {len(self.cars)} cars"
            )
        # Every decision is made against the same pre-move state.
        for car, intent in zip(self.cars, intents):
            car.apply(intent)
        for car in self.cars:
            car.advance_one_floor()
        logger.debug("car intents: %s", [intent.name for intent in intents])
        return intents

    def meter(self, step_index: int) -> float:
        energy = sum(car.energy_spent() for car in self.cars)
        self.avg_energy = (self.avg_energy * step_index + energy) / (step_index + 1)
        return energy

    def bookkeeping(self) -> None:
        for floor in self.floors:
            floor.tick_waiting()
        self.update_destination_probabilities()

    def update_destination_probabilities(self) -> None:
        going = self.ride_destinations()
        ground_rate = min(1.0, self.arrival_rate * (self.num_floors - 1) / self.num_floors)
        for floor in self.floors:
            demand = 1.0 if floor.is_waiting_occupied() or floor.index in going else 0.0
            if floor.index == 0:
                floor.destination_probability = max(demand, ground_rate)
            else:
                floor.destination_probability = max(demand, floor.composite_departure_probability())

    def check_invariants(self) -> None:
        """Raise InvariantViolation if any occupant is misplaced."""
        held = Counter()
        for floor in self.floors:
            for occupant in floor:
                held[id(occupant)] += 1
                if occupant.riding:
                    raise InvariantViolation(f"riding occupant {occupant.occupant_id} found on {floor!r}")
                if occupant.current_floor != floor.index:
                    raise InvariantViolation(
                        f"occupant {occupant.occupant_id} on {floor!r} reports floor {occupant.current_floor}"
                    )
        for car in self.cars:
            if not 0 <= car.current_floor < self.num_floors:
                raise InvariantViolation(f"{car!r} left the shaft")
            for occupant in car:
                held[id(occupant)] += 1
                if not occupant.riding or occupant.current_floor != car.current_floor:
                    raise InvariantViolation(
                        f"occupant {occupant.occupant_id} out of lockstep with {car!r}"
                    )
        duplicated = [key for key, count in held.items() if count > 1]
        if duplicated:
            raise InvariantViolation(f"{len(duplicated)} occupant(s) held by more than one container")
        if len(held) != self.population:
            raise InvariantViolation(
                f"{self.population} occupant(s) in the building but {len(held)} are held"
            )

    def snapshot(self, step: int) -> StepSnapshot:
        return StepSnapshot(
            step=step,
            floors=[
                FloorSnapshot(
                    index=floor.index,
                    occupant_count=len(floor),
                    waiting=floor.is_waiting_occupied(),
                    destination_probability=floor.destination_probability,
                )
                for floor in self.floors
            ],
            cars=[
                CarSnapshot(
                    index=car.index,
                    current_floor=car.current_floor,
                    occupant_count=len(car),
                    stopped=car.stopped,
                    direction=car.direction.value,
                )
                for car in self.cars
            ],
            avg_wait_time=self.avg_wait_time,
            avg_energy=self.avg_energy,
        )
