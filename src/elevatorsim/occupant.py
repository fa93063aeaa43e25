from __future__ import annotations

from dataclasses import dataclass

from .random_source import DrawSource


@dataclass(eq=False)
class Occupant:
    """Represents a person moving between floors.

    Identity-hashed so containers can hold occupants in sets; two occupants
    with the same floors are still different people.
    """

    current_floor: int
    destination_floor: int
    departure_probability: float
    occupant_id: int = 0
    riding: bool = False
    leaving: bool = False
    wait_time: int = 0

    @classmethod
    def create(
        cls,
        departure_probability: float,
        num_floors: int,
        rng: DrawSource,
        occupant_id: int = 0,
    ) -> "Occupant":
        """Spawn an occupant on the ground floor with a uniform destination."""
        return cls(
            current_floor=0,
            destination_floor=rng.uniform_floor(num_floors),
            departure_probability=departure_probability,
            occupant_id=occupant_id,
        )

    @property
    def waiting(self) -> bool:
        return self.current_floor != self.destination_floor and not self.riding

    def sample_departure(self, rng: DrawSource) -> bool:
        """Decide whether this occupant heads for the exit.

        Leaving is sticky: an occupant who already decided is not sampled
        again and keeps destination 0.
        """
        if self.leaving:
            return True
        if rng.bernoulli(self.departure_probability):
            self.leaving = True
            self.destination_floor = 0
        return self.leaving

    def tick(self) -> None:
        self.wait_time += 1

    def board(self) -> None:
        self.riding = True

    def resolve_arrival(self) -> None:
        self.riding = False
        self.wait_time = 0
