from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, Field, ValidationError

from .errors import ConfigurationError

DEFAULT_DEPARTURE_PROBABILITY = 0.05
DEFAULT_ENERGY_UP = 5.0
DEFAULT_ENERGY_DOWN = 2.5
DEFAULT_ENERGY_PER_OCCUPANT = 0.5

ArrivalModel = Literal["poisson", "bernoulli"]


class CarSettings(BaseModel):
    """Energy coefficients for one car."""

    energy_up: float = Field(DEFAULT_ENERGY_UP, ge=0)
    energy_down: float = Field(DEFAULT_ENERGY_DOWN, ge=0)
    energy_per_occupant: float = Field(DEFAULT_ENERGY_PER_OCCUPANT, ge=0)


class SimulationConfig(BaseModel):
    """Settings for one run, fixed at construction."""

    num_floors: int = Field(4, ge=1)
    num_cars: int = Field(1, ge=1)
    arrival_rate: float = Field(0.5, ge=0)
    arrival_model: Optional[ArrivalModel] = None
    departure_probability: float = Field(DEFAULT_DEPARTURE_PROBABILITY, ge=0, le=1)
    cars: List[CarSettings] = Field(default_factory=list)
    controller: str = "nearest"
    steps: int = Field(100, ge=0)
    seed: Optional[int] = None

    @classmethod
    def load(cls, data: dict) -> "SimulationConfig":
        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise ConfigurationError(f"invalid simulation config: {exc}") from exc

    def resolved_arrival_model(self) -> ArrivalModel:
        if self.arrival_model is not None:
            return self.arrival_model
        return "bernoulli" if self.num_cars == 1 else "poisson"

    def car_settings(self) -> List[CarSettings]:
        settings = list(self.cars[: self.num_cars])
        while len(settings) < self.num_cars:
            settings.append(CarSettings())
        return settings
