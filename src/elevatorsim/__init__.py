"""Simulation primitives for the elevator optimization simulator."""

from .building import Building, StepReport
from .config import CarSettings, SimulationConfig
from .elevator import Direction, ElevatorCar, Intent
from .errors import ConfigurationError, InvariantViolation
from .floor import Floor
from .occupant import Occupant
from .random_source import DrawSource, RandomSource
from .render import render_text
from .simulation import Simulation
from .snapshot import CarSnapshot, FloorSnapshot, StepSnapshot

__all__ = [
    "Building",
    "CarSettings",
    "CarSnapshot",
    "ConfigurationError",
    "Direction",
    "DrawSource",
    "ElevatorCar",
    "Floor",
    "FloorSnapshot",
    "Intent",
    "InvariantViolation",
    "Occupant",
    "RandomSource",
    "Simulation",
    "SimulationConfig",
    "StepReport",
    "StepSnapshot",
    "render_text",
]
