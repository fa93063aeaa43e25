from __future__ import annotations

from dataclasses import dataclass
from typing import List


@dataclass(frozen=True)
class FloorSnapshot:
    index: int
    occupant_count: int
    waiting: bool
    destination_probability: float


@dataclass(frozen=True)
class CarSnapshot:
    index: int
    current_floor: int
    occupant_count: int
    stopped: bool
    direction: str


@dataclass(frozen=True)
class StepSnapshot:
    """Plain per-step state handed to renderers and streaming clients."""

    step: int
    floors: List[FloorSnapshot]
    cars: List[CarSnapshot]
    avg_wait_time: float
    avg_energy: float
