from __future__ import annotations

from typing import Dict, Type

from elevatorsim.errors import ConfigurationError

from .interface import DispatchController
from .nearest import NearestController
from .random_policy import RandomController

__all__ = [
    "DispatchController",
    "NearestController",
    "RandomController",
    "get_controller",
]


CONTROLLER_REGISTRY: Dict[str, Type[DispatchController]] = {
    "random": RandomController,
    "nearest": NearestController,
}


def get_controller(name: str, **kwargs) -> DispatchController:
    cls = CONTROLLER_REGISTRY.get(name.lower())
    if cls is None:
        raise ConfigurationError(
            f"Unknown controller '{name}'. Available: {', '.join(CONTROLLER_REGISTRY)}"
        )
    return cls(**kwargs)
