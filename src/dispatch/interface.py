from __future__ import annotations

from typing import TYPE_CHECKING, List, Protocol

from elevatorsim.elevator import Intent
from elevatorsim.random_source import DrawSource

if TYPE_CHECKING:  # pragma: no cover - import cycle safe typing
    from elevatorsim.building import Building


class DispatchController(Protocol):
    """Strategy interface deciding every car's next move."""

    name: str

    def decide(self, building: "Building", rng: DrawSource) -> List[Intent]:
        """
        Return one intent per car, in ``building.cars`` order.

        Decisions are made against the state at the start of the dispatch
        phase; the building commits them all before any car moves.
        """
        ...
