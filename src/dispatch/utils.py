from __future__ import annotations

from elevatorsim.elevator import Intent


def intent_towards(current_floor: int, target_floor: int) -> Intent:
    """Direction that closes the gap to ``target_floor``, or STOP when already there."""

    if target_floor > current_floor:
        return Intent.UP
    if target_floor < current_floor:
        return Intent.DOWN
    return Intent.STOP
