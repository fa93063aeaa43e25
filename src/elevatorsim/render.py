"""Plain-text view of a step snapshot, top floor first."""
from __future__ import annotations

from typing import List

from .snapshot import StepSnapshot

CAR_COLUMN = "   \t "


def render_text(snapshot: StepSnapshot) -> str:
    lines: List[str] = []
    for floor in reversed(snapshot.floors):
        marker = "*" if floor.waiting else " "
        roof = f"{marker}----\t||---\t||"
        body = f"{marker}{floor.destination_probability:.2f}\t||{floor.occupant_count}\t||"
        last_column = 0
        for car in snapshot.cars:
            if car.current_floor != floor.index:
                continue
            gap = CAR_COLUMN * (car.index - last_column)
            roof += f"{gap}|-\t|"
            body += f"{gap}|{car.occupant_count}\t|"
            last_column = car.index + 1
        lines.extend([roof, body])
    lines.append(f"Average wait time:\t{snapshot.avg_wait_time:.2f}")
    lines.append(f"Average energy spent:\t{snapshot.avg_energy:.2f}")
    return "\n".join(lines)
