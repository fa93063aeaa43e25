"""CLI for running elevator simulations from JSON configs or command-line overrides."""
from __future__ import annotations

import argparse
import json
import logging
import time
from dataclasses import asdict
from pathlib import Path
from typing import Dict, List, Optional

from elevatorsim import ConfigurationError, Simulation, SimulationConfig, StepSnapshot, render_text

OVERRIDES = {
    "floors": "num_floors",
    "cars": "num_cars",
    "steps": "steps",
    "arrival_rate": "arrival_rate",
    "controller": "controller",
    "seed": "seed",
}


def build_config(args: argparse.Namespace) -> SimulationConfig:
    data: Dict = {}
    if args.config:
        data = json.loads(args.config.read_text())
    for option, key in OVERRIDES.items():
        value = getattr(args, option)
        if value is not None:
            data[key] = value
    return SimulationConfig.load(data)


def run_simulation(
    simulation: Simulation, steps: int, render: bool = False, delay: float = 0.0
) -> List[StepSnapshot]:
    snapshots: List[StepSnapshot] = []
    for _ in range(steps):
        snapshot = simulation.step()
        snapshots.append(snapshot)
        if render:
            print(render_text(snapshot))
            print()
        if delay > 0:
            time.sleep(delay)
    return snapshots


def save_results(output_path: Optional[Path], data: Dict) -> None:
    if not output_path:
        return
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(json.dumps(data, indent=2))


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("config", type=Path, nargs="?", help="Path to a JSON scenario configuration file")
    parser.add_argument("--floors", type=int, help="Number of floors in the building")
    parser.add_argument("--cars", type=int, help="Number of elevator cars")
    parser.add_argument("--steps", type=int, help="Number of time steps to simulate")
    parser.add_argument(
        "--arrival-rate",
        type=float,
        help="Arrival probability (single car) or Poisson rate (several cars)",
    )
    parser.add_argument("--controller", help="Dispatch controller name (nearest, random)")
    parser.add_argument("--seed", type=int, help="Seed for the random source")
    parser.add_argument("--render", action="store_true", help="Print the building after every step")
    parser.add_argument("--delay", type=float, default=0.0, help="Seconds to pause between steps")
    parser.add_argument(
        "--output",
        type=Path,
        help="Optional file path to write per-step metrics as JSON",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: WARNING)",
    )
    args = parser.parse_args()

    logging.basicConfig(level=args.log_level, format="%(levelname)s %(name)s: %(message)s")

    try:
        config = build_config(args)
        simulation = Simulation.from_config(config)
    except ConfigurationError as exc:
        parser.error(str(exc))

    snapshots = run_simulation(simulation, config.steps, render=args.render, delay=args.delay)

    results = {
        "scenario": args.config.stem if args.config else "command-line",
        "controller": config.controller,
        "steps": config.steps,
        "final": asdict(simulation.snapshot()),
        "metrics_over_time": [
            {"step": s.step, "avg_wait_time": s.avg_wait_time, "avg_energy": s.avg_energy}
            for s in snapshots
        ],
    }
    save_results(args.output, results)

    print(f"Scenario: {results['scenario']}")
    print(f"Controller: {config.controller}")
    print(f"Building: {config.num_floors} floor(s), {config.num_cars} car(s)")
    print(f"Duration: {config.steps} steps")
    print(f"  avg_wait_time: {simulation.building.avg_wait_time:.2f}")
    print(f"  avg_energy: {simulation.building.avg_energy:.2f}")
    if args.output:
        print(f"Saved metrics to {args.output}")


if __name__ == "__main__":
    main()
