import math
from dataclasses import asdict

import pytest

from dispatch import NearestController
from elevatorsim import Building, RandomSource, Simulation, SimulationConfig

from .helpers import ScriptedRandom


@pytest.mark.parametrize("controller", ["nearest", "random"])
@pytest.mark.parametrize("num_cars", [1, 3])
def test_long_runs_hold_invariants(controller, num_cars):
    config = SimulationConfig(
        num_floors=7,
        num_cars=num_cars,
        arrival_rate=0.6,
        departure_probability=0.1,
        controller=controller,
        steps=300,
        seed=11,
    )
    simulation = Simulation.from_config(config)
    previous = None
    for _ in range(config.steps):
        snapshot = simulation.step()
        building = simulation.building
        assert math.isfinite(snapshot.avg_wait_time)
        assert math.isfinite(snapshot.avg_energy)
        for floor in building.floors:
            assert 0.0 <= floor.composite_departure_probability() <= 1.0
            assert 0.0 <= floor.destination_probability <= 1.0
        if previous is not None:
            for before, after in zip(previous.cars, snapshot.cars):
                if before.stopped and after.stopped and before.current_floor != after.current_floor:
                    pytest.fail(f"car {after.index} moved while stopped")
        previous = snapshot
    assert simulation.current_step == 300
    assert building.wait_time_count > 0


def test_same_seed_reproduces_the_run():
    config = SimulationConfig(num_floors=6, num_cars=2, arrival_rate=0.8, controller="random", steps=120, seed=3)
    first = [asdict(s) for s in Simulation.from_config(config).run()]
    second = [asdict(s) for s in Simulation.from_config(config).run()]
    assert first == second


def test_single_floor_run_never_moves_a_car():
    config = SimulationConfig(num_floors=1, num_cars=2, arrival_rate=1.2, steps=50, seed=5)
    simulation = Simulation.from_config(config)
    for snapshot in simulation.run():
        assert all(not floor.waiting for floor in snapshot.floors)
        assert all(car.stopped and car.current_floor == 0 for car in snapshot.cars)
    assert simulation.building.avg_energy == 0.0
    assert simulation.building.avg_wait_time == 0.0


def test_run_defaults_to_configured_steps():
    simulation = Simulation.from_config(SimulationConfig(steps=7, seed=1))
    snapshots = simulation.run()
    assert [s.step for s in snapshots] == list(range(7))
    assert simulation.snapshot().step == 7


def test_event_hooks_report_arrivals_and_steps():
    building = Building(num_floors=3, num_cars=1, arrival_rate=0.5)
    simulation = Simulation(building, NearestController(), ScriptedRandom(arrivals=[2], floors=[1, 2]))
    arrivals, steps = [], []
    simulation.on_event("arrival", arrivals.append)
    simulation.on_event("step", steps.append)

    simulation.run(2)
    assert arrivals == [{"step": 0, "count": 2}]
    assert [s.step for s in steps] == [0, 1]


def test_snapshot_shape():
    building = Building(num_floors=3, num_cars=2, arrival_rate=1.0)
    snapshot = Simulation(building, NearestController(), RandomSource(seed=2)).step()
    data = asdict(snapshot)
    assert set(data) == {"step", "floors", "cars", "avg_wait_time", "avg_energy"}
    assert set(data["floors"][0]) == {"index", "occupant_count", "waiting", "destination_probability"}
    assert set(data["cars"][0]) == {"index", "current_floor", "occupant_count", "stopped", "direction"}
    assert len(data["floors"]) == 3 and len(data["cars"]) == 2
