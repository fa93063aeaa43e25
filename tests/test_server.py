import asyncio

import pytest
from fastapi.testclient import TestClient

from elevatorsim import SimulationConfig
from simserver.app import SimulationManager, app, manager


@pytest.fixture
def client():
    return TestClient(app)


def test_state_reports_snapshot_and_config(client):
    response = client.get("/state")
    assert response.status_code == 200
    body = response.json()
    assert body["controller"] == manager.simulation.controller.name
    assert len(body["snapshot"]["floors"]) == body["config"]["num_floors"]
    assert len(body["snapshot"]["cars"]) == body["config"]["num_cars"]


def test_reset_rebuilds_the_run(client):
    response = client.post(
        "/reset",
        json={"num_floors": 5, "num_cars": 3, "arrival_rate": 1.0, "controller": "random", "steps": 20},
    )
    assert response.status_code == 200
    body = response.json()
    assert body["step"] == 0
    assert body["controller"] == "random"
    assert len(body["snapshot"]["cars"]) == 3


@pytest.mark.parametrize(
    "payload",
    [
        {"num_cars": 1, "arrival_rate": 1.0},
        {"num_cars": 2, "arrival_rate": 0.0},
        {"controller": "scan"},
        {"num_floors": 0},
        {"steps": -1},
        {"departure_probability": 2.0},
        {"arrival_model": "uniform"},
    ],
)
def test_reset_rejects_bad_configuration(client, payload):
    response = client.post("/reset", json=payload)
    assert response.status_code == 400


def test_websocket_sends_current_state_on_connect(client):
    with client.websocket_connect("/ws/stream") as websocket:
        payload = websocket.receive_json()
    assert "snapshot" in payload
    assert payload["step"] == manager.simulation.current_step


def test_manager_runs_until_configured_steps():
    local = SimulationManager(SimulationConfig(num_floors=4, steps=3, seed=1), tick_interval=0)

    async def run_to_completion():
        await local.start()
        await local._task

    asyncio.run(run_to_completion())
    assert local.finished
    assert local.simulation.current_step == 3
