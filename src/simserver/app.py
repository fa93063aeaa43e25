from __future__ import annotations

import asyncio
import contextlib
import json
import logging
from dataclasses import asdict
from typing import Any, Dict, Optional, Set

from fastapi import Body, FastAPI, HTTPException, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware

from elevatorsim import ConfigurationError, Simulation, SimulationConfig

logger = logging.getLogger(__name__)


class SimulationManager:
    def __init__(self, config: Optional[SimulationConfig] = None, tick_interval: float = 0.25) -> None:
        self.config = config or SimulationConfig(num_floors=10, num_cars=2, arrival_rate=0.5)
        self.simulation = Simulation.from_config(self.config)
        self.tick_interval = tick_interval
        self.clients: Set[WebSocket] = set()
        self._task: Optional[asyncio.Task] = None
        self._lock = asyncio.Lock()

    async def start(self) -> None:
        if self._task is None:
            self._task = asyncio.create_task(self._run())

    async def stop(self) -> None:
        if self._task:
            self._task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._task
            self._task = None

    @property
    def finished(self) -> bool:
        return self.simulation.current_step >= self.config.steps

    async def _run(self) -> None:
        while not self.finished:
            async with self._lock:
                self.simulation.step()
                payload = self.current_state()
            await self.broadcast(payload)
            await asyncio.sleep(self.tick_interval)
        logger.info("run complete after %d step(s)", self.simulation.current_step)

    async def broadcast(self, payload: dict) -> None:
        message = json.dumps(payload)
        disconnected: Set[WebSocket] = set()
        for client in set(self.clients):
            try:
                await client.send_text(message)
            except WebSocketDisconnect:
                disconnected.add(client)
        for client in disconnected:
            await self.unregister(client)

    async def register(self, websocket: WebSocket) -> None:
        await websocket.accept()
        self.clients.add(websocket)
        logger.info("stream client connected (%d total)", len(self.clients))
        await websocket.send_text(json.dumps(self.current_state()))

    async def unregister(self, websocket: WebSocket) -> None:
        if websocket in self.clients:
            self.clients.remove(websocket)
            logger.info("stream client disconnected (%d left)", len(self.clients))
        with contextlib.suppress(Exception):
            await websocket.close()

    def current_state(self) -> dict:
        return {
            "step": self.simulation.current_step,
            "finished": self.finished,
            "controller": self.simulation.controller.name,
            "snapshot": asdict(self.simulation.snapshot()),
            "config": self.config.model_dump(),
        }

    async def reset(self, config: SimulationConfig) -> dict:
        # The controller is fixed for a run, so switching policy means a new run.
        simulation = Simulation.from_config(config)
        restart = self._task is not None
        await self.stop()
        async with self._lock:
            self.config = config
            self.simulation = simulation
            logger.info("simulation reset: %s", config.model_dump())
            state = self.current_state()
        if restart:
            await self.start()
        return state


manager = SimulationManager()
app = FastAPI(title="Elevator Optimization Simulation API")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
async def on_startup() -> None:
    await manager.start()


@app.on_event("shutdown")
async def on_shutdown() -> None:
    await manager.stop()


@app.get("/state")
async def get_state() -> dict:
    return manager.current_state()


@app.post("/reset")
async def reset(payload: Dict[str, Any] = Body(...)) -> dict:
    try:
        config = SimulationConfig.load(payload)
        return await manager.reset(config)
    except ConfigurationError as exc:
        raise HTTPException(status_code=400, detail=str(exc))


@app.websocket("/ws/stream")
async def websocket_endpoint(websocket: WebSocket) -> None:
    await manager.register(websocket)
    try:
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        await manager.unregister(websocket)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("simserver.app:app", host="0.0.0.0", port=8000, reload=False)
