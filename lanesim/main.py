import asyncio
import logging
import time
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

from lanesim.kernel.simulation_kernel import SimulationKernel
from lanesim.kernel.commands import LeadControlCommand
from lanesim.domain.models import (
    ChainSnapshot, VehicleView, LeadStatus, LeadCommand, CommandRequest, CommandAccepted
)
from lanesim.domain import config

logger = logging.getLogger(__name__)

# Initialize Kernel
kernel = SimulationKernel()

# Background task for simulation loop
@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: Start the simulation loop
    kernel.initialize() # Deterministic seed
    loop_task = asyncio.create_task(run_simulation())
    yield
    # Shutdown
    loop_task.cancel()

app = FastAPI(lifespan=lifespan)

# Enable CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

async def run_simulation():
    """Runs the simulation update loop at a fixed 100Hz tick"""
    interval = config.TICK_INTERVAL

    while True:
        start_time = time.monotonic()

        kernel.run_tick()

        # Sleep to hold the tick rate
        elapsed = time.monotonic() - start_time
        await asyncio.sleep(max(0.0, interval - elapsed))

def _queue_lead_command(kind: LeadCommand) -> CommandAccepted:
    # Applied at the start of the next tick
    kernel.queue_command(LeadControlCommand(kind))
    return CommandAccepted(status="queued", kind=kind, applies_at_tick=kernel.state.tick_id)

@app.get("/api/chain/snapshot", response_model=ChainSnapshot)
async def get_chain_snapshot():
    """Returns every vehicle's position, color and length as of the last tick"""
    return kernel.get_snapshot()

@app.get("/api/chain/vehicles/{index}", response_model=VehicleView)
async def get_vehicle(index: int):
    vehicle = kernel.get_vehicle(index)
    if vehicle is None:
        raise HTTPException(status_code=404, detail="Vehicle not found")
    return vehicle

@app.get("/api/lead/state", response_model=LeadStatus)
async def get_lead_state():
    return kernel.get_lead_status()

@app.post("/api/lead/command", response_model=CommandAccepted)
async def post_lead_command(request: CommandRequest):
    """Queues a stop-lead or start-lead command"""
    return _queue_lead_command(request.kind)

@app.post("/api/lead/stop", response_model=CommandAccepted)
async def stop_lead():
    return _queue_lead_command(LeadCommand.STOP_LEAD)

@app.post("/api/lead/start", response_model=CommandAccepted)
async def start_lead():
    return _queue_lead_command(LeadCommand.START_LEAD)

@app.get("/")
def read_root():
    return {"status": "lanesim car-following service running", "model": kernel.following_model.value}

if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s %(message)s")
    uvicorn.run(app, host="0.0.0.0", port=8001)
