import logging
import random
import threading
from typing import List, Optional, Sequence, Tuple
from lanesim.controllers.implementations import build_controller
from lanesim.domain.chain import VehicleChain, default_initial_conditions
from lanesim.domain.models import (
    ChainSnapshot, FollowingModel, GapViolation, IDMParameters, LeadCommand, LeadStatus, VehicleView
)
from lanesim.domain.state import SimulationState
from lanesim.kernel.command_queue import CommandQueue
from lanesim.kernel.commands import Command, LeadControlCommand
from lanesim.kernel.snapshot_builder import SnapshotBuilder
from lanesim.systems.lead_system import LeadSystem
from lanesim.systems.vehicle_system import VehicleSystem
from lanesim.domain import config

logger = logging.getLogger(__name__)

class SimulationKernel:
    """Owns the vehicle chain and advances it one fixed tick at a time.

    Every tick runs under `_lock`, and readers only ever get a frozen
    `ChainSnapshot` copied under the same lock, so a reader sees the chain as
    it was between two ticks and never halfway through one.
    """

    def __init__(
        self,
        following_model: FollowingModel = FollowingModel.IDM,
        dt: float = config.DT,
        validate_gaps: bool = False,
        idm: Optional[IDMParameters] = None,
    ):
        if dt <= 0:
            raise ValueError(f"Timestep must be positive, got {dt}")
        self.following_model = FollowingModel(following_model)
        self.state = SimulationState(following_model=self.following_model)
        self.dt = dt
        self.command_queue = CommandQueue()
        self.lead_system = LeadSystem()
        self.vehicle_system = VehicleSystem(
            build_controller(self.following_model, idm), self.lead_system, validate_gaps=validate_gaps
        )
        self.snapshot_builder = SnapshotBuilder()
        self.initialized = False
        self._lock = threading.Lock()

    def initialize(
        self,
        initial_conditions: Optional[Sequence[Tuple[float, float]]] = None,
        seed: int = 42,
        length: float = config.DEFAULT_VEHICLE_LENGTH,
    ):
        if initial_conditions is None:
            initial_conditions = default_initial_conditions()
        chain = VehicleChain.from_initial_conditions(initial_conditions, length=length, rng=random.Random(seed))
        with self._lock:
            self.state = SimulationState(following_model=self.following_model, chain=chain)
            self.initialized = True
        logger.info(
            "Kernel initialized (seed=%d, vehicles=%d, model=%s)",
            seed, len(chain), self.following_model.value,
        )

    @property
    def chain(self) -> VehicleChain:
        if not self.initialized:
            self.initialize()
        return self.state.chain

    @property
    def gap_violations(self) -> List[GapViolation]:
        with self._lock:
            return list(self.state.gap_violations)

    def queue_command(self, command: Command):
        self.command_queue.add(command)

    def command(self, kind: LeadCommand):
        self.queue_command(LeadControlCommand(kind))

    def run_tick(self):
        self.step(self.dt)

    def step(self, dt: float):
        if dt <= 0:
            raise ValueError(f"Timestep must be positive, got {dt}")
        if not self.initialized:
            self.initialize()

        with self._lock:
            # 1. Consume Commands
            commands = self.command_queue.pop_all()
            while commands:
                cmd = commands.popleft()
                cmd.execute(self)

            # 2. Physics
            violations = self.vehicle_system.update(
                self.state.chain, self.state.lead_state, dt, tick=self.state.tick_id
            )
            if violations:
                self.state.gap_violations.extend(violations)

            # 3. Advance Time
            self.state.time += dt
            self.state.tick_id += 1

    def get_snapshot(self) -> ChainSnapshot:
        if not self.initialized:
            self.initialize()
        with self._lock:
            return self.snapshot_builder.build(self.state)

    def get_vehicle(self, index: int) -> Optional[VehicleView]:
        if not self.initialized:
            self.initialize()
        with self._lock:
            chain = self.state.chain
            if index < 0 or index >= len(chain):
                return None
            return self.snapshot_builder.view(index, chain[index])

    def get_lead_status(self) -> LeadStatus:
        if not self.initialized:
            self.initialize()
        with self._lock:
            chain = self.state.chain
            return LeadStatus(
                state=self.state.lead_state,
                vehicle=self.snapshot_builder.view(len(chain) - 1, chain.lead),
                pending_commands=len(self.command_queue),
            )
