import logging
import math
from typing import List, Optional
from lanesim.controllers.base import FollowingController
from lanesim.controllers.implementations import net_distance
from lanesim.domain.chain import VehicleChain
from lanesim.domain.models import GapViolation, LeadState, Vehicle
from lanesim.systems.lead_system import LeadSystem

logger = logging.getLogger(__name__)

class VehicleSystem:
    def __init__(self, controller: FollowingController, lead_system: LeadSystem, validate_gaps: bool = False):
        self.controller = controller
        self.lead_system = lead_system
        self.validate_gaps = validate_gaps

    def update(self, chain: VehicleChain, lead_state: LeadState, dt: float, tick: int = 0) -> List[GapViolation]:
        violations = self.compute_accelerations(chain, lead_state, dt, tick)
        floor = self.lead_system.velocity_floor(lead_state)
        for vehicle in chain:
            self.integrate(vehicle, dt, floor if vehicle is chain.lead else None)
        return violations

    def compute_accelerations(self, chain: VehicleChain, lead_state: LeadState, dt: float, tick: int = 0) -> List[GapViolation]:
        """Set every vehicle's acceleration from the state at the start of the tick.

        Nothing is integrated here, so a follower always sees its leader's
        pre-tick position and velocity regardless of walk order.
        """
        violations: List[GapViolation] = []
        for index, (vehicle, leader) in enumerate(chain.pairs()):
            if leader is None:
                vehicle.acceleration = self.lead_system.update(vehicle, lead_state)
                continue

            if self.validate_gaps:
                gap = net_distance(vehicle, leader)
                if not gap > 0 or not math.isfinite(gap):
                    logger.warning("Non-positive gap %.3f behind vehicle %d at tick %d", gap, index + 1, tick)
                    violations.append(GapViolation(tick=tick, follower_index=index, net_distance=gap))

            vehicle.acceleration = self.controller.acceleration(vehicle, leader, dt)
        return violations

    def integrate(self, vehicle: Vehicle, dt: float, velocity_floor: Optional[float] = None):
        # Semi-implicit Euler: position advances with the updated velocity
        vehicle.velocity += vehicle.acceleration * dt
        if velocity_floor is not None and vehicle.velocity < velocity_floor:
            vehicle.velocity = velocity_floor
        vehicle.position += vehicle.velocity * dt
