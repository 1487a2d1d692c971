import logging
from typing import Optional
from lanesim.domain.models import LeadCommand, LeadState, Vehicle
from lanesim.domain import config

logger = logging.getLogger(__name__)

class LeadSystem:
    """Stop/start policy for the vehicle at the front of the chain."""

    def __init__(
        self,
        stop_deceleration: float = config.LEAD_STOP_DECELERATION,
        start_acceleration: float = config.LEAD_START_ACCELERATION,
    ):
        self.stop_deceleration = stop_deceleration
        self.start_acceleration = start_acceleration

    def apply_command(self, current: LeadState, command: LeadCommand) -> LeadState:
        command = LeadCommand(command)
        if command == LeadCommand.STOP_LEAD:
            logger.info("Stopping lead vehicle (was %s)", LeadState(current).value)
            return LeadState.STOPPING
        logger.info("Starting lead vehicle (was %s)", LeadState(current).value)
        return LeadState.STARTING

    def update(self, lead: Vehicle, state: LeadState) -> float:
        if state == LeadState.STOPPING:
            if lead.velocity > 0:
                return self.stop_deceleration
            lead.velocity = 0.0
            return 0.0
        if state == LeadState.STARTING and abs(lead.velocity) < abs(lead.target_velocity):
            return self.start_acceleration
        return 0.0

    def velocity_floor(self, state: LeadState) -> Optional[float]:
        # A stopping lead vehicle comes to rest instead of rolling backwards
        if state == LeadState.STOPPING:
            return 0.0
        return None
