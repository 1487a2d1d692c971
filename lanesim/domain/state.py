from typing import List, Optional
from pydantic import BaseModel, ConfigDict
from lanesim.domain.models import FollowingModel, GapViolation, LeadState
from lanesim.domain.chain import VehicleChain

class SimulationState(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    tick_id: int = 0
    time: float = 0.0
    following_model: FollowingModel = FollowingModel.IDM
    lead_state: LeadState = LeadState.CRUISING
    gap_violations: List[GapViolation] = []

    # Lane order is fixed once the chain is built
    chain: Optional[VehicleChain] = None
