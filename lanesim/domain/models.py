from enum import Enum
from typing import List, Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field

from lanesim.domain import config

class FollowingModel(str, Enum):
    IDM = "idm"
    REACTION_TIME_GATED = "reaction-time"

class LeadCommand(str, Enum):
    STOP_LEAD = "stop-lead"
    START_LEAD = "start-lead"

class LeadState(str, Enum):
    CRUISING = "CRUISING"
    STOPPING = "STOPPING"
    STARTING = "STARTING"

class Color(BaseModel):
    model_config = ConfigDict(frozen=True)

    r: float
    g: float
    b: float
    a: float = 1.0

class Vehicle(BaseModel):
    position: float
    velocity: float = 0.0
    acceleration: float = 0.0
    target_velocity: float = 0.0
    length: float = Field(default=config.DEFAULT_VEHICLE_LENGTH, gt=0)
    color: Color
    reaction_time: float = config.HUMAN_REACTION_TIME # seconds
    time_since_action: float = 0.0

    def add_time_waited(self, t: float):
        self.time_since_action += t

    def has_reacted(self) -> bool:
        return self.time_since_action >= self.reaction_time

class IDMParameters(BaseModel):
    model_config = ConfigDict(frozen=True)

    desired_velocity: float = Field(default=config.DESIRED_VELOCITY, gt=0)
    minimum_spacing: float = config.MINIMUM_SPACING
    desired_time_headway: float = config.DESIRED_TIME_HEADWAY
    max_acceleration: float = Field(default=config.MAX_ACCELERATION, gt=0)
    comfort_deceleration: float = Field(default=config.COMFORT_DECELERATION, gt=0)
    acceleration_exponent: float = config.ACCELERATION_EXPONENT

class GapViolation(BaseModel):
    tick: int
    follower_index: int
    net_distance: float

# API/Response Models

class VehicleView(BaseModel):
    model_config = ConfigDict(frozen=True)

    index: int
    position: float
    velocity: float
    length: float
    color: Color

class ChainSnapshot(BaseModel):
    model_config = ConfigDict(frozen=True)

    tick: int
    time: float
    lead_state: LeadState
    following_model: FollowingModel
    vehicles: Tuple[VehicleView, ...]

class LeadStatus(BaseModel):
    state: LeadState
    vehicle: VehicleView
    pending_commands: int = 0

class CommandRequest(BaseModel):
    kind: LeadCommand

class CommandAccepted(BaseModel):
    status: str
    kind: LeadCommand
    applies_at_tick: int

class ExperimentRecord(BaseModel):
    tick: int
    time: float
    lead_state: LeadState
    lead_position: float
    lead_velocity: float
    min_gap: Optional[float] = None

class ExperimentSummary(BaseModel):
    following_model: FollowingModel
    seed: int
    ticks: int
    records: List[ExperimentRecord]
