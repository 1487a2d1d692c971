from typing import Optional
import numpy as np

from lanesim.controllers.base import FollowingController
from lanesim.domain.models import FollowingModel, IDMParameters, Vehicle
from lanesim.domain import config

DEFAULT_IDM = IDMParameters()

def net_distance(vehicle: Vehicle, leader: Vehicle) -> float:
    # Bumper-to-bumper gap
    return leader.position - vehicle.position - leader.length

def idm_acceleration(
    velocity: float,
    leader_velocity: float,
    gap: float,
    params: IDMParameters = DEFAULT_IDM,
) -> float:
    """Intelligent Driver Model acceleration.

    Evaluated in float64 with IEEE semantics: a gap of zero gives +inf or nan
    rather than raising, and that value is returned as is.
    """
    v = np.float64(velocity)
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        approach_rate = v - np.float64(leader_velocity)
        free_road_term = np.power(v / params.desired_velocity, params.acceleration_exponent)
        desired_gap = (
            params.minimum_spacing
            + v * params.desired_time_headway
            + (v * approach_rate) / (2 * np.sqrt(params.max_acceleration * params.comfort_deceleration))
        )
        interaction_term = np.power(desired_gap / np.float64(gap), 2.0)
        acceleration = params.max_acceleration * (1 - free_road_term - interaction_term)
    return float(acceleration)

class IDMController(FollowingController):
    def __init__(self, params: Optional[IDMParameters] = None):
        self.params = params or DEFAULT_IDM

    def acceleration(self, vehicle: Vehicle, leader: Vehicle, dt: float) -> float:
        return idm_acceleration(
            vehicle.velocity,
            leader.velocity,
            net_distance(vehicle, leader),
            self.params,
        )

class ReactionTimeController(FollowingController):
    """Follower copies its leader's speed once it has waited out its reaction time.

    No spacing term: a follower never brakes on its own, it only stops
    accelerating once it has matched the leader.
    """

    def __init__(self, rate: float = config.REACTION_ACCELERATION):
        self.rate = rate

    def acceleration(self, vehicle: Vehicle, leader: Vehicle, dt: float) -> float:
        vehicle.target_velocity = leader.velocity
        if leader.velocity != 0:
            vehicle.add_time_waited(dt)

        if vehicle.velocity >= vehicle.target_velocity:
            vehicle.time_since_action = 0.0
            return 0.0
        if vehicle.has_reacted():
            return self.rate
        return vehicle.acceleration

def build_controller(model: FollowingModel, idm: Optional[IDMParameters] = None) -> FollowingController:
    model = FollowingModel(model)
    if model == FollowingModel.IDM:
        return IDMController(idm)
    return ReactionTimeController()
