import random
from typing import Iterator, List, Optional, Sequence, Tuple

from lanesim.domain.models import Color, Vehicle
from lanesim.domain import config

class VehicleChain:
    """Fixed lane order of vehicles, rearmost first and the lead vehicle last.

    The chain is built once and never reordered; each vehicle's leader is the
    next element, and the last element has none.
    """

    def __init__(self, vehicles: Sequence[Vehicle]):
        if not vehicles:
            raise ValueError("A vehicle chain needs at least one vehicle")
        self._vehicles: Tuple[Vehicle, ...] = tuple(vehicles)

    @classmethod
    def from_initial_conditions(
        cls,
        initial_conditions: Sequence[Tuple[float, float]],
        length: float = config.DEFAULT_VEHICLE_LENGTH,
        rng: Optional[random.Random] = None,
    ) -> "VehicleChain":
        rng = rng or random.Random()
        vehicles = [
            Vehicle(
                position=float(position),
                target_velocity=float(target_velocity),
                length=length,
                color=random_color(rng),
            )
            for position, target_velocity in initial_conditions
        ]
        return cls(vehicles)

    def __len__(self) -> int:
        return len(self._vehicles)

    def __getitem__(self, index: int) -> Vehicle:
        return self._vehicles[index]

    def __iter__(self) -> Iterator[Vehicle]:
        return iter(self._vehicles)

    @property
    def lead(self) -> Vehicle:
        return self._vehicles[-1]

    def leader_of(self, index: int) -> Optional[Vehicle]:
        if index + 1 < len(self._vehicles):
            return self._vehicles[index + 1]
        return None

    def pairs(self) -> Iterator[Tuple[Vehicle, Optional[Vehicle]]]:
        """Yield (vehicle, leader) in chain order; the lead vehicle's leader is None."""
        for index, vehicle in enumerate(self._vehicles):
            yield vehicle, self.leader_of(index)

def random_color(rng: random.Random) -> Color:
    return Color(
        r=rng.choice(config.COLOR_CHANNEL_VALUES),
        g=rng.choice(config.COLOR_CHANNEL_VALUES),
        b=rng.choice(config.COLOR_CHANNEL_VALUES),
        a=1.0,
    )

def default_initial_conditions() -> List[Tuple[float, float]]:
    # Followers are laid out from the back of the queue towards the lead car.
    conditions = []
    for i in range(config.FOLLOWER_COUNT - 1, -1, -1):
        x = config.FOLLOWER_SPACING * i + config.FOLLOWER_OFFSET
        conditions.append((-x, config.FOLLOWER_TARGET_VELOCITY))
    conditions.append((config.LEAD_START_POSITION, config.LEAD_TARGET_VELOCITY))
    return conditions
