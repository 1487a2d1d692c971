from abc import ABC, abstractmethod
from lanesim.domain.models import Vehicle

class FollowingController(ABC):
    @abstractmethod
    def acceleration(self, vehicle: Vehicle, leader: Vehicle, dt: float) -> float:
        """Acceleration for `vehicle` this tick, read from pre-tick state only."""
