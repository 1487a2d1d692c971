from lanesim.domain.models import ChainSnapshot, Vehicle, VehicleView
from lanesim.domain.state import SimulationState

class SnapshotBuilder:
    def build(self, state: SimulationState) -> ChainSnapshot:
        return ChainSnapshot(
            tick=state.tick_id,
            time=state.time,
            lead_state=state.lead_state,
            following_model=state.following_model,
            vehicles=tuple(
                self.view(index, v)
                for index, v in enumerate(state.chain or ())
            ),
        )

    def view(self, index: int, vehicle: Vehicle) -> VehicleView:
        return VehicleView(
            index=index,
            position=vehicle.position,
            velocity=vehicle.velocity,
            length=vehicle.length,
            color=vehicle.color,
        )
