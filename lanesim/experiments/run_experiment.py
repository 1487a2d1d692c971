import argparse
import json
import logging
import time
from typing import List, Optional, Sequence

from lanesim.controllers.implementations import net_distance
from lanesim.domain.models import ExperimentRecord, ExperimentSummary, FollowingModel, LeadCommand
from lanesim.kernel.simulation_kernel import SimulationKernel

logger = logging.getLogger(__name__)

def min_gap(kernel: SimulationKernel) -> Optional[float]:
    chain = kernel.chain
    gaps = [net_distance(vehicle, leader) for vehicle, leader in chain.pairs() if leader is not None]
    return min(gaps) if gaps else None

def run_headless_experiment(
    ticks: int = 1000,
    model: FollowingModel = FollowingModel.IDM,
    seed: int = 42,
    start_at: Optional[int] = 0,
    stop_at: Optional[int] = None,
    every: int = 10,
    output_path: Optional[str] = None,
) -> ExperimentSummary:
    """Step a kernel without a clock and record the lead vehicle and the tightest gap."""
    if ticks <= 0:
        raise ValueError("ticks must be positive.")
    if every <= 0:
        raise ValueError("every must be positive.")

    kernel = SimulationKernel(following_model=model)
    kernel.initialize(seed=seed)

    records: List[ExperimentRecord] = []
    start_time = time.time()
    for i in range(ticks):
        if start_at is not None and i == start_at:
            kernel.command(LeadCommand.START_LEAD)
        if stop_at is not None and i == stop_at:
            kernel.command(LeadCommand.STOP_LEAD)

        kernel.run_tick()

        if (i + 1) % every == 0 or i == ticks - 1:
            lead = kernel.chain.lead
            records.append(ExperimentRecord(
                tick=kernel.state.tick_id,
                time=kernel.state.time,
                lead_state=kernel.state.lead_state,
                lead_position=lead.position,
                lead_velocity=lead.velocity,
                min_gap=min_gap(kernel),
            ))

    logger.info("Experiment finished in %.4fs", time.time() - start_time)

    summary = ExperimentSummary(following_model=kernel.following_model, seed=seed, ticks=ticks, records=records)
    if output_path:
        with open(output_path, 'w') as f:
            json.dump(summary.model_dump(mode="json"), f, indent=2)
    return summary

def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the car-following simulation headless.")
    parser.add_argument("--ticks", type=int, default=1000, help="Number of fixed ticks to run.")
    parser.add_argument("--model", choices=[m.value for m in FollowingModel], default=FollowingModel.IDM.value,
                        help="Car-following model for non-lead vehicles.")
    parser.add_argument("--seed", type=int, default=42, help="Seed for vehicle colors.")
    parser.add_argument("--start-at", type=int, default=0, help="Tick at which the lead vehicle is started.")
    parser.add_argument("--stop-at", type=int, default=None, help="Tick at which the lead vehicle is stopped.")
    parser.add_argument("--every", type=int, default=10, help="Record one summary every N ticks.")
    parser.add_argument("--output", type=str, default=None, help="Write the summary to this JSON file.")
    return parser.parse_args(argv)

def main(argv: Optional[Sequence[str]] = None):
    args = parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")
    summary = run_headless_experiment(
        ticks=args.ticks,
        model=FollowingModel(args.model),
        seed=args.seed,
        start_at=args.start_at,
        stop_at=args.stop_at,
        every=args.every,
        output_path=args.output,
    )
    last = summary.records[-1]
    print(f"tick={last.tick} lead={last.lead_state.value} v={last.lead_velocity:.2f} min_gap={last.min_gap}")

if __name__ == "__main__":
    main()
