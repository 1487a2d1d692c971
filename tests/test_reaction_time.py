import unittest

from lanesim.controllers.implementations import IDMController, ReactionTimeController, build_controller
from lanesim.domain.models import Color, FollowingModel, LeadCommand, Vehicle
from lanesim.domain import config
from lanesim.kernel.simulation_kernel import SimulationKernel

def make_vehicle(**kwargs) -> Vehicle:
    return Vehicle(color=Color(r=0.541, g=0.541, b=0.803), **kwargs)

class TestReactionTimeController(unittest.TestCase):
    def setUp(self):
        self.controller = ReactionTimeController()

    def test_takes_leader_velocity_as_target(self):
        follower = make_vehicle(position=0.0, velocity=2.0)
        leader = make_vehicle(position=20.0, velocity=7.0)
        self.controller.acceleration(follower, leader, 0.01)
        self.assertEqual(follower.target_velocity, 7.0)

    def test_waits_while_leader_moves(self):
        follower = make_vehicle(position=0.0, acceleration=0.0)
        leader = make_vehicle(position=20.0, velocity=5.0)
        self.assertEqual(self.controller.acceleration(follower, leader, 0.1), 0.0)
        self.assertAlmostEqual(follower.time_since_action, 0.1)

    def test_keeps_previous_acceleration_before_reacting(self):
        follower = make_vehicle(position=0.0, velocity=1.0, acceleration=1.5)
        leader = make_vehicle(position=20.0, velocity=5.0)
        self.assertEqual(self.controller.acceleration(follower, leader, 0.01), 1.5)

    def test_accelerates_once_reacted(self):
        follower = make_vehicle(position=0.0, velocity=1.0, time_since_action=0.3)
        leader = make_vehicle(position=20.0, velocity=5.0)
        self.assertEqual(self.controller.acceleration(follower, leader, 0.01), config.REACTION_ACCELERATION)

    def test_matching_leader_forces_zero(self):
        follower = make_vehicle(position=0.0, velocity=5.0, acceleration=2.0, time_since_action=1.0)
        leader = make_vehicle(position=20.0, velocity=5.0)
        self.assertEqual(self.controller.acceleration(follower, leader, 0.01), 0.0)
        self.assertEqual(follower.time_since_action, 0.0)

    def test_stationary_leader_adds_no_waiting(self):
        follower = make_vehicle(position=0.0)
        leader = make_vehicle(position=20.0)
        self.controller.acceleration(follower, leader, 0.01)
        self.assertEqual(follower.time_since_action, 0.0)

class TestReactionTimeKernel(unittest.TestCase):
    def test_follower_reacts_after_reaction_time(self):
        kernel = SimulationKernel(following_model=FollowingModel.REACTION_TIME_GATED, dt=0.01)
        kernel.initialize([(0.0, 0.0), (20.0, 30.0)])
        kernel.command(LeadCommand.START_LEAD)

        follower = kernel.chain[0]
        first_reaction = None
        for tick in range(1, 60):
            kernel.run_tick()
            if follower.acceleration > 0:
                first_reaction = tick
                break

        # Leader starts moving after tick 1; 25 ticks of 10 ms make up the 250 ms delay
        self.assertIn(first_reaction, (26, 27))
        self.assertEqual(follower.acceleration, config.REACTION_ACCELERATION)

    def test_models_produce_different_trajectories(self):
        results = {}
        for model in FollowingModel:
            kernel = SimulationKernel(following_model=model)
            kernel.initialize(seed=1)
            kernel.command(LeadCommand.START_LEAD)
            for _ in range(200):
                kernel.run_tick()
            results[model] = [v.position for v in kernel.get_snapshot().vehicles]

        self.assertNotEqual(results[FollowingModel.IDM], results[FollowingModel.REACTION_TIME_GATED])
        self.assertEqual(results[FollowingModel.IDM][-1], results[FollowingModel.REACTION_TIME_GATED][-1])

    def test_build_controller(self):
        self.assertIsInstance(build_controller(FollowingModel.IDM), IDMController)
        self.assertIsInstance(build_controller("reaction-time"), ReactionTimeController)
        with self.assertRaises(ValueError):
            build_controller("gipps")

if __name__ == '__main__':
    unittest.main()
