import unittest
from fastapi.testclient import TestClient

from lanesim import main

class TestAPI(unittest.TestCase):
    def setUp(self):
        # No lifespan here: ticks are driven by hand
        main.kernel.command_queue.clear()
        main.kernel.initialize()
        self.client = TestClient(main.app)

    def test_root(self):
        response = self.client.get("/")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["model"], "idm")

    def test_snapshot(self):
        main.kernel.run_tick()
        response = self.client.get("/api/chain/snapshot")
        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(data["tick"], 1)
        self.assertEqual(data["lead_state"], "CRUISING")
        self.assertEqual(len(data["vehicles"]), 122)
        self.assertEqual(data["vehicles"][-1]["position"], -285.0)
        self.assertEqual(set(data["vehicles"][0]), {"index", "position", "velocity", "length", "color"})

    def test_vehicle_lookup(self):
        response = self.client.get("/api/chain/vehicles/121")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["index"], 121)

        self.assertEqual(self.client.get("/api/chain/vehicles/122").status_code, 404)
        self.assertEqual(self.client.get("/api/chain/vehicles/-1").status_code, 404)

    def test_stop_command(self):
        response = self.client.post("/api/lead/command", json={"kind": "stop-lead"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["status"], "queued")
        self.assertEqual(response.json()["kind"], "stop-lead")

        state = self.client.get("/api/lead/state").json()
        self.assertEqual(state["state"], "CRUISING")
        self.assertEqual(state["pending_commands"], 1)

        main.kernel.run_tick()
        state = self.client.get("/api/lead/state").json()
        self.assertEqual(state["state"], "STOPPING")
        self.assertEqual(state["vehicle"]["index"], 121)

    def test_start_shortcut(self):
        self.assertEqual(self.client.post("/api/lead/start").status_code, 200)
        main.kernel.run_tick()
        main.kernel.run_tick()
        state = self.client.get("/api/lead/state").json()
        self.assertEqual(state["state"], "STARTING")
        self.assertGreater(state["vehicle"]["velocity"], 0.0)

        self.assertEqual(self.client.post("/api/lead/stop").status_code, 200)
        main.kernel.run_tick()
        self.assertEqual(self.client.get("/api/lead/state").json()["state"], "STOPPING")

    def test_unknown_command_kind(self):
        response = self.client.post("/api/lead/command", json={"kind": "reverse-lead"})
        self.assertEqual(response.status_code, 422)
        self.assertEqual(len(main.kernel.command_queue), 0)

if __name__ == '__main__':
    unittest.main()
