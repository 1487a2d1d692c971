import logging
import threading
import time
from typing import Optional
from lanesim.kernel.simulation_kernel import SimulationKernel
from lanesim.domain import config

logger = logging.getLogger(__name__)

class SimulationRunner:
    """Calls `kernel.run_tick()` on a background thread at a fixed interval."""

    def __init__(self, kernel: SimulationKernel, interval: float = config.TICK_INTERVAL):
        self.kernel = kernel
        self.interval = interval
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self):
        if self.running:
            return
        self._stop_event.clear()
        self._thread = threading.Thread(target=self.run, name="lanesim-runner", daemon=True)
        self._thread.start()
        logger.debug("Runner started (interval=%.3fs)", self.interval)

    def stop(self):
        self._stop_event.set()
        if self._thread:
            self._thread.join()
            self._thread = None
        logger.debug("Runner stopped at tick %d", self.kernel.state.tick_id)

    def run(self):
        while not self._stop_event.is_set():
            start = time.monotonic()
            self.kernel.run_tick()
            elapsed = time.monotonic() - start
            self._stop_event.wait(max(0.0, self.interval - elapsed))

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, *exc):
        self.stop()
        return False
