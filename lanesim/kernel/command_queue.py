import threading
from collections import deque
from typing import Deque
from lanesim.kernel.commands import Command

class CommandQueue:
    def __init__(self):
        self.queue: Deque[Command] = deque()
        self._lock = threading.Lock()

    def add(self, command: Command):
        with self._lock:
            self.queue.append(command)

    def pop_all(self) -> Deque[Command]:
        with self._lock:
            commands = self.queue
            self.queue = deque()
        return commands

    def clear(self):
        with self._lock:
            self.queue.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self.queue)
