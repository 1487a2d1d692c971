from abc import ABC, abstractmethod
from typing import Any
from lanesim.domain.models import LeadCommand

class Command(ABC):
    @abstractmethod
    def execute(self, kernel: Any):
        pass

class LeadControlCommand(Command):
    def __init__(self, kind: LeadCommand):
        self.kind = LeadCommand(kind)

    def execute(self, kernel: Any):
        kernel.state.lead_state = kernel.lead_system.apply_command(kernel.state.lead_state, self.kind)
        return kernel.state.lead_state

class StopLeadCommand(LeadControlCommand):
    def __init__(self):
        super().__init__(LeadCommand.STOP_LEAD)

class StartLeadCommand(LeadControlCommand):
    def __init__(self):
        super().__init__(LeadCommand.START_LEAD)
