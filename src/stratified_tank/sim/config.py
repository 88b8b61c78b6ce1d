# stratified_tank/sim/config.py
from dataclasses import dataclass
from typing import Tuple
from stratified_tank.core.fluids import Fluid
from stratified_tank.helpers import InvalidConfiguration

@dataclass(frozen=True)
class SimulationConfig:
    ticks: int = 1200                       # number of ticks to run
    record_every: int = 1                   # ticks between two recorded samples
    tracked_fluids: Tuple[Fluid, ...] = ()  # fluids whose temperature is recorded in every compartment

    def __post_init__(self):
        if self.ticks < 1:
            raise InvalidConfiguration(f'A simulation needs at least one tick. {self.ticks} was provided')
        if self.record_every < 1:
            raise InvalidConfiguration(f'The recording interval must be positive. {self.record_every} was provided')

    @property
    def record_count(self) -> int:
        return -(-self.ticks // self.record_every)
