from stratified_tank.sim.simulation_data import SimulationData
from stratified_tank.core.registry import SignalRegistry
from dataclasses import dataclass
import numpy as np

@dataclass
class SimulationResults:
    data: SimulationData
    tick_vector: np.ndarray
    signal_registry: SignalRegistry

    def to_dataframe(self):
        return self.data.to_dataframe(self.tick_vector, self.signal_registry)

    def get_signal(self, tank: int, signal: str) -> np.ndarray:
        col = self.signal_registry.col_index(f'tank_{tank}', signal)
        return self.data.values[:, col]

    def ticks_to_target(self, tank: int) -> int | None:
        """First recorded tick at which the shell of the compartment was at its target temperature"""
        reached = np.nonzero(self.get_signal(tank, 'shell_temperature') == self.get_signal(tank, 'target_temperature'))[0]
        return int(self.tick_vector[reached[0]]) if reached.size else None
