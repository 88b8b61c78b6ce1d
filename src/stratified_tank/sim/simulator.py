# stratified_tank/sim/simulator.py
from dataclasses import dataclass
from typing import Callable
import logging

from stratified_tank.components.thermal import ThermalTank
from stratified_tank.core.registry import SignalRegistry
from .config import SimulationConfig
from .state import SimulationState
from stratified_tank.sim.simulation_data import SimulationData
from stratified_tank.sim.results import SimulationResults

logger = logging.getLogger(__name__)

Driver = Callable[[ThermalTank, SimulationState], None]


@dataclass
class Simulator:
    """
    Drives a ThermalTank tick by tick, recording its state.
    The optional driver is called before every tick and may fill, drain, or change target temperatures.
    """
    tank: ThermalTank
    cfg: SimulationConfig
    driver: Driver | None = None

    def run(self) -> SimulationResults:
        self.state = SimulationState()
        self.state.init_tick_vector(self.cfg)
        self.signal_registry = self._create_signal_registry()

        sim_data = SimulationData()
        sim_data.create_empty_dataset(self.state.tick_vector, self.signal_registry)

        logger.info('Running %d ticks on %d tanks', self.cfg.ticks, self.tank.tanks)
        while self.state.tick < self.cfg.ticks:
            self._step(sim_data)
            self.state.tick += 1

        return SimulationResults(sim_data, self.state.tick_vector, self.signal_registry)

    def _create_signal_registry(self) -> SignalRegistry:
        registry = SignalRegistry()
        for i in range(self.tank.tanks):
            for signal in ('target_temperature', 'shell_temperature', 'fluid_amount'):
                registry.register(f'tank_{i}', signal)
            for fluid in self.cfg.tracked_fluids:
                registry.register(f'tank_{i}', f'fluid:{fluid.name}')
        return registry

    def _step(self, sim_data: SimulationData) -> None:
        if self.driver:
            self.driver(self.tank, self.state)
        self.tank.process_thermal()
        if self.state.is_recording_tick(self.cfg):
            self._save_simulation_data(sim_data)
            self.state.record_id += 1

    def _save_simulation_data(self, sim_data: SimulationData) -> None:
        row = self.state.record_id
        for i in range(self.tank.tanks):
            key = f'tank_{i}'
            sim_data.values[row, self.signal_registry.col_index(key, 'target_temperature')] = self.tank.target_temperature(i)
            sim_data.values[row, self.signal_registry.col_index(key, 'shell_temperature')] = self.tank.current_temperature(i)
            sim_data.values[row, self.signal_registry.col_index(key, 'fluid_amount')] = self.tank.fluid_amount(i)
            for fluid in self.cfg.tracked_fluids:
                if self.tank.amount_of(i, fluid) > 0:
                    sim_data.values[row, self.signal_registry.col_index(key, f'fluid:{fluid.name}')] = self.tank.fluid_temperature(i, fluid)
