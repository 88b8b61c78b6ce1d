from stratified_tank.sim.config import SimulationConfig
from dataclasses import dataclass
import numpy as np

@dataclass
class SimulationState:
    tick: int = 0
    record_id: int = 0
    tick_vector: np.ndarray | None = None

    def init_tick_vector(self, cfg: SimulationConfig) -> None:
        self.tick = 0
        self.record_id = 0
        self.tick_vector = np.arange(0, cfg.ticks, cfg.record_every)

    def is_recording_tick(self, cfg: SimulationConfig) -> bool:
        return self.tick % cfg.record_every == 0
