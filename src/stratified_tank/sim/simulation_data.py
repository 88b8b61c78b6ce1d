from dataclasses import dataclass
import numpy as np
import pandas as pd
from stratified_tank.core.registry import SignalRegistry

@dataclass
class SimulationData:
    values: np.ndarray = None

    def create_empty_dataset(self, tick_vector, signal_registry: SignalRegistry):
        # Absent fluids are recorded as NaN
        self.values = np.full((len(tick_vector), len(signal_registry)), np.nan, dtype=np.float64)

    def to_dataframe(self, tick_vector, signal_registry: SignalRegistry) -> pd.DataFrame:
        return pd.DataFrame(self.values, columns = signal_registry.column_names(), index = pd.Index(tick_vector, name='tick'))
