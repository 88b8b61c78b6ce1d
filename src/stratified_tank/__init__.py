# Re-export a stable public API
from .core.fluids import Fluid, FluidStack, FluidRegistry
from .core.registry import SignalRegistry
from .components.tank import FractionalTank, TankView, Compartment, DrainResult, FluidAction, End, accept_all
from .components.thermal import ThermalTank, TankThermals, constant_conductivity, attribute_conductivity, shell_volume_for
from .constants import TANK, WATER, LAVA, override
from .helpers import TankError, InvalidConfiguration, FluidNotPresent
from .sim.config import SimulationConfig
from .sim.state import SimulationState
from .sim.results import SimulationResults
from .sim.simulator import Simulator

__all__ = [
    "Fluid", "FluidStack", "FluidRegistry", "SignalRegistry",
    "FractionalTank", "TankView", "Compartment", "DrainResult", "FluidAction", "End", "accept_all",
    "ThermalTank", "TankThermals", "constant_conductivity", "attribute_conductivity", "shell_volume_for",
    "TANK", "WATER", "LAVA", "override",
    "TankError", "InvalidConfiguration", "FluidNotPresent",
    "SimulationConfig", "SimulationState", "SimulationResults", "Simulator",
]
