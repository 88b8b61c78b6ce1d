from __future__ import annotations
from typing import Callable, Dict, Sequence
import logging

from stratified_tank.components.tank import FractionalTank, ValidityPredicate, per_tank_values
from stratified_tank.core.fluids import Fluid
from stratified_tank.constants.tank import TANK, TankDefaults
from stratified_tank.helpers import InvalidConfiguration, FluidNotPresent, truncated_div

logger = logging.getLogger(__name__)

ConductivityLookup = Callable[[Fluid], float]


def constant_conductivity(value: float = TANK.fluid_conductivity) -> ConductivityLookup:
    """Lookup giving every fluid the same conductivity. Stands in until fluids carry measured values"""
    def lookup(fluid: Fluid) -> float:
        return value
    return lookup


def attribute_conductivity(fluid: Fluid) -> float:
    return fluid.conductivity


def shell_volume_for(capacity: int, wall_factor: float = TANK.wall_factor) -> int:
    # Coarse stand-in for the wall mass: a cube enclosing the capacity, with its edge enlarged by 1/wall_factor.
    # Not a geometry model.
    length = capacity ** (1.0 / 3.0) / wall_factor
    return int(length ** 3 - capacity)


def _energy_step(difference: int, conductivity: float) -> int:
    # At least one unit moves towards the colder side
    energy_change = int(difference * conductivity)
    return max(energy_change, 1) if difference > 0 else min(energy_change, -1)


class TankThermals:
    """Thermal ledger of one compartment: the shell's energy and the energy of each fluid layer"""
    index: int
    target_temperature: int
    reference_temperature: int
    shell_energy: int
    shell_volume: int
    conductivity: float
    fluid_energy: Dict[Fluid, int]

    def __init__(self, index: int, capacity: int, conductivity: float, defaults: TankDefaults = TANK):
        if conductivity < 1:
            raise InvalidConfiguration(f'Tank {index} thermal conductivity must be positive. {conductivity} was provided')
        self.shell_volume = shell_volume_for(capacity, defaults.wall_factor)
        if self.shell_volume < 1:
            raise InvalidConfiguration(f'Tank {index} with capacity {capacity} is too small to have a shell volume')
        self.index = index
        self.conductivity = conductivity
        self.reference_temperature = defaults.reference_temperature
        self.target_temperature = defaults.reference_temperature
        self.shell_energy = 0
        self.fluid_energy = {}

    def current_temperature(self) -> int:
        return self.reference_temperature + truncated_div(self.shell_energy, self.shell_volume)


class ThermalTank(FractionalTank):
    """
    A FractionalTank whose fluids change temperature. Each compartment has a target temperature, set by the host, which
    represents what the compartment would settle at given its surroundings (climate, nearby heat sources, a heater's thermostat).

    Every tick, the shell of each compartment (the walls, not the fluids inside) gains or loses thermal energy moving towards
    the target. The shell then trades energy with the bottom layer of fluid, and each layer trades with the one above it,
    until the top layer has been reached.

    The temperature of the shell is

        T = 300 + e / V_shell

    and the temperature of a fluid is

        T = T_fluid + e / V

    where 'e' is the thermal energy held and 'V' the volume of fluid [mB]. Energy moving between two materials is

        de = (T1 - T2) * (C1 + C2) / 2

    with 'C1', 'C2' their thermal conductivities, and is never less than one unit.
    """
    tank_thermals: list[TankThermals]
    fluid_conductivity_lookup: ConductivityLookup

    def __init__(self,
                 tanks: int,
                 capacities: Sequence[int] | int | None = None,
                 conductivities: Sequence[float] | float | None = None,
                 is_fluid_valid: ValidityPredicate | None = None,
                 fluid_conductivity: ConductivityLookup | None = None,
                 defaults: TankDefaults = TANK):
        """
        Parameters
        ----------
        tanks : int
            Number of compartments. Must be 1 or more
        capacities : int or list, optional
            Capacity [mB] of the compartments, see FractionalTank
        conductivities : float or list, optional
            Thermal conductivity of the compartment shells. Either one value shared by all compartments, or one value per compartment.
            Each must be at least 1. Defaults to 5
        is_fluid_valid : callable, optional
            Predicate (tank index, end, fluid) -> bool, see FractionalTank
        fluid_conductivity : callable, optional
            Lookup fluid -> conductivity. Defaults to a constant 1.0 for every fluid
        defaults : TankDefaults, optional
            Namespace of default values. Defaults to TANK
        """
        super().__init__(tanks, capacities, is_fluid_valid, defaults)
        conductivities = per_tank_values(tanks, conductivities, defaults.conductivity, 'thermal conductivity')
        self.tank_thermals = [TankThermals(i, self.tank_capacity(i), conductivity, defaults)
                              for i, conductivity in enumerate(conductivities)]
        self.fluid_conductivity_lookup = fluid_conductivity if fluid_conductivity else constant_conductivity(defaults.fluid_conductivity)

    def target_temperature(self, tank: int) -> int:
        return self.tank_thermals[tank].target_temperature

    def set_target_temperature(self, tank: int, temperature: int) -> ThermalTank:
        self.tank_thermals[tank].target_temperature = temperature
        return self

    def current_temperature(self, tank: int) -> int:
        return self.tank_thermals[tank].current_temperature()

    def shell_volume(self, tank: int) -> int:
        return self.tank_thermals[tank].shell_volume

    def shell_energy(self, tank: int) -> int:
        return self.tank_thermals[tank].shell_energy

    def conductivity(self, tank: int) -> float:
        return self.tank_thermals[tank].conductivity

    def fluid_energy(self, tank: int, fluid: Fluid) -> int:
        thermal = self.tank_thermals[tank]
        if fluid not in thermal.fluid_energy:
            raise FluidNotPresent(f'{fluid} not present in tank {tank}')
        return thermal.fluid_energy[fluid]

    def fluid_temperature(self, tank: int, fluid: Fluid) -> int:
        thermal_energy = self.fluid_energy(tank, fluid)
        return int(thermal_energy / self.amount_of(tank, fluid) + fluid.temperature)

    def fluid_conductivity(self, fluid: Fluid) -> float:
        return self.fluid_conductivity_lookup(fluid)

    def process_thermal(self):
        """Runs one tick of heat exchange on every compartment"""
        for i, thermal in enumerate(self.tank_thermals):
            # External to shell
            tank_temperature = thermal.current_temperature()
            if tank_temperature != thermal.target_temperature:
                difference = thermal.target_temperature - tank_temperature
                energy_change = int(difference * thermal.conductivity)
                max_change = difference * thermal.shell_volume
                if difference > 0:
                    thermal.shell_energy += min(max(energy_change, 1), max_change)
                else:
                    thermal.shell_energy += max(min(energy_change, -1), max_change)

            fluids = self.compartments[i].fluids()
            if not fluids:
                continue

            # Shell to bottom fluid
            tank_temperature = thermal.current_temperature()
            prior_fluid = fluids[0]
            prior_temperature = self.fluid_temperature(i, prior_fluid)
            if prior_temperature != tank_temperature:
                conductivity = (thermal.conductivity + self.fluid_conductivity(prior_fluid)) / 2
                actual_change = _energy_step(tank_temperature - prior_temperature, conductivity)
                thermal.fluid_energy[prior_fluid] += actual_change
                thermal.shell_energy -= actual_change

            # Up through the layers
            prior_temperature = self.fluid_temperature(i, prior_fluid)
            for next_fluid in fluids[1:]:
                next_temperature = self.fluid_temperature(i, next_fluid)
                if next_temperature != prior_temperature:
                    conductivity = (self.fluid_conductivity(prior_fluid) + self.fluid_conductivity(next_fluid)) / 2
                    actual_change = _energy_step(prior_temperature - next_temperature, conductivity)
                    thermal.fluid_energy[next_fluid] += actual_change
                    thermal.fluid_energy[prior_fluid] -= actual_change
                prior_fluid = next_fluid
                prior_temperature = self.fluid_temperature(i, prior_fluid)

            logger.debug('Tank %d: shell at %d K (target %d K), %d layers', i, thermal.current_temperature(),
                         thermal.target_temperature, len(fluids))

    def _on_filled(self, tank: int, fluid: Fluid, before: int, after: int):
        # A new layer arrives at its base temperature; merged fluid dilutes the layer's energy
        if before == 0:
            self.tank_thermals[tank].fluid_energy[fluid] = 0

    def _on_drained(self, tank: int, fluid: Fluid, before: int, after: int):
        fluid_energy = self.tank_thermals[tank].fluid_energy
        if after == 0:
            del fluid_energy[fluid]
        else:
            # The fluid left behind keeps its temperature
            fluid_energy[fluid] = truncated_div(fluid_energy[fluid] * after, before)
