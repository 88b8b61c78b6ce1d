from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Iterator
from stratified_tank.helpers import read_fluid_table, InvalidConfiguration


@dataclass(frozen=True)
class Fluid:
    """
    A kind of fluid, as supplied by the host's fluid registry.
    Identity is the name: two Fluid objects with the same name are the same fluid.

    Parameters
    ----------
    name : str
        Unique identifier of the fluid
    density : int
        Density used to order layers; the denser fluid sits lower
    temperature : int, optional
        Base temperature [K] of the fluid when it carries no extra thermal energy. Defaults to 300
    conductivity : float, optional
        Thermal conductivity [-] of the fluid. Defaults to 1.0
    """
    name: str
    density: int = field(compare=False)
    temperature: int = field(default=300, compare=False)
    conductivity: float = field(default=1.0, compare=False)

    @property
    def sort_key(self):
        # Densest first; name breaks density ties
        return (-self.density, self.name)

    def __str__(self):
        return self.name


@dataclass
class FluidStack:
    fluid: Fluid | None
    amount: int = 0

    @classmethod
    def empty(cls) -> FluidStack:
        return cls(None, 0)

    def is_empty(self) -> bool:
        return self.fluid is None or self.amount < 1

    def copy(self, amount: int | None = None) -> FluidStack:
        return FluidStack(self.fluid, self.amount if amount is None else amount)

    def grow(self, amount: int):
        self.amount += amount

    def shrink(self, amount: int):
        self.amount -= amount

    def is_fluid_equal(self, other: FluidStack) -> bool:
        return self.fluid == other.fluid


class FluidRegistry:
    fluids: Dict[str, Fluid]

    def __init__(self, fluids: list[Fluid] | None = None):
        self.fluids = {}
        for fluid in fluids or []:
            self.register(fluid)

    def register(self, fluid: Fluid) -> Fluid:
        if fluid.name in self.fluids:
            raise InvalidConfiguration(f'Fluid {fluid.name} is already registered')
        self.fluids[fluid.name] = fluid
        return fluid

    def get(self, name: str) -> Fluid:
        return self.fluids[name]

    def __contains__(self, name: str) -> bool:
        return name in self.fluids

    def __iter__(self) -> Iterator[Fluid]:
        return iter(self.fluids.values())

    def __len__(self) -> int:
        return len(self.fluids)

    @classmethod
    def from_table(cls, path) -> FluidRegistry:
        """Builds a registry from a ';'-separated table with columns name, density[, temperature, conductivity]"""
        data_df = read_fluid_table(path)
        registry = cls()
        for row in data_df.itertuples(index=False):
            kwargs = {'name': str(row.name), 'density': int(row.density)}
            if 'temperature' in data_df.columns:
                kwargs['temperature'] = int(row.temperature)
            if 'conductivity' in data_df.columns:
                kwargs['conductivity'] = float(row.conductivity)
            registry.register(Fluid(**kwargs))
        return registry
