from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, Iterator, List, Sequence, Tuple
from numbers import Real
import logging

from stratified_tank.core.fluids import Fluid, FluidStack
from stratified_tank.constants.tank import TANK, TankDefaults
from stratified_tank.helpers import InvalidConfiguration

logger = logging.getLogger(__name__)


class FluidAction(Enum):
    EXECUTE = 'execute'
    SIMULATE = 'simulate'

    def execute(self) -> bool:
        return self is FluidAction.EXECUTE

    def simulate(self) -> bool:
        return self is FluidAction.SIMULATE


class End(Enum):
    BOTTOM = 'bottom'
    TOP = 'top'

    @property
    def opposite(self) -> End:
        return End.TOP if self is End.BOTTOM else End.BOTTOM


ValidityPredicate = Callable[[int, End, Fluid], bool]


def accept_all(tank: int, end: End, fluid: Fluid) -> bool:
    return True


def per_tank_values(tanks: int, values, default, label: str) -> list:
    """
    Expands the values given for a tank into one value per compartment.
    Accepts no value (default for every compartment), a single value (shared), or exactly one value per compartment.
    """
    if values is None:
        values = []
    elif isinstance(values, Real):
        values = [values]
    values = list(values)
    match len(values):
        case 0:
            return [default] * tanks
        case 1:
            return values * tanks
        case n if n == tanks:
            return values
        case n:
            raise InvalidConfiguration(f'Must provide no {label}, one {label} or as many as tanks. {n} values were provided for {tanks} tanks')


@dataclass
class DrainResult:
    """Fluid removed by a drain call, one stack per fluid in the order it was drained"""
    stacks: List[FluidStack] = field(default_factory=list)

    @property
    def amount(self) -> int:
        return sum(stack.amount for stack in self.stacks)

    @property
    def fluid(self) -> Fluid | None:
        return self.stacks[0].fluid if self.stacks else None

    def is_empty(self) -> bool:
        return self.amount < 1

    def add(self, fluid: Fluid, amount: int):
        for stack in self.stacks:
            if stack.fluid == fluid:
                stack.grow(amount)
                return
        self.stacks.append(FluidStack(fluid, amount))

    def __iter__(self) -> Iterator[FluidStack]:
        return iter(self.stacks)


class Compartment:
    """
    One storage unit of a FractionalTank. Holds any number of fluids, keyed by fluid and ordered by density.
    Only the owning tank mutates it.
    """
    index: int
    capacity: int
    _layers: Dict[Fluid, int]

    def __init__(self, index: int, capacity: int):
        if capacity < 1:
            raise InvalidConfiguration(f'Capacity on tank {index} is not a positive value. {capacity} was provided')
        self.index = index
        self.capacity = capacity
        self._layers = {}

    def fluids(self, end: End = End.BOTTOM) -> List[Fluid]:
        ordered = sorted(self._layers, key=lambda fluid: fluid.sort_key)
        return ordered if end is End.BOTTOM else ordered[::-1]

    def contents(self) -> List[FluidStack]:
        return [FluidStack(fluid, self._layers[fluid]) for fluid in self.fluids()]

    def fluid_at(self, end: End) -> Fluid | None:
        fluids = self.fluids(end)
        return fluids[0] if fluids else None

    def amount_of(self, fluid: Fluid) -> int:
        return self._layers.get(fluid, 0)

    def fluid_amount(self) -> int:
        return sum(self._layers.values())

    def free_space(self) -> int:
        return self.capacity - self.fluid_amount()

    def fillable(self, amount: int) -> int:
        return max(0, min(amount, self.free_space()))

    def drainable(self, end: End, amount: int) -> List[Tuple[Fluid, int]]:
        # Contiguous run of layers starting at the given end
        plan = []
        remaining = amount
        for fluid in self.fluids(end):
            if remaining < 1:
                break
            taken = min(remaining, self._layers[fluid])
            plan.append((fluid, taken))
            remaining -= taken
        return plan

    def add(self, fluid: Fluid, amount: int) -> int:
        before = self._layers.get(fluid, 0)
        self._layers[fluid] = before + amount
        return before

    def remove(self, fluid: Fluid, amount: int) -> int:
        before = self._layers[fluid]
        if before > amount:
            self._layers[fluid] = before - amount
        else:
            del self._layers[fluid]
        return before

    def __contains__(self, fluid: Fluid) -> bool:
        return fluid in self._layers

    def __len__(self) -> int:
        return len(self._layers)


class FractionalTank:
    compartments: List[Compartment]
    is_fluid_valid: ValidityPredicate
    defaults: TankDefaults

    def __init__(self,
                 tanks: int,
                 capacities: Sequence[int] | int | None = None,
                 is_fluid_valid: ValidityPredicate | None = None,
                 defaults: TankDefaults = TANK):
        """
        A tank made of one or more compartments ("tanks"), each holding one or more fluids sorted with the densest at the bottom.

        Parameters
        ----------
        tanks : int
            Number of compartments. Must be 1 or more
        capacities : int or list, optional
            Capacity [mB] of the compartments. Either one value shared by all compartments, or one value per compartment.
            If not specified, every compartment holds one bucket volume
        is_fluid_valid : callable, optional
            Predicate (tank index, end, fluid) -> bool deciding which compartments accept which fluids. Defaults to accepting everything
        defaults : TankDefaults, optional
            Namespace of default values. Defaults to TANK
        """
        if tanks < 1:
            raise InvalidConfiguration(f'Number of tanks must be positive. {tanks} was provided')
        self.defaults = defaults
        self.is_fluid_valid = is_fluid_valid if is_fluid_valid else accept_all
        capacities = per_tank_values(tanks, capacities, defaults.bucket_volume, 'capacity')
        self.compartments = [Compartment(i, capacity) for i, capacity in enumerate(capacities)]
        logger.info('Created %s with %d tanks, capacities %s', type(self).__name__, tanks, capacities)

    # Queries
    @property
    def tanks(self) -> int:
        return len(self.compartments)

    def __len__(self) -> int:
        return len(self.compartments)

    def tank_capacity(self, tank: int) -> int:
        return self.compartments[tank].capacity

    def fluid_amount(self, tank: int) -> int:
        return self.compartments[tank].fluid_amount()

    def free_space(self, tank: int) -> int:
        return self.compartments[tank].free_space()

    def is_empty(self, tank: int) -> bool:
        return len(self.compartments[tank]) == 0

    def contents(self, tank: int) -> List[FluidStack]:
        """Fluids in the compartment, from bottom to top"""
        return self.compartments[tank].contents()

    def amount_of(self, tank: int, fluid: Fluid) -> int:
        return self.compartments[tank].amount_of(fluid)

    def fluid_in_tank(self, tank: int, end: End = End.BOTTOM) -> FluidStack:
        compartment = self.compartments[tank]
        fluid = compartment.fluid_at(end)
        if fluid is None:
            return FluidStack.empty()
        return FluidStack(fluid, compartment.amount_of(fluid))

    def is_valid(self, tank: int, end: End, fluid: Fluid) -> bool:
        return self.is_fluid_valid(tank, end, fluid)

    def view(self, tank: int, end: End = End.BOTTOM) -> TankView:
        if not 0 <= tank < self.tanks:
            raise IndexError(f'Tank index {tank} is out of range for {self.tanks} tanks')
        return TankView(self, tank, end)

    # Fill
    def fill(self, resource: FluidStack, action: FluidAction, end: End = End.BOTTOM) -> int:
        """Fills compartments in tank order. Returns the amount accepted"""
        _check_amount(resource.amount)
        remaining = resource.amount
        for tank in range(self.tanks):
            if remaining < 1:
                break
            remaining -= self.fill_tank(tank, resource.copy(remaining), action, end)
        return resource.amount - remaining

    def fill_tank(self, tank: int, resource: FluidStack, action: FluidAction, end: End = End.BOTTOM) -> int:
        _check_amount(resource.amount)
        compartment = self.compartments[tank]
        if resource.is_empty() or not self.is_valid(tank, end, resource.fluid):
            return 0
        fill_amount = compartment.fillable(resource.amount)
        if fill_amount > 0 and action.execute():
            before = compartment.add(resource.fluid, fill_amount)
            logger.debug('Tank %d: filled %d of %s (%d -> %d)', tank, fill_amount, resource.fluid, before, before + fill_amount)
            self._on_filled(tank, resource.fluid, before, before + fill_amount)
        return fill_amount

    # Drain
    def drain(self, resource: FluidStack | int, action: FluidAction, end: End = End.BOTTOM) -> DrainResult:
        """
        Drains the compartments in tank order.
        With a FluidStack, drains up to its amount of that fluid only. With an int, drains whatever is at the given end of the
        first non-empty compartment, moving on to the next layer only once a layer is exhausted; later compartments then only
        give up the fluid drained first.
        """
        result = DrainResult()
        requested = _requested_amount(resource)
        for tank in range(self.tanks):
            remaining = requested - result.amount
            if remaining < 1:
                break
            if isinstance(resource, FluidStack):
                selector = resource.copy(remaining)
            elif result.is_empty():
                selector = remaining
            else:
                selector = FluidStack(result.fluid, remaining)
            for stack in self.drain_tank(tank, selector, action, end):
                result.add(stack.fluid, stack.amount)
        return result

    def drain_tank(self, tank: int, resource: FluidStack | int, action: FluidAction, end: End = End.BOTTOM) -> DrainResult:
        compartment = self.compartments[tank]
        match resource:
            case FluidStack():
                _check_amount(resource.amount)
                if resource.is_empty() or resource.fluid not in compartment:
                    plan = []
                else:
                    plan = [(resource.fluid, min(resource.amount, compartment.amount_of(resource.fluid)))]
            case int():
                _check_amount(resource)
                plan = compartment.drainable(end, resource)
            case _:
                raise TypeError(f'Cannot drain tank {tank} by {resource!r}. Provide a FluidStack or an amount')
        result = DrainResult()
        for fluid, amount in plan:
            if amount < 1:
                continue
            if action.execute():
                before = compartment.remove(fluid, amount)
                logger.debug('Tank %d: drained %d of %s (%d -> %d)', tank, amount, fluid, before, before - amount)
                self._on_drained(tank, fluid, before, before - amount)
            result.add(fluid, amount)
        return result

    # Hooks called after a committed change of a layer's amount
    def _on_filled(self, tank: int, fluid: Fluid, before: int, after: int):
        pass

    def _on_drained(self, tank: int, fluid: Fluid, before: int, after: int):
        pass


class TankView:
    """
    Handle on one end of one compartment. Holds the tank and the compartment index, never the compartment itself.
    Fill and drain still respect the tank's validity predicate and the compartment's shared capacity.
    """
    tank: FractionalTank
    index: int
    end: End

    def __init__(self, tank: FractionalTank, index: int, end: End):
        self.tank = tank
        self.index = index
        self.end = end

    def get_fluid(self) -> FluidStack:
        return self.tank.fluid_in_tank(self.index, self.end)

    def get_fluid_amount(self) -> int:
        return self.tank.fluid_amount(self.index)

    def get_capacity(self) -> int:
        return self.tank.tank_capacity(self.index)

    def contents(self) -> List[FluidStack]:
        return self.tank.contents(self.index)

    def is_fluid_valid(self, fluid: Fluid) -> bool:
        return self.tank.is_valid(self.index, self.end, fluid)

    def fill(self, resource: FluidStack, action: FluidAction) -> int:
        return self.tank.fill_tank(self.index, resource, action, self.end)

    def drain(self, resource: FluidStack | int, action: FluidAction) -> DrainResult:
        return self.tank.drain_tank(self.index, resource, action, self.end)

    def __repr__(self):
        return f'TankView(tank={self.index}, end={self.end.value})'


def _requested_amount(resource: FluidStack | int) -> int:
    amount = resource.amount if isinstance(resource, FluidStack) else resource
    _check_amount(amount)
    return amount


def _check_amount(amount: int):
    if amount < 0:
        raise ValueError(f'Fluid amounts cannot be negative. {amount} was provided')
