# src/stratified_tank/constants/tank.py
from __future__ import annotations
from dataclasses import dataclass
from .base import FrozenNamespace

@dataclass(frozen=True)
class TankDefaults(FrozenNamespace):
    bucket_volume: int = 1000            # default compartment capacity [mB]
    reference_temperature: int = 300     # shell base temperature and default target [K]
    conductivity: int = 5                # default shell conductivity [-]
    wall_factor: float = 0.95            # inner/outer edge ratio of the notional shell cube [-]
    fluid_conductivity: float = 1.0      # placeholder fluid conductivity [-]

TANK = TankDefaults()
