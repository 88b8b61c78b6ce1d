# src/stratified_tank/constants/fluids.py
from __future__ import annotations
from stratified_tank.core.fluids import Fluid

WATER = Fluid('water', density = 1000, temperature = 300)
LAVA = Fluid('lava', density = 3000, temperature = 1300)
