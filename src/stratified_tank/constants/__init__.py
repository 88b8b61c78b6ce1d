# src/stratified_tank/constants/__init__.py
from .tank import TANK
from .fluids import WATER, LAVA
from .base import override

__all__ = ["TANK", "WATER", "LAVA", "override"]
